"""Identity resolution for backup definition records.

Precedence, evaluated strictly in this order:

1. both ``subject_type`` and ``subject_name`` set -> generalized identity, verbatim
2. ``repository`` set -> legacy identity, subject type ``Repository``
3. otherwise -> :class:`MissingIdentityError`

A record with only one of the generalized fields and no ``repository`` falls
through to rule 3; there is no separate partial-identity error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import MissingIdentityError
from .model import DefinitionKey, LegacyIdentity, SubjectIdentity

if TYPE_CHECKING:
    from .model import BackupDefinition, Identity


def identity_of(record: BackupDefinition) -> Identity:
    """Return the tagged identity a record is addressed by."""

    if record.subject_type is not None and record.subject_name is not None:
        return SubjectIdentity(record.subject_type, record.subject_name)
    if record.repository is not None:
        return LegacyIdentity(record.repository)
    raise MissingIdentityError


def resolve_identity(record: BackupDefinition) -> tuple[str, str]:
    """Return the canonical ``(subject_type, subject_name)`` pair of a record."""

    return identity_of(record).canonical()


def definition_key(record: BackupDefinition) -> DefinitionKey:
    subject_type, subject_name = resolve_identity(record)
    return DefinitionKey(
        platform=record.platform,
        account=record.account,
        subject_type=subject_type,
        subject_name=subject_name,
    )


__all__ = ["definition_key", "identity_of", "resolve_identity"]
