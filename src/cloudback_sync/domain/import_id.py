"""Import identifier parsing.

Two ``/``-separated shapes are accepted, with every segment non-empty:

- ``platform/account/repository`` (legacy)
- ``platform/account/subject_type/subject_name`` (generalized)

Segments cannot contain ``/``; there is no escaping.
"""

from __future__ import annotations

from typing import Final

from .errors import ImportIdFormatError
from .identity import identity_of
from .model import BackupDefinition, LegacyIdentity, Settings

SEPARATOR: Final[str] = "/"
_LEGACY_SEGMENTS: Final[int] = 3
_SUBJECT_SEGMENTS: Final[int] = 4


def parse_import_id(import_id: str) -> BackupDefinition:
    """Parse an import identifier into a record with placeholder settings."""

    parts = import_id.split(SEPARATOR)
    if len(parts) not in {_LEGACY_SEGMENTS, _SUBJECT_SEGMENTS} or not all(parts):
        raise ImportIdFormatError(import_id)

    if len(parts) == _LEGACY_SEGMENTS:
        platform, account, repository = parts
        return BackupDefinition(
            platform=platform,
            account=account,
            repository=repository,
            settings=Settings.disabled(),
        )

    platform, account, subject_type, subject_name = parts
    return BackupDefinition(
        platform=platform,
        account=account,
        subject_type=subject_type,
        subject_name=subject_name,
        settings=Settings.disabled(),
    )


def format_import_id(record: BackupDefinition) -> str:
    """Render the identifier that imports ``record`` in its own identity scheme."""

    identity = identity_of(record)
    if isinstance(identity, LegacyIdentity):
        segments = (record.platform, record.account, identity.repository)
    else:
        segments = (record.platform, record.account, *identity.canonical())
    return SEPARATOR.join(segments)


__all__ = ["SEPARATOR", "format_import_id", "parse_import_id"]
