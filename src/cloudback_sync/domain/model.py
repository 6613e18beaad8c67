"""Backup definition domain model.

A backup definition is addressed on the remote side by
``(platform, account, subject_type, subject_name)``. Locally a record may carry
its subject either through the deprecated ``repository`` field or through the
generalized ``subject_type``/``subject_name`` pair; the identity types below
capture both shapes so that downstream code only ever deals with a
:class:`DefinitionKey`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final

REPOSITORY_SUBJECT_TYPE: Final[str] = "Repository"


@dataclass(slots=True, frozen=True)
class Settings:
    """Scheduling settings of a backup definition, always submitted whole."""

    enabled: bool
    schedule: str = ""
    storage: str = ""
    retention: str = ""

    @classmethod
    def disabled(cls) -> Settings:
        return cls(enabled=False)


@dataclass(slots=True, frozen=True)
class LegacyIdentity:
    """Deprecated single-field addressing, implying a ``Repository`` subject."""

    repository: str

    def canonical(self) -> tuple[str, str]:
        return REPOSITORY_SUBJECT_TYPE, self.repository


@dataclass(slots=True, frozen=True)
class SubjectIdentity:
    """Generalized ``(subject_type, subject_name)`` addressing."""

    subject_type: str
    subject_name: str

    def canonical(self) -> tuple[str, str]:
        return self.subject_type, self.subject_name


type Identity = LegacyIdentity | SubjectIdentity


@dataclass(slots=True, frozen=True, order=True)
class DefinitionKey:
    """Canonical remote address of a backup definition."""

    platform: str
    account: str
    subject_type: str
    subject_name: str

    def __str__(self) -> str:
        return f"{self.platform}/{self.account}/{self.subject_type}/{self.subject_name}"


@dataclass(slots=True, frozen=True, kw_only=True)
class BackupDefinition:
    """Locally declared (or persisted) backup definition record."""

    platform: str
    account: str
    settings: Settings
    subject_type: str | None = None
    subject_name: str | None = None
    repository: str | None = None

    def with_settings(self, settings: Settings) -> BackupDefinition:
        return replace(self, settings=settings)

    def identity_fields(self) -> dict[str, str]:
        """Return the identity fields that are set, keyed by attribute name."""

        fields = {"platform": self.platform, "account": self.account}
        for name in ("subject_type", "subject_name", "repository"):
            value = getattr(self, name)
            if value is not None:
                fields[name] = value
        return fields


__all__ = [
    "REPOSITORY_SUBJECT_TYPE",
    "BackupDefinition",
    "DefinitionKey",
    "Identity",
    "LegacyIdentity",
    "Settings",
    "SubjectIdentity",
]
