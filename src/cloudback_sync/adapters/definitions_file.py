"""Loader for declared backup definitions stored as TOML.

Example::

    [[backup_definition]]
    platform = "GitHub"
    account = "testland"
    repository = "docs"

    [backup_definition.settings]
    enabled = true
    schedule = "Daily at 9 pm"
    storage = "Cloudback EU"
    retention = "Last 30 days"
"""

from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cloudback_sync.domain.import_id import SEPARATOR
from cloudback_sync.domain.model import BackupDefinition, Settings

if TYPE_CHECKING:
    from pathlib import Path


class DefinitionsFileError(ValueError):
    """Raised when a definitions file cannot be read or validated."""


class _SettingsEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool
    schedule: str
    storage: str
    retention: str


class _DefinitionEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    platform: str
    account: str
    subject_type: str | None = None
    subject_name: str | None = None
    repository: str | None = None
    settings: _SettingsEntry

    @field_validator("platform", "account", "subject_type", "subject_name", "repository")
    @classmethod
    def _no_separator(cls, value: str | None) -> str | None:
        # Identity fields must round-trip through an import identifier.
        if value is not None and SEPARATOR in value:
            raise ValueError(f"must not contain {SEPARATOR!r}: {value!r}")
        return value

    def to_domain(self) -> BackupDefinition:
        return BackupDefinition(
            platform=self.platform,
            account=self.account,
            subject_type=self.subject_type,
            subject_name=self.subject_name,
            repository=self.repository,
            settings=Settings(
                enabled=self.settings.enabled,
                schedule=self.settings.schedule,
                storage=self.settings.storage,
                retention=self.settings.retention,
            ),
        )


class _DefinitionsDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    backup_definition: list[_DefinitionEntry] = Field(default_factory=list)


def load_definitions(path: Path) -> list[BackupDefinition]:
    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except OSError as exc:
        raise DefinitionsFileError(f"Cannot read definitions file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise DefinitionsFileError(f"Invalid TOML in {path}: {exc}") from exc
    return parse_definitions(document, source=str(path))


def parse_definitions(
    document: dict[str, object],
    *,
    source: str = "<memory>",
) -> list[BackupDefinition]:
    try:
        parsed = _DefinitionsDocument.model_validate(document)
    except ValidationError as exc:
        raise DefinitionsFileError(f"Invalid backup definitions in {source}: {exc}") from exc
    return [entry.to_domain() for entry in parsed.backup_definition]
