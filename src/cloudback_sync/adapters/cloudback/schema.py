"""Cloudback wire schemas for backup definition operations."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cloudback_sync.domain.model import DefinitionKey, Settings


def _null_to_empty(value: object) -> object:
    return "" if value is None else value


class CloudbackBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DefinitionSettingsPayload(CloudbackBaseModel):
    enabled: bool = False
    schedule: str = ""
    storage: str = ""
    retention: str = ""

    _normalize_strings = field_validator("schedule", "storage", "retention", mode="before")(
        _null_to_empty
    )

    @field_validator("enabled", mode="before")
    @classmethod
    def _null_to_false(cls, value: object) -> object:
        return False if value is None else value

    @classmethod
    def from_settings(cls, settings: Settings) -> DefinitionSettingsPayload:
        return cls(
            enabled=settings.enabled,
            schedule=settings.schedule,
            storage=settings.storage,
            retention=settings.retention,
        )

    def to_settings(self) -> Settings:
        return Settings(
            enabled=self.enabled,
            schedule=self.schedule,
            storage=self.storage,
            retention=self.retention,
        )


class DefinitionKeyPayload(CloudbackBaseModel):
    platform: str
    account: str
    subject_type: str = Field(alias="subjectType")
    subject_name: str = Field(alias="subjectName")

    @classmethod
    def from_key(cls, key: DefinitionKey) -> DefinitionKeyPayload:
        return cls(
            platform=key.platform,
            account=key.account,
            subject_type=key.subject_type,
            subject_name=key.subject_name,
        )


class BackupDefinitionPayload(DefinitionKeyPayload):
    """Request body of ``/ops/definition/update``."""

    settings: DefinitionSettingsPayload = Field(default_factory=DefinitionSettingsPayload)

    @classmethod
    def from_key_and_settings(
        cls, key: DefinitionKey, settings: Settings
    ) -> BackupDefinitionPayload:
        return cls(
            platform=key.platform,
            account=key.account,
            subject_type=key.subject_type,
            subject_name=key.subject_name,
            settings=DefinitionSettingsPayload.from_settings(settings),
        )


class FetchedDefinitionPayload(CloudbackBaseModel):
    """Response body of ``/ops/definition/get``.

    Only the settings are read; the echoed identity fields are ignored.
    """

    settings: DefinitionSettingsPayload = Field(default_factory=DefinitionSettingsPayload)

    @field_validator("settings", mode="before")
    @classmethod
    def _null_settings(cls, value: object) -> object:
        return {} if value is None else value
