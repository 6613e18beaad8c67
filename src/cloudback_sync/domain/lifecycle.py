"""Lifecycle operations for backup definitions.

Each operation resolves the record's identity first and then issues at most one
remote call. Create, update and delete are unconditional upserts; delete is a
soft delete that submits disabled settings. Remote failures propagate to the
caller untouched.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .identity import definition_key
from .import_id import parse_import_id
from .model import Settings

if TYPE_CHECKING:
    from .model import BackupDefinition, DefinitionKey
    from .ports.remote import RemoteStore

log = getLogger(__name__)


class BackupDefinitionLifecycle:
    """Reconcile local backup definition records against a remote store."""

    def __init__(self, store: RemoteStore) -> None:
        self._store = store

    def create(self, planned: BackupDefinition) -> BackupDefinition:
        """Upsert the planned settings and return the planned record unchanged."""

        key = definition_key(planned)
        self._store.upsert_definition(key, planned.settings)
        _log_updated(key, planned)
        return planned

    # The remote upsert has no existence check, so update is create.
    update = create

    def read(self, prior: BackupDefinition) -> BackupDefinition:
        """Refresh the settings of a persisted record from the remote store.

        Identity fields are returned exactly as persisted.
        """

        key = definition_key(prior)
        settings = self._store.fetch_definition(key)
        return prior.with_settings(settings)

    def delete(self, prior: BackupDefinition) -> BackupDefinition:
        """Disable the remote definition; it is never removed server-side."""

        key = definition_key(prior)
        disabled = prior.with_settings(Settings.disabled())
        self._store.upsert_definition(key, disabled.settings)
        _log_updated(key, disabled)
        return disabled

    def import_definition(self, import_id: str) -> BackupDefinition:
        """Build a full record from an import identifier and the remote settings."""

        parsed = parse_import_id(import_id)
        key = definition_key(parsed)
        settings = self._store.fetch_definition(key)
        log.info("Imported backup definition %s", key)
        return parsed.with_settings(settings)


def _log_updated(key: DefinitionKey, record: BackupDefinition) -> None:
    settings = record.settings
    log.debug(
        "updated backup definition %s: %s enabled=%s schedule=%r storage=%r retention=%r",
        key,
        record.identity_fields(),
        settings.enabled,
        settings.schedule,
        settings.storage,
        settings.retention,
    )


__all__ = ["BackupDefinitionLifecycle"]
