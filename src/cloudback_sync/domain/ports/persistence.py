"""Ports for persisting reconciled backup definitions locally."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cloudback_sync.domain.model import BackupDefinition, DefinitionKey


@runtime_checkable
class DefinitionStateRepository(Protocol):
    """Persistence contract for the last known state of each definition."""

    def get(self, key: DefinitionKey) -> BackupDefinition | None: ...

    def list(self) -> Sequence[BackupDefinition]: ...

    def save(self, record: BackupDefinition) -> None: ...

    def remove(self, key: DefinitionKey) -> None: ...


__all__ = ["DefinitionStateRepository"]
