"""Ports for the remote service holding backup definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cloudback_sync.domain.model import DefinitionKey, Settings


@runtime_checkable
class RemoteStore(Protocol):
    """Fetch and upsert backup definitions by their canonical key.

    Implementations raise :class:`~cloudback_sync.domain.errors.RemoteError`
    on transport failures and non-success responses.
    """

    def fetch_definition(self, key: DefinitionKey) -> Settings: ...

    def upsert_definition(self, key: DefinitionKey, settings: Settings) -> None: ...


__all__ = ["RemoteStore"]
