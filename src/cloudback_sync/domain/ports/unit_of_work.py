"""Unit-of-work abstraction around the definition state repository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from cloudback_sync.domain.ports.persistence import DefinitionStateRepository


@runtime_checkable
class StateUnitOfWork(Protocol):
    @property
    def definitions(self) -> DefinitionStateRepository: ...

    def __enter__(self) -> StateUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


__all__ = ["StateUnitOfWork"]
