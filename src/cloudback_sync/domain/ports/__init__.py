"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import DefinitionStateRepository
from .remote import RemoteStore
from .unit_of_work import StateUnitOfWork

__all__ = [
    "DefinitionStateRepository",
    "RemoteStore",
    "StateUnitOfWork",
]
