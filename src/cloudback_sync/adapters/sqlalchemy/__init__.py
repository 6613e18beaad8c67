"""SQLAlchemy adapter package for cloudback-sync state."""

from __future__ import annotations

from .repositories import SqlAlchemyDefinitionStateRepository
from .tables import backup_definition_table, create_all_tables, metadata
from .unit_of_work import (
    SqlAlchemyStateUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyDefinitionStateRepository",
    "SqlAlchemyStateUnitOfWork",
    "StartupError",
    "backup_definition_table",
    "create_all_tables",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
