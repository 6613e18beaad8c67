"""SQLAlchemy table metadata for persisted backup definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Column, MetaData, String, Table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

metadata = MetaData()

backup_definition_table = Table(
    "backup_definitions",
    metadata,
    # canonical key
    Column("platform", String, primary_key=True),
    Column("account", String, primary_key=True),
    Column("key_subject_type", String, primary_key=True),
    Column("key_subject_name", String, primary_key=True),
    # identity as declared
    Column("subject_type", String, nullable=True),
    Column("subject_name", String, nullable=True),
    Column("repository", String, nullable=True),
    # settings
    Column("enabled", Boolean, nullable=False),
    Column("schedule", String, nullable=False, default=""),
    Column("storage", String, nullable=False, default=""),
    Column("retention", String, nullable=False, default=""),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine)
