"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import and_, delete, insert, select

from cloudback_sync.domain.identity import definition_key
from cloudback_sync.domain.model import BackupDefinition, Settings

from .tables import backup_definition_table

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Row
    from sqlalchemy.orm import Session

    from cloudback_sync.domain.model import DefinitionKey


class SqlAlchemyDefinitionStateRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, key: DefinitionKey) -> BackupDefinition | None:
        stmt = select(backup_definition_table).where(_matches(key))
        row = self.session.execute(stmt).one_or_none()
        return None if row is None else _to_record(row)

    def list(self) -> list[BackupDefinition]:
        table = backup_definition_table
        stmt = select(table).order_by(
            table.c.platform,
            table.c.account,
            table.c.key_subject_type,
            table.c.key_subject_name,
        )
        return [_to_record(row) for row in self.session.execute(stmt)]

    def save(self, record: BackupDefinition) -> None:
        key = definition_key(record)
        self.session.execute(delete(backup_definition_table).where(_matches(key)))
        self.session.execute(
            insert(backup_definition_table).values(
                platform=key.platform,
                account=key.account,
                key_subject_type=key.subject_type,
                key_subject_name=key.subject_name,
                subject_type=record.subject_type,
                subject_name=record.subject_name,
                repository=record.repository,
                enabled=record.settings.enabled,
                schedule=record.settings.schedule,
                storage=record.settings.storage,
                retention=record.settings.retention,
            )
        )

    def remove(self, key: DefinitionKey) -> None:
        self.session.execute(delete(backup_definition_table).where(_matches(key)))


def _matches(key: DefinitionKey) -> ColumnElement[bool]:
    columns = backup_definition_table.c
    return and_(
        columns.platform == key.platform,
        columns.account == key.account,
        columns.key_subject_type == key.subject_type,
        columns.key_subject_name == key.subject_name,
    )


def _to_record(row: Row[tuple[object, ...]]) -> BackupDefinition:
    values = row._mapping  # noqa: SLF001
    return BackupDefinition(
        platform=values["platform"],
        account=values["account"],
        subject_type=values["subject_type"],
        subject_name=values["subject_name"],
        repository=values["repository"],
        settings=Settings(
            enabled=values["enabled"],
            schedule=values["schedule"],
            storage=values["storage"],
            retention=values["retention"],
        ),
    )
