from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import func, select

from cloudback_sync.adapters.sqlalchemy.tables import backup_definition_table
from cloudback_sync.adapters.sqlalchemy.unit_of_work import SqlAlchemyStateUnitOfWork, StartupError
from cloudback_sync.domain.model import DefinitionKey, Settings
from tests.helpers.remote_store import make_definition

if TYPE_CHECKING:
    from collections.abc import Callable

DOCS_KEY = DefinitionKey("GitHub", "testland", "Repository", "docs")


def test_save_and_get_preserves_declared_identity(
    sqlite_unit_of_work: Callable[[], SqlAlchemyStateUnitOfWork],
) -> None:
    legacy = make_definition(repository="docs")

    with sqlite_unit_of_work() as uow:
        uow.definitions.save(legacy)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        stored = uow.definitions.get(DOCS_KEY)

    assert stored == legacy
    assert stored is not None
    assert stored.subject_type is None


def test_save_replaces_record_with_same_key(
    sqlite_unit_of_work: Callable[[], SqlAlchemyStateUnitOfWork],
) -> None:
    legacy = make_definition(repository="docs")
    generalized = make_definition(
        repository=None,
        subject_type="Repository",
        subject_name="docs",
        settings=Settings.disabled(),
    )

    with sqlite_unit_of_work() as uow:
        uow.definitions.save(legacy)
        uow.definitions.save(generalized)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        records = uow.definitions.list()
        count = uow.session.execute(
            select(func.count()).select_from(backup_definition_table)
        ).scalar_one()

    assert records == [generalized]
    assert count == 1


def test_list_orders_by_key(
    sqlite_unit_of_work: Callable[[], SqlAlchemyStateUnitOfWork],
) -> None:
    records = [
        make_definition(repository="zeta"),
        make_definition(platform="Bitbucket", repository="web"),
        make_definition(repository=None, subject_type="Project", subject_name="alpha"),
    ]

    with sqlite_unit_of_work() as uow:
        for record in records:
            uow.definitions.save(record)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        listed = uow.definitions.list()

    assert [(r.platform, r.subject_name or r.repository) for r in listed] == [
        ("Bitbucket", "web"),
        ("GitHub", "alpha"),
        ("GitHub", "zeta"),
    ]


def test_remove_deletes_record(
    sqlite_unit_of_work: Callable[[], SqlAlchemyStateUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        uow.definitions.save(make_definition())
        uow.commit()

    with sqlite_unit_of_work() as uow:
        uow.definitions.remove(DOCS_KEY)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        assert uow.definitions.get(DOCS_KEY) is None


def test_uncommitted_changes_roll_back_on_error(
    sqlite_unit_of_work: Callable[[], SqlAlchemyStateUnitOfWork],
) -> None:
    with pytest.raises(RuntimeError, match="boom"), sqlite_unit_of_work() as uow:
        uow.definitions.save(make_definition())
        raise RuntimeError("boom")

    with sqlite_unit_of_work() as uow:
        assert uow.definitions.list() == []


def test_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError, match="not initialised"):
        SqlAlchemyStateUnitOfWork()
