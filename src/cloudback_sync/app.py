"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from cloudback_sync.adapters.cloudback import CloudbackClient
from cloudback_sync.adapters.definitions_file import load_definitions
from cloudback_sync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyStateUnitOfWork,
    is_started,
    startup,
)
from cloudback_sync.config.cloudback import get_cloudback_config
from cloudback_sync.domain.lifecycle import BackupDefinitionLifecycle
from cloudback_sync.domain.ports.unit_of_work import StateUnitOfWork
from cloudback_sync.domain.reconcile import (
    ApplyResult,
    ReconcilePlan,
    apply_plan,
    import_into_state,
    plan_changes,
    refresh_state,
)

if TYPE_CHECKING:
    from pathlib import Path

    from cloudback_sync.domain.model import BackupDefinition
    from cloudback_sync.domain.ports.remote import RemoteStore

UnitOfWorkFactory = Callable[[], StateUnitOfWork]


log = getLogger(__name__)


def _state_factory(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
    return SqlAlchemyStateUnitOfWork


def _lifecycle(store: RemoteStore | None, api_key: str | None) -> BackupDefinitionLifecycle:
    effective_store = store or CloudbackClient(config=get_cloudback_config(api_key=api_key))
    return BackupDefinitionLifecycle(effective_store)


def plan_definitions(
    path: Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ReconcilePlan:
    """Compare declared definitions with persisted state without calling the service."""

    declared = load_definitions(path)
    with _state_factory(unit_of_work_factory)() as uow:
        persisted = uow.definitions.list()
    return plan_changes(declared, persisted)


def apply_definitions(
    path: Path,
    *,
    store: RemoteStore | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    api_key: str | None = None,
) -> ApplyResult:
    """Reconcile declared definitions against the service and persist the result."""

    effective_uow = _state_factory(unit_of_work_factory)
    plan = plan_definitions(path, unit_of_work_factory=effective_uow)
    log.info("Applying %s backup definition action(s) from %s", len(plan), path)

    result = apply_plan(
        plan,
        lifecycle=_lifecycle(store, api_key),
        unit_of_work_factory=effective_uow,
    )

    log.info(
        f"Finished apply: created={result.created}, updated={result.updated}, "
        f"deleted={result.deleted}"
    )
    return result


def refresh_definitions(
    *,
    store: RemoteStore | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    api_key: str | None = None,
) -> list[BackupDefinition]:
    """Read every persisted definition from the service."""

    refreshed = refresh_state(
        lifecycle=_lifecycle(store, api_key),
        unit_of_work_factory=_state_factory(unit_of_work_factory),
    )
    log.info("Refreshed %s backup definition(s)", len(refreshed))
    return refreshed


def import_definition(
    import_id: str,
    *,
    store: RemoteStore | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    api_key: str | None = None,
) -> BackupDefinition:
    """Import a remote definition by identifier into local state."""

    return import_into_state(
        import_id,
        lifecycle=_lifecycle(store, api_key),
        unit_of_work_factory=_state_factory(unit_of_work_factory),
    )


def list_definitions(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[BackupDefinition]:
    with _state_factory(unit_of_work_factory)() as uow:
        return list(uow.definitions.list())
