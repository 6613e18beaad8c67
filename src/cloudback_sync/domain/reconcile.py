"""Application services reconciling declared definitions with persisted state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import DuplicateDefinitionError
from .identity import definition_key

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .lifecycle import BackupDefinitionLifecycle
    from .model import BackupDefinition, DefinitionKey
    from .ports.unit_of_work import StateUnitOfWork

log = getLogger(__name__)


class ActionKind(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(slots=True, frozen=True)
class PlannedAction:
    kind: ActionKind
    key: DefinitionKey
    record: BackupDefinition


@dataclass(slots=True)
class ReconcilePlan:
    """Ordered lifecycle actions: creates and updates first, then deletes."""

    actions: list[PlannedAction] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.actions)


@dataclass(slots=True)
class ApplyResult:
    """Outcome of applying a plan."""

    created: int = 0
    updated: int = 0
    deleted: int = 0


def plan_changes(
    declared: Iterable[BackupDefinition],
    persisted: Iterable[BackupDefinition],
) -> ReconcilePlan:
    """Match declared records against persisted ones by their canonical key.

    Settings are not compared: every declared record that already exists is
    planned as an update, because the upsert always submits settings whole.
    """

    declared_by_key: dict[DefinitionKey, BackupDefinition] = {}
    for record in declared:
        key = definition_key(record)
        if key in declared_by_key:
            raise DuplicateDefinitionError(f"Backup definition {key} is declared more than once")
        declared_by_key[key] = record

    persisted_by_key = {definition_key(record): record for record in persisted}

    plan = ReconcilePlan()
    for key, record in declared_by_key.items():
        kind = ActionKind.UPDATE if key in persisted_by_key else ActionKind.CREATE
        plan.actions.append(PlannedAction(kind=kind, key=key, record=record))
    for key in sorted(persisted_by_key.keys() - declared_by_key.keys()):
        plan.actions.append(
            PlannedAction(kind=ActionKind.DELETE, key=key, record=persisted_by_key[key])
        )
    return plan


def apply_plan(
    plan: ReconcilePlan,
    *,
    lifecycle: BackupDefinitionLifecycle,
    unit_of_work_factory: Callable[[], StateUnitOfWork],
) -> ApplyResult:
    """Execute a plan action by action, committing state after each one.

    The first failure aborts the run; state committed for earlier actions stays.
    """

    result = ApplyResult()
    for action in plan.actions:
        log.info("Applying %s for %s", action.kind, action.key)
        with unit_of_work_factory() as uow:
            if action.kind is ActionKind.CREATE:
                uow.definitions.save(lifecycle.create(action.record))
                result.created += 1
            elif action.kind is ActionKind.UPDATE:
                uow.definitions.save(lifecycle.update(action.record))
                result.updated += 1
            else:
                lifecycle.delete(action.record)
                uow.definitions.remove(action.key)
                result.deleted += 1
            uow.commit()
    return result


def refresh_state(
    *,
    lifecycle: BackupDefinitionLifecycle,
    unit_of_work_factory: Callable[[], StateUnitOfWork],
) -> list[BackupDefinition]:
    """Read every persisted definition from the remote store and save the result."""

    refreshed: list[BackupDefinition] = []
    with unit_of_work_factory() as uow:
        for prior in uow.definitions.list():
            current = lifecycle.read(prior)
            uow.definitions.save(current)
            refreshed.append(current)
        uow.commit()
    return refreshed


def import_into_state(
    import_id: str,
    *,
    lifecycle: BackupDefinitionLifecycle,
    unit_of_work_factory: Callable[[], StateUnitOfWork],
) -> BackupDefinition:
    record = lifecycle.import_definition(import_id)
    with unit_of_work_factory() as uow:
        uow.definitions.save(record)
        uow.commit()
    return record


__all__ = [
    "ActionKind",
    "ApplyResult",
    "PlannedAction",
    "ReconcilePlan",
    "apply_plan",
    "import_into_state",
    "plan_changes",
    "refresh_state",
]
