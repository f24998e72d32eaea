"""
Mutation guard - decides whether an expense / quiniela line may be written

Rules, checked before any write:
- create: target day must not be in the future, and must not be finalized
- update: neither the current day nor the new day may be finalized (a record
  cannot be moved into or out of a closed day), and the new day must not be in
  the future
- delete: the record's day must not be finalized

Past, non-finalized days stay editable.
"""
from datetime import date
from enum import Enum

from app.application.ledger_store import LedgerStore
from app.domain.errors import DayFinalizedError, FutureDateError
from app.utils.clock import local_today


class RecordKind(str, Enum):
    EXPENSE = "gastos"
    QUINIELA = "transacciones"


class MutationGuard:
    """
    Usage:
        guard = MutationGuard(store, today=local_today(), kind=RecordKind.EXPENSE)
        guard.check_update(account_id, current_day=old.day_date, new_day=new_day)
    """

    def __init__(self, store: LedgerStore, today: date | None = None,
                 kind: RecordKind = RecordKind.EXPENSE):
        self.store = store
        self.today = today or local_today()
        self.kind = kind

    def check_create(self, account_id: int, day: date) -> None:
        if day > self.today:
            raise FutureDateError(
                f"No se pueden agregar {self.kind.value} a fechas futuras"
            )
        if self.store.is_day_finalized(account_id, day):
            raise DayFinalizedError(
                f"No se puede agregar {self.kind.value} a un día finalizado"
            )

    def check_update(self, account_id: int, current_day: date, new_day: date) -> None:
        if self._any_finalized(account_id, current_day, new_day):
            raise DayFinalizedError(
                f"No se puede editar {self.kind.value} de días finalizados"
            )
        if new_day > self.today:
            raise FutureDateError(
                f"No se pueden mover {self.kind.value} a fechas futuras"
            )

    def check_delete(self, account_id: int, day: date) -> None:
        if self.store.is_day_finalized(account_id, day):
            raise DayFinalizedError(
                f"No se puede eliminar {self.kind.value} de un día finalizado"
            )

    def _any_finalized(self, account_id: int, *days: date) -> bool:
        return any(self.store.is_day_finalized(account_id, d) for d in set(days))


def check_mutation_allowed(
    store: LedgerStore,
    account_id: int,
    day: date,
    new_day: date | None = None,
    today: date | None = None,
    kind: RecordKind = RecordKind.EXPENSE,
) -> None:
    """
    Single entry point for callers that only want a yes/no before showing a form.

    Without new_day the create rules apply to `day`; with new_day the update
    rules apply (day = where the record is now, new_day = where it goes).

    Raises:
        DayFinalizedError, FutureDateError
    """
    guard = MutationGuard(store, today=today, kind=kind)
    if new_day is None:
        guard.check_create(account_id, day)
    else:
        guard.check_update(account_id, current_day=day, new_day=new_day)
