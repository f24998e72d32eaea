"""
Expense use cases - CRUD of the internal till, guarded by the day lock
"""
import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal

from app.application.day_guard import MutationGuard, RecordKind
from app.application.ledger_store import LedgerStore
from app.domain.errors import RecordNotFoundError
from app.domain.expense import Expense

logger = logging.getLogger(__name__)


class ListExpensesUseCase:
    def __init__(self, store: LedgerStore):
        self.store = store

    def execute(self, account_id: int, day: date) -> list[Expense]:
        return self.store.list_expenses(account_id, day)


class CreateExpenseUseCase:
    """
    Use case: record an expense

    Only today or a past day that is still open accepts new expenses.
    """

    def __init__(self, store: LedgerStore, today: date | None = None):
        self.store = store
        self.guard = MutationGuard(store, today=today, kind=RecordKind.EXPENSE)

    def execute(
        self,
        account_id: int,
        amount: Decimal,
        category: str,
        day: date,
        description: str = "",
        subcategory: str | None = None,
    ) -> Expense:
        """
        Raises:
            LedgerValidationError, FutureDateError, DayFinalizedError
        """
        expense = Expense.create(
            account_id=account_id,
            amount=amount,
            category=category,
            subcategory=subcategory,
            description=description,
            day_date=day,
        )
        self.guard.check_create(account_id, day)

        with self.store.unit_of_work():
            created = self.store.add_expense(expense)

        logger.info(
            "Expense created: account=%s id=%s amount=%s category=%s day=%s",
            account_id, created.id, created.amount, created.category, day.isoformat(),
        )
        return created


class UpdateExpenseUseCase:
    def __init__(self, store: LedgerStore, today: date | None = None):
        self.store = store
        self.guard = MutationGuard(store, today=today, kind=RecordKind.EXPENSE)

    def execute(
        self,
        expense_id: int,
        account_id: int,
        amount: Decimal,
        category: str,
        day: date,
        description: str = "",
        subcategory: str | None = None,
    ) -> Expense:
        """
        Replace every editable field of an expense (full update, like PUT)

        Raises:
            RecordNotFoundError, LedgerValidationError, DayFinalizedError,
            FutureDateError
        """
        existing = self.store.get_expense(account_id, expense_id)
        if existing is None:
            raise RecordNotFoundError("Gasto no encontrado")

        validated = Expense.create(
            account_id=account_id,
            amount=amount,
            category=category,
            subcategory=subcategory,
            description=description,
            day_date=day,
        )
        self.guard.check_update(account_id, current_day=existing.day_date, new_day=day)

        with self.store.unit_of_work():
            updated = self.store.save_expense(replace(validated, id=existing.id))

        logger.info(
            "Expense updated: account=%s id=%s amount=%s day=%s",
            account_id, expense_id, updated.amount, day.isoformat(),
        )
        return updated


class DeleteExpenseUseCase:
    """Use case: soft-delete an expense (is_active=False, row kept)"""

    def __init__(self, store: LedgerStore):
        self.store = store
        self.guard = MutationGuard(store, kind=RecordKind.EXPENSE)

    def execute(self, expense_id: int, account_id: int) -> None:
        existing = self.store.get_expense(account_id, expense_id)
        if existing is None:
            raise RecordNotFoundError("Gasto no encontrado")

        self.guard.check_delete(account_id, existing.day_date)

        with self.store.unit_of_work():
            self.store.save_expense(replace(existing, is_active=False))

        logger.info(
            "Expense deleted: account=%s id=%s day=%s",
            account_id, expense_id, existing.day_date.isoformat(),
        )
