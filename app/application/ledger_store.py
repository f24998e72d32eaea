"""
Abstract ledger storage interface

Use cases talk to this port only, so the day-closing rules run the same against
PostgreSQL (SqlLedgerStore) and the in-memory store the tests run against
(InMemoryLedgerStore). The API always serves SqlLedgerStore.

Conventions every implementation follows:
- every read is scoped to one account_id
- expense / quiniela reads only see active rows (soft-deleted rows stay stored)
- lists of rows are newest first
- date ranges are inclusive on both ends
- writes only become durable inside unit_of_work()
"""
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date, datetime
from decimal import Decimal

from app.domain.daily_balance import DailyBalance
from app.domain.draw_schedule import DrawSchedule
from app.domain.expense import Expense
from app.domain.quiniela import QuinielaTransaction, TransactionType


class LedgerStore(ABC):
    """Persistence collaborator of the daily ledger"""

    # --- expenses ---

    @abstractmethod
    def list_expenses(self, account_id: int, day: date) -> list[Expense]:
        """Active expenses of one exact day"""

    @abstractmethod
    def get_expense(self, account_id: int, expense_id: int) -> Expense | None:
        """Active expense by id, None when missing or owned by someone else"""

    @abstractmethod
    def add_expense(self, expense: Expense) -> Expense:
        """Insert and return the expense with its id assigned"""

    @abstractmethod
    def save_expense(self, expense: Expense) -> Expense:
        """Overwrite every field of an existing expense (including is_active)"""

    @abstractmethod
    def sum_expenses(self, account_id: int, start: date, end: date) -> Decimal:
        """Sum of active expense amounts with start <= day_date <= end"""

    # --- quiniela transactions ---

    @abstractmethod
    def list_quiniela_transactions(self, account_id: int, day: date) -> list[QuinielaTransaction]:
        """Active quiniela lines of one exact day"""

    @abstractmethod
    def get_quiniela_transaction(self, account_id: int, transaction_id: int) -> QuinielaTransaction | None:
        """Active quiniela line by id"""

    @abstractmethod
    def add_quiniela_transaction(self, transaction: QuinielaTransaction) -> QuinielaTransaction:
        """Insert and return the line with its id assigned"""

    @abstractmethod
    def save_quiniela_transaction(self, transaction: QuinielaTransaction) -> QuinielaTransaction:
        """Overwrite every field of an existing line"""

    @abstractmethod
    def sum_quiniela(
        self, account_id: int, start: date, end: date, tx_type: TransactionType
    ) -> Decimal:
        """Sum of active quiniela amounts of one type in [start, end]"""

    # --- daily balance snapshots ---

    @abstractmethod
    def get_daily_balance(self, account_id: int, day: date) -> DailyBalance | None:
        pass

    @abstractmethod
    def upsert_daily_balance(self, balance: DailyBalance) -> None:
        """Insert, or overwrite the existing snapshot of the same (account, day)"""

    # --- finalized day markers ---

    @abstractmethod
    def is_day_finalized(self, account_id: int, day: date) -> bool:
        pass

    @abstractmethod
    def add_finalized_day(self, account_id: int, day: date, finalized_at: datetime) -> None:
        """
        Raises:
            DuplicateRecordError: the (account, day) marker already exists
        """

    @abstractmethod
    def list_finalized_days(self, account_id: int) -> list[date]:
        """Finalized days, newest first"""

    # --- draw schedules ---

    @abstractmethod
    def list_draw_schedules(self, account_id: int) -> list[DrawSchedule]:
        """Active custom schedules ordered by modality_id (empty if none)"""

    @abstractmethod
    def replace_draw_schedules(self, account_id: int, schedules: list[DrawSchedule]) -> None:
        """Deactivate the current schedules and store the given ones"""

    # --- transactions ---

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager[None]:
        """
        All writes inside the block are applied together or not at all.

        Usage:
            with store.unit_of_work():
                store.upsert_daily_balance(snapshot)
                store.add_finalized_day(account_id, day, now)
        """
