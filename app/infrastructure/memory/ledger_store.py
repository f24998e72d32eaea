"""
InMemoryLedgerStore - process-local LedgerStore used by the test suite
"""
import copy
import itertools
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

from app.application.ledger_store import LedgerStore
from app.domain.daily_balance import DailyBalance
from app.domain.draw_schedule import DrawSchedule
from app.domain.errors import DuplicateRecordError
from app.domain.expense import Expense
from app.domain.quiniela import QuinielaTransaction, TransactionType
from app.utils.money import to_money


class InMemoryLedgerStore(LedgerStore):
    """
    Dict-backed store. Rows are copied in and out so callers never hold a
    reference to stored state; unit_of_work() restores a deep copy of the
    whole state when the block raises.
    """

    def __init__(self):
        self._expenses: dict[int, Expense] = {}
        self._quiniela: dict[int, QuinielaTransaction] = {}
        self._balances: dict[tuple[int, date], DailyBalance] = {}
        self._finalized: dict[tuple[int, date], datetime] = {}
        self._schedules: dict[int, list[DrawSchedule]] = {}
        self._ids = itertools.count(1)

    # --- expenses ---

    def list_expenses(self, account_id: int, day: date) -> list[Expense]:
        rows = [
            e for e in self._expenses.values()
            if e.account_id == account_id and e.day_date == day and e.is_active
        ]
        return [replace(e) for e in sorted(rows, key=lambda e: e.id, reverse=True)]

    def get_expense(self, account_id: int, expense_id: int) -> Expense | None:
        row = self._expenses.get(expense_id)
        if row is None or row.account_id != account_id or not row.is_active:
            return None
        return replace(row)

    def add_expense(self, expense: Expense) -> Expense:
        stored = replace(expense, id=next(self._ids))
        self._expenses[stored.id] = stored
        return replace(stored)

    def save_expense(self, expense: Expense) -> Expense:
        current = self._expenses.get(expense.id)
        if current is None or current.account_id != expense.account_id:
            raise KeyError(expense.id)
        self._expenses[expense.id] = replace(expense)
        return replace(expense)

    def sum_expenses(self, account_id: int, start: date, end: date) -> Decimal:
        return to_money(sum(
            (e.amount for e in self._expenses.values()
             if e.account_id == account_id and e.is_active and start <= e.day_date <= end),
            Decimal("0"),
        ))

    # --- quiniela transactions ---

    def list_quiniela_transactions(self, account_id: int, day: date) -> list[QuinielaTransaction]:
        rows = [
            t for t in self._quiniela.values()
            if t.account_id == account_id and t.day_date == day and t.is_active
        ]
        return [replace(t) for t in sorted(rows, key=lambda t: t.id, reverse=True)]

    def get_quiniela_transaction(self, account_id: int, transaction_id: int) -> QuinielaTransaction | None:
        row = self._quiniela.get(transaction_id)
        if row is None or row.account_id != account_id or not row.is_active:
            return None
        return replace(row)

    def add_quiniela_transaction(self, transaction: QuinielaTransaction) -> QuinielaTransaction:
        stored = replace(transaction, id=next(self._ids))
        self._quiniela[stored.id] = stored
        return replace(stored)

    def save_quiniela_transaction(self, transaction: QuinielaTransaction) -> QuinielaTransaction:
        current = self._quiniela.get(transaction.id)
        if current is None or current.account_id != transaction.account_id:
            raise KeyError(transaction.id)
        self._quiniela[transaction.id] = replace(transaction)
        return replace(transaction)

    def sum_quiniela(
        self, account_id: int, start: date, end: date, tx_type: TransactionType
    ) -> Decimal:
        return to_money(sum(
            (t.amount for t in self._quiniela.values()
             if t.account_id == account_id and t.is_active and t.tx_type == tx_type
             and start <= t.day_date <= end),
            Decimal("0"),
        ))

    # --- daily balance snapshots ---

    def get_daily_balance(self, account_id: int, day: date) -> DailyBalance | None:
        row = self._balances.get((account_id, day))
        return replace(row) if row else None

    def upsert_daily_balance(self, balance: DailyBalance) -> None:
        self._balances[(balance.account_id, balance.day_date)] = replace(balance)

    # --- finalized day markers ---

    def is_day_finalized(self, account_id: int, day: date) -> bool:
        return (account_id, day) in self._finalized

    def add_finalized_day(self, account_id: int, day: date, finalized_at: datetime) -> None:
        key = (account_id, day)
        if key in self._finalized:
            raise DuplicateRecordError(f"El día {day.isoformat()} ya está finalizado")
        self._finalized[key] = finalized_at

    def list_finalized_days(self, account_id: int) -> list[date]:
        return sorted(
            (day for owner, day in self._finalized if owner == account_id),
            reverse=True,
        )

    # --- draw schedules ---

    def list_draw_schedules(self, account_id: int) -> list[DrawSchedule]:
        return sorted(self._schedules.get(account_id, []), key=lambda s: s.modality_id)

    def replace_draw_schedules(self, account_id: int, schedules: list[DrawSchedule]) -> None:
        self._schedules[account_id] = list(schedules)

    # --- transactions ---

    @contextmanager
    def unit_of_work(self) -> Iterator[None]:
        saved = copy.deepcopy(self._state())
        try:
            yield
        except Exception:
            (self._expenses, self._quiniela, self._balances,
             self._finalized, self._schedules) = saved
            raise

    def _state(self):
        return (self._expenses, self._quiniela, self._balances,
                self._finalized, self._schedules)
