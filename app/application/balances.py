"""
Balance use cases - opening balance carry-forward and the day summary

Opening balance of day D:
1. closing_balance of the snapshot stored for D-1, if the previous day was
   finalized
2. otherwise the month-to-date result: income - (expenses + quiniela egress)
   over [first day of D's month, D-1]; 0 when D is the 1st

Snapshots make consecutive days O(1); the fallback keeps balances right when a
day was never finalized, at the cost of scanning the month.
"""
from datetime import date, timedelta
from decimal import Decimal

from app.application.ledger_store import LedgerStore
from app.domain.daily_balance import DaySummary
from app.domain.quiniela import TransactionType
from app.utils.money import to_money, ZERO


def resolve_opening_balance(store: LedgerStore, account_id: int, day: date) -> Decimal:
    previous_day = day - timedelta(days=1)

    snapshot = store.get_daily_balance(account_id, previous_day)
    if snapshot is not None:
        return to_money(snapshot.closing_balance)

    return accumulated_balance(store, account_id, day)


def accumulated_balance(store: LedgerStore, account_id: int, day: date) -> Decimal:
    """Month-to-date balance of the days strictly before `day`"""
    month_start = day.replace(day=1)
    previous_day = day - timedelta(days=1)
    if previous_day < month_start:
        return ZERO

    total_expenses = to_money(store.sum_expenses(account_id, month_start, previous_day))
    total_income = to_money(store.sum_quiniela(
        account_id, month_start, previous_day, TransactionType.INCOME
    ))
    total_quiniela_egress = to_money(store.sum_quiniela(
        account_id, month_start, previous_day, TransactionType.EGRESS
    ))

    return to_money(total_income - (total_expenses + total_quiniela_egress))


class GetOpeningBalanceUseCase:
    """Use case: opening balance of a day (what the previous day carried over)"""

    def __init__(self, store: LedgerStore):
        self.store = store

    def execute(self, account_id: int, day: date) -> Decimal:
        return resolve_opening_balance(self.store, account_id, day)


class GetDayDataUseCase:
    """
    Use case: everything recorded on one day plus its carry-in balance

    Read-only; feeds both the day view and FinalizeDayUseCase.
    """

    def __init__(self, store: LedgerStore):
        self.store = store

    def execute(self, account_id: int, day: date) -> DaySummary:
        return DaySummary(
            day_date=day,
            expenses=self.store.list_expenses(account_id, day),
            quiniela_transactions=self.store.list_quiniela_transactions(account_id, day),
            opening_balance=resolve_opening_balance(self.store, account_id, day),
            is_finalized=self.store.is_day_finalized(account_id, day),
        )


class ListFinalizedDaysUseCase:
    """Use case: closed days, newest first (calendar highlighting)"""

    def __init__(self, store: LedgerStore):
        self.store = store

    def execute(self, account_id: int) -> list[date]:
        return self.store.list_finalized_days(account_id)
