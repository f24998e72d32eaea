"""
Finalize day use case - OPEN -> FINALIZED, the only transition a day has

There is no way back: once the marker exists the day's rows are read-only and
its snapshot is what the next day carries forward.
"""
import logging
from datetime import date, datetime

from app.application.balances import resolve_opening_balance
from app.application.ledger_store import LedgerStore
from app.config import get_settings
from app.domain.daily_balance import DailyBalance
from app.domain.errors import AlreadyFinalizedError, FutureDateError
from app.domain.quiniela import TransactionType
from app.utils.clock import local_now
from app.utils.money import format_money

logger = logging.getLogger(__name__)


class FinalizeDayUseCase:
    """
    Use case: close a day

    Steps:
    1. reject if already finalized, then reject if in the future
    2. opening balance (carry-forward resolver)
    3. day totals: expenses, quiniela income, quiniela egress
    4. closing = opening + income - (expenses + quiniela egress)
    5. upsert the snapshot and insert the marker in one unit of work

    A concurrent finalize of the same day loses on the marker's unique key and
    gets DuplicateRecordError; its snapshot write is rolled back with it.
    """

    def __init__(self, store: LedgerStore):
        self.store = store

    def execute(self, account_id: int, day: date, now: datetime | None = None) -> DailyBalance:
        """
        Args:
            account_id: owner
            day: day to close
            now: server-local current time (default: local_now())

        Returns:
            The stored snapshot

        Raises:
            AlreadyFinalizedError, FutureDateError, DuplicateRecordError
        """
        now = now or local_now()

        if self.store.is_day_finalized(account_id, day):
            raise AlreadyFinalizedError("El día ya está finalizado")

        if day > now.date():
            raise FutureDateError("No se pueden finalizar días futuros")

        opening_balance = resolve_opening_balance(self.store, account_id, day)
        total_expenses = self.store.sum_expenses(account_id, day, day)
        total_income = self.store.sum_quiniela(account_id, day, day, TransactionType.INCOME)
        total_quiniela_egress = self.store.sum_quiniela(account_id, day, day, TransactionType.EGRESS)

        snapshot = DailyBalance.compute(
            account_id=account_id,
            day_date=day,
            opening_balance=opening_balance,
            total_expenses=total_expenses,
            total_income=total_income,
            total_quiniela_egress=total_quiniela_egress,
        )

        with self.store.unit_of_work():
            self.store.upsert_daily_balance(snapshot)
            self.store.add_finalized_day(account_id, day, finalized_at=now)

        currency = get_settings().CURRENCY
        logger.info(
            "Day finalized: account=%s day=%s opening=%s income=%s egress=%s closing=%s",
            account_id,
            day.isoformat(),
            format_money(snapshot.opening_balance, currency),
            format_money(snapshot.total_income, currency),
            format_money(snapshot.total_egress, currency),
            format_money(snapshot.closing_balance, currency),
        )
        return snapshot
