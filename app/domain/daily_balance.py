"""
Daily balance domain - day state, closing snapshot and the day summary
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from app.domain.expense import Expense
from app.domain.quiniela import QuinielaTransaction, TransactionType
from app.utils.money import to_money


class DayState(str, Enum):
    """
    OPEN -> FINALIZED is the only transition; FINALIZED is terminal.
    """
    OPEN = "OPEN"
    FINALIZED = "FINALIZED"


@dataclass
class DailyBalance:
    """
    Snapshot written when a day is finalized, one per (account, day).

    It is a cache of derived values: the next day reads closing_balance as its
    opening balance instead of re-summing the month.
    """
    account_id: int
    day_date: date
    opening_balance: Decimal
    total_income: Decimal
    total_egress: Decimal
    closing_balance: Decimal

    @staticmethod
    def compute(
        account_id: int,
        day_date: date,
        opening_balance,
        total_expenses,
        total_income,
        total_quiniela_egress,
    ) -> "DailyBalance":
        """
        closing = opening + income - (expenses + quiniela egress)

        Inputs are coerced with to_money() first (NaN/None -> 0), every output
        is rounded to cents.
        """
        opening = to_money(opening_balance)
        income = to_money(total_income)
        egress = to_money(to_money(total_expenses) + to_money(total_quiniela_egress))
        closing = to_money(opening + income - egress)
        return DailyBalance(
            account_id=account_id,
            day_date=day_date,
            opening_balance=opening,
            total_income=income,
            total_egress=egress,
            closing_balance=closing,
        )


@dataclass
class DaySummary:
    """Everything the day view needs: the rows, carry-in balance and lock state"""
    day_date: date
    opening_balance: Decimal
    is_finalized: bool
    expenses: list[Expense] = field(default_factory=list)
    quiniela_transactions: list[QuinielaTransaction] = field(default_factory=list)

    @property
    def state(self) -> DayState:
        return DayState.FINALIZED if self.is_finalized else DayState.OPEN

    @property
    def total_expenses(self) -> Decimal:
        return to_money(sum((e.amount for e in self.expenses), Decimal("0")))

    @property
    def total_income(self) -> Decimal:
        return self._sum_quiniela(TransactionType.INCOME)

    @property
    def total_quiniela_egress(self) -> Decimal:
        return self._sum_quiniela(TransactionType.EGRESS)

    @property
    def total_egress(self) -> Decimal:
        return to_money(self.total_expenses + self.total_quiniela_egress)

    @property
    def closing_balance(self) -> Decimal:
        return to_money(self.opening_balance + self.total_income - self.total_egress)

    def _sum_quiniela(self, tx_type: TransactionType) -> Decimal:
        return to_money(sum(
            (t.amount for t in self.quiniela_transactions if t.tx_type == tx_type),
            Decimal("0"),
        ))
