"""
Tests for DailyBalance snapshot and DaySummary
"""
from datetime import date
from decimal import Decimal

from app.domain.daily_balance import DailyBalance, DaySummary, DayState
from app.domain.expense import Expense
from app.domain.quiniela import QuinielaTransaction, TransactionType


def _tx(tx_type, amount):
    return QuinielaTransaction(
        account_id=1, tx_type=tx_type, category="c", amount=Decimal(amount),
        day_date=date(2024, 3, 10), source="Loto",
    )


def test_compute_closing_balance():
    """closing = opening + ingresos - (gastos + egresos de quiniela)"""
    snapshot = DailyBalance.compute(
        account_id=1,
        day_date=date(2024, 3, 10),
        opening_balance=Decimal("1000"),
        total_expenses=Decimal("100"),
        total_income=Decimal("500"),
        total_quiniela_egress=Decimal("200"),
    )

    assert snapshot.opening_balance == Decimal("1000.00")
    assert snapshot.total_income == Decimal("500.00")
    assert snapshot.total_egress == Decimal("300.00")
    assert snapshot.closing_balance == Decimal("1200.00")


def test_compute_treats_nan_and_none_as_zero():
    """Valores no numéricos cuentan como 0"""
    snapshot = DailyBalance.compute(
        account_id=1,
        day_date=date(2024, 3, 10),
        opening_balance=float("nan"),
        total_expenses=None,
        total_income="250.5",
        total_quiniela_egress=0,
    )

    assert snapshot.opening_balance == Decimal("0.00")
    assert snapshot.total_egress == Decimal("0.00")
    assert snapshot.closing_balance == Decimal("250.50")


def test_compute_can_go_negative():
    snapshot = DailyBalance.compute(
        account_id=1, day_date=date(2024, 3, 10),
        opening_balance=0, total_expenses=50, total_income=0, total_quiniela_egress=25,
    )
    assert snapshot.closing_balance == Decimal("-75.00")


def test_day_summary_totals_and_state():
    """Totales del día y estado OPEN/FINALIZED"""
    summary = DaySummary(
        day_date=date(2024, 3, 10),
        opening_balance=Decimal("100"),
        is_finalized=False,
        expenses=[
            Expense(account_id=1, amount=Decimal("10.10"), category="otros", day_date=date(2024, 3, 10)),
            Expense(account_id=1, amount=Decimal("4.90"), category="otros", day_date=date(2024, 3, 10)),
        ],
        quiniela_transactions=[
            _tx(TransactionType.INCOME, "300"),
            _tx(TransactionType.EGRESS, "85"),
        ],
    )

    assert summary.state == DayState.OPEN
    assert summary.total_expenses == Decimal("15.00")
    assert summary.total_income == Decimal("300.00")
    assert summary.total_quiniela_egress == Decimal("85.00")
    assert summary.total_egress == Decimal("100.00")
    assert summary.closing_balance == Decimal("300.00")


def test_empty_finalized_summary():
    summary = DaySummary(day_date=date(2024, 3, 10), opening_balance=Decimal("0"), is_finalized=True)
    assert summary.state == DayState.FINALIZED
    assert summary.closing_balance == Decimal("0.00")
