"""
Tests for FinalizeDayUseCase
"""
import pytest
from datetime import date, datetime
from decimal import Decimal

from app.application.balances import GetDayDataUseCase, GetOpeningBalanceUseCase, ListFinalizedDaysUseCase
from app.application.expenses import CreateExpenseUseCase
from app.application.finalize_day import FinalizeDayUseCase
from app.application.quinielas import CreateQuinielaTransactionUseCase
from app.domain.daily_balance import DailyBalance
from app.domain.errors import AlreadyFinalizedError, DayFinalizedError, DuplicateRecordError, FutureDateError


TODAY = date(2024, 3, 15)
NOW = datetime(2024, 3, 15, 21, 30)


def record_day(store, account_id, day, income="0", expense=None, egress=None):
    CreateQuinielaTransactionUseCase(store, today=TODAY).execute(
        account_id=account_id, game="Quiniela - Nocturna", tx_type="ingreso",
        amount=Decimal(income), day=day,
    )
    if expense:
        CreateExpenseUseCase(store, today=TODAY).execute(
            account_id=account_id, amount=Decimal(expense), category="otros", day=day,
        )
    if egress:
        CreateQuinielaTransactionUseCase(store, today=TODAY).execute(
            account_id=account_id, game="Quiniela - Nocturna", tx_type="egreso",
            category="Premio Pagado", amount=Decimal(egress), day=day,
        )


def test_finalize_empty_day_of_new_account(store, sample_account_id):
    """Cuenta nueva: cerrar un día sin movimientos deja todo en 0"""
    snapshot = FinalizeDayUseCase(store).execute(sample_account_id, date(2024, 3, 1), now=NOW)

    assert snapshot.opening_balance == Decimal("0.00")
    assert snapshot.total_income == Decimal("0.00")
    assert snapshot.total_egress == Decimal("0.00")
    assert snapshot.closing_balance == Decimal("0.00")
    assert store.is_day_finalized(sample_account_id, date(2024, 3, 1))
    assert ListFinalizedDaysUseCase(store).execute(sample_account_id) == [date(2024, 3, 1)]


def test_finalize_computes_and_stores_snapshot(store, sample_account_id):
    """closing = opening + ingresos - (gastos + egresos de quiniela)"""
    record_day(store, sample_account_id, date(2024, 3, 1), income="1000", expense="150", egress="250")

    snapshot = FinalizeDayUseCase(store).execute(sample_account_id, date(2024, 3, 1), now=NOW)

    assert snapshot.total_income == Decimal("1000.00")
    assert snapshot.total_egress == Decimal("400.00")
    assert snapshot.closing_balance == Decimal("600.00")
    stored = store.get_daily_balance(sample_account_id, date(2024, 3, 1))
    assert stored.closing_balance == Decimal("600.00")


def test_closing_balance_carries_to_next_day(store, sample_account_id):
    """El saldo final de un día es el saldo inicial del siguiente"""
    record_day(store, sample_account_id, date(2024, 3, 1), income="1000", expense="200")
    FinalizeDayUseCase(store).execute(sample_account_id, date(2024, 3, 1), now=NOW)
    record_day(store, sample_account_id, date(2024, 3, 2), income="50", egress="30")

    second = FinalizeDayUseCase(store).execute(sample_account_id, date(2024, 3, 2), now=NOW)

    assert second.opening_balance == Decimal("800.00")
    assert second.closing_balance == Decimal("820.00")
    assert GetOpeningBalanceUseCase(store).execute(sample_account_id, date(2024, 3, 3)) == Decimal("820.00")
    assert ListFinalizedDaysUseCase(store).execute(sample_account_id) == [
        date(2024, 3, 2), date(2024, 3, 1),
    ]


def test_snapshot_matches_day_summary(store, sample_account_id):
    """El cierre guardado coincide con los totales mostrados en la vista del día"""
    record_day(store, sample_account_id, date(2024, 3, 4), income="333.33", expense="0.33", egress="100")
    summary = GetDayDataUseCase(store).execute(sample_account_id, date(2024, 3, 4))

    snapshot = FinalizeDayUseCase(store).execute(sample_account_id, date(2024, 3, 4), now=NOW)

    assert snapshot.closing_balance == summary.closing_balance
    assert snapshot.total_egress == summary.total_egress


def test_finalize_twice_rejected(store, sample_account_id):
    use_case = FinalizeDayUseCase(store)
    use_case.execute(sample_account_id, date(2024, 3, 1), now=NOW)

    with pytest.raises(AlreadyFinalizedError) as exc:
        use_case.execute(sample_account_id, date(2024, 3, 1), now=NOW)
    assert exc.value.message == "El día ya está finalizado"


def test_finalize_future_day_rejected(store, sample_account_id):
    """No se pueden finalizar días futuros; no queda nada guardado"""
    with pytest.raises(FutureDateError, match="No se pueden finalizar días futuros"):
        FinalizeDayUseCase(store).execute(sample_account_id, date(2024, 3, 16), now=NOW)

    assert store.get_daily_balance(sample_account_id, date(2024, 3, 16)) is None
    assert not store.is_day_finalized(sample_account_id, date(2024, 3, 16))


def test_finalize_today_allowed(store, sample_account_id):
    FinalizeDayUseCase(store).execute(sample_account_id, TODAY, now=NOW)
    assert store.is_day_finalized(sample_account_id, TODAY)


def test_finalize_overwrites_stale_snapshot(store, sample_account_id):
    """Un snapshot previo sin marca de cierre se recalcula"""
    with store.unit_of_work():
        store.upsert_daily_balance(DailyBalance.compute(
            account_id=sample_account_id, day_date=date(2024, 3, 5), opening_balance=999,
            total_expenses=0, total_income=0, total_quiniela_egress=0,
        ))
    record_day(store, sample_account_id, date(2024, 3, 5), income="10")

    snapshot = FinalizeDayUseCase(store).execute(sample_account_id, date(2024, 3, 5), now=NOW)

    assert snapshot.closing_balance == Decimal("10.00")
    assert store.get_daily_balance(sample_account_id, date(2024, 3, 5)).closing_balance == Decimal("10.00")


def test_failed_marker_rolls_back_snapshot(store, sample_account_id, monkeypatch):
    """Snapshot y marca se escriben juntos: si la marca falla, no queda snapshot"""
    record_day(store, sample_account_id, date(2024, 3, 6), income="100")

    def lost_race(account_id, day, finalized_at):
        raise DuplicateRecordError("El día ya está finalizado")

    monkeypatch.setattr(store, "add_finalized_day", lost_race)

    with pytest.raises(DuplicateRecordError):
        FinalizeDayUseCase(store).execute(sample_account_id, date(2024, 3, 6), now=NOW)

    assert store.get_daily_balance(sample_account_id, date(2024, 3, 6)) is None
    assert not store.is_day_finalized(sample_account_id, date(2024, 3, 6))
    # rows recorded before the attempt are untouched
    summary = GetDayDataUseCase(store).execute(sample_account_id, date(2024, 3, 6))
    assert summary.total_income == Decimal("100.00")


def test_duplicate_marker_rejected_by_store(store, sample_account_id):
    """La marca de cierre es única por (cuenta, día)"""
    with store.unit_of_work():
        store.add_finalized_day(sample_account_id, date(2024, 3, 7), finalized_at=NOW)

    with pytest.raises(DuplicateRecordError):
        with store.unit_of_work():
            store.add_finalized_day(sample_account_id, date(2024, 3, 7), finalized_at=NOW)

    assert store.list_finalized_days(sample_account_id) == [date(2024, 3, 7)]


def test_closing_arithmetic_example(store, sample_account_id):
    """Saldo inicial 100, gastos 30, ingresos 50, egresos 20 -> cierre 100"""
    with store.unit_of_work():
        store.upsert_daily_balance(DailyBalance.compute(
            account_id=sample_account_id, day_date=date(2024, 3, 9), opening_balance=100,
            total_expenses=0, total_income=0, total_quiniela_egress=0,
        ))
    record_day(store, sample_account_id, date(2024, 3, 10), income="50", expense="30", egress="20")

    snapshot = FinalizeDayUseCase(store).execute(sample_account_id, date(2024, 3, 10), now=NOW)

    assert snapshot.opening_balance == Decimal("100.00")
    assert snapshot.total_egress == Decimal("50.00")
    assert snapshot.closing_balance == Decimal("100.00")


def test_new_account_first_day_with_one_expense(store, sample_account_id):
    """Cuenta nueva, 2024-03-01: un gasto de 25 deja el cierre en -25"""
    CreateExpenseUseCase(store, today=TODAY).execute(
        account_id=sample_account_id, amount=Decimal("25.00"), category="otros", day=date(2024, 3, 1),
    )

    snapshot = FinalizeDayUseCase(store).execute(sample_account_id, date(2024, 3, 1), now=NOW)

    assert (snapshot.opening_balance, snapshot.total_income, snapshot.total_egress, snapshot.closing_balance) \
        == (Decimal("0.00"), Decimal("0.00"), Decimal("25.00"), Decimal("-25.00"))


def test_second_finalize_keeps_first_snapshot(store, sample_account_id):
    record_day(store, sample_account_id, date(2024, 3, 8), income="70")
    FinalizeDayUseCase(store).execute(sample_account_id, date(2024, 3, 8), now=NOW)

    with pytest.raises(AlreadyFinalizedError):
        FinalizeDayUseCase(store).execute(sample_account_id, date(2024, 3, 8), now=NOW)

    assert store.get_daily_balance(sample_account_id, date(2024, 3, 8)).closing_balance == Decimal("70.00")


def test_finalized_day_locks_only_that_day(store, sample_account_id):
    """Tras cerrar D, crear en D falla y en D+1 funciona"""
    FinalizeDayUseCase(store).execute(sample_account_id, date(2024, 3, 11), now=NOW)

    with pytest.raises(DayFinalizedError):
        CreateExpenseUseCase(store, today=TODAY).execute(
            account_id=sample_account_id, amount=Decimal("5"), category="otros", day=date(2024, 3, 11),
        )
    created = CreateExpenseUseCase(store, today=TODAY).execute(
        account_id=sample_account_id, amount=Decimal("5"), category="otros", day=date(2024, 3, 12),
    )
    assert created.id is not None
