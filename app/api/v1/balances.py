"""
Daily balance API endpoints (day summary, carry-forward, day closing)
"""
from fastapi import APIRouter, Depends

from app.api.deps import get_current_account_id, get_ledger_store
from app.api.v1.common import envelope, money, parse_day_param
from app.api.v1.expenses import ExpenseResponse
from app.api.v1.quinielas import QuinielaTransactionResponse
from app.application.balances import (
    GetDayDataUseCase,
    GetOpeningBalanceUseCase,
    ListFinalizedDaysUseCase,
)
from app.application.day_guard import RecordKind, check_mutation_allowed
from app.application.finalize_day import FinalizeDayUseCase
from app.application.ledger_store import LedgerStore


router = APIRouter(prefix="/api/v1/balances", tags=["balances"])


@router.get("/finalized-days")
def list_finalized_days(
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    days = ListFinalizedDaysUseCase(store).execute(account_id)
    return envelope("Días finalizados obtenidos exitosamente", [d.isoformat() for d in days])


@router.get("/day/{day}")
def get_day_data(
    day: str,
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    """Rows of the day, carry-in balance, lock state and running totals"""
    summary = GetDayDataUseCase(store).execute(account_id, parse_day_param(day))
    data = {
        "day": summary.day_date.isoformat(),
        "expenses": [ExpenseResponse.from_domain(e).model_dump() for e in summary.expenses],
        "quiniela_transactions": [
            QuinielaTransactionResponse.from_domain(t).model_dump()
            for t in summary.quiniela_transactions
        ],
        "opening_balance": money(summary.opening_balance),
        "is_finalized": summary.is_finalized,
        "state": summary.state.value,
        "total_expenses": money(summary.total_expenses),
        "total_income": money(summary.total_income),
        "total_quiniela_egress": money(summary.total_quiniela_egress),
        "total_egress": money(summary.total_egress),
        "closing_balance": money(summary.closing_balance),
    }
    return envelope("Datos del día obtenidos exitosamente", data)


@router.get("/opening-balance/{day}")
def get_opening_balance(
    day: str,
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    balance = GetOpeningBalanceUseCase(store).execute(account_id, parse_day_param(day))
    return envelope("Saldo anterior obtenido exitosamente", {"opening_balance": money(balance)})


@router.post("/finalize/{day}")
def finalize_day(
    day: str,
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    snapshot = FinalizeDayUseCase(store).execute(account_id, parse_day_param(day))
    data = {
        "day": snapshot.day_date.isoformat(),
        "opening_balance": money(snapshot.opening_balance),
        "total_income": money(snapshot.total_income),
        "total_egress": money(snapshot.total_egress),
        "closing_balance": money(snapshot.closing_balance),
        "is_finalized": True,
    }
    return envelope("Día finalizado exitosamente", data)


@router.get("/mutation-check/{day}")
def mutation_check(
    day: str,
    new_day: str | None = None,
    kind: RecordKind = RecordKind.EXPENSE,
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    """
    Ask before opening an edit form: 200 when the write would be accepted,
    400 with the rejection reason otherwise.
    """
    check_mutation_allowed(
        store,
        account_id,
        parse_day_param(day),
        new_day=parse_day_param(new_day) if new_day else None,
        kind=kind,
    )
    return envelope("Operación permitida", {"allowed": True})
