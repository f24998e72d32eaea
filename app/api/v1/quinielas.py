"""
Quiniela API endpoints (transactions, game catalogue, draw schedules)
"""
from datetime import date, time
from decimal import Decimal

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator

from app.api.deps import get_current_account_id, get_ledger_store
from app.api.v1.common import envelope, money, parse_day_param
from app.application.draw_schedules import (
    GetDrawSchedulesUseCase,
    ReplaceDrawSchedulesUseCase,
    GetModalityStatusUseCase,
)
from app.application.ledger_store import LedgerStore
from app.application.quinielas import (
    ListQuinielaTransactionsUseCase,
    CreateQuinielaTransactionUseCase,
    UpdateQuinielaTransactionUseCase,
    DeleteQuinielaTransactionUseCase,
    list_game_catalog,
)
from app.domain.draw_schedule import DrawSchedule
from app.domain.quiniela import QuinielaTransaction
from app.utils.validation import validate_and_normalize_amount, parse_day


router = APIRouter(prefix="/api/v1/quinielas", tags=["quinielas"])


# === Request/Response models ===

class QuinielaTransactionRequest(BaseModel):
    day: date
    game: str
    tx_type: str  # ingreso / egreso
    amount: Decimal
    category: str | None = None
    description: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v):
        return validate_and_normalize_amount(v, max_decimal_places=2)

    @field_validator("day", mode="before")
    @classmethod
    def validate_day(cls, v):
        return parse_day(v)


class QuinielaTransactionResponse(BaseModel):
    id: int
    tx_type: str
    category: str
    amount: str
    description: str
    day: str
    source: str

    @classmethod
    def from_domain(cls, t: QuinielaTransaction) -> "QuinielaTransactionResponse":
        return cls(
            id=t.id,
            tx_type=t.tx_type.value,
            category=t.category,
            amount=money(t.amount),
            description=t.description,
            day=t.day_date.isoformat(),
            source=t.source,
        )


class DrawScheduleItem(BaseModel):
    modality_id: int
    modality_name: str
    opens_at: time
    closes_at: time

    def to_domain(self) -> DrawSchedule:
        return DrawSchedule(
            modality_id=self.modality_id,
            modality_name=self.modality_name,
            opens_at=self.opens_at,
            closes_at=self.closes_at,
        )

    @classmethod
    def from_domain(cls, s: DrawSchedule) -> "DrawScheduleItem":
        return cls(
            modality_id=s.modality_id,
            modality_name=s.modality_name,
            opens_at=s.opens_at,
            closes_at=s.closes_at,
        )


class ReplaceSchedulesRequest(BaseModel):
    schedules: list[DrawScheduleItem]


# === Transactions ===

@router.get("/transactions/{day}")
def list_transactions(
    day: str,
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    transactions = ListQuinielaTransactionsUseCase(store).execute(account_id, parse_day_param(day))
    return envelope(
        "Transacciones de quiniela obtenidas exitosamente",
        [QuinielaTransactionResponse.from_domain(t).model_dump() for t in transactions],
    )


@router.post("/transactions", status_code=status.HTTP_201_CREATED)
def create_transaction(
    req: QuinielaTransactionRequest,
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    transaction = CreateQuinielaTransactionUseCase(store).execute(
        account_id=account_id,
        game=req.game,
        tx_type=req.tx_type,
        amount=req.amount,
        day=req.day,
        category=req.category,
        description=req.description,
    )
    return envelope(
        "Transacción de quiniela creada exitosamente",
        QuinielaTransactionResponse.from_domain(transaction).model_dump(),
    )


@router.put("/transactions/{transaction_id}")
def update_transaction(
    transaction_id: int,
    req: QuinielaTransactionRequest,
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    transaction = UpdateQuinielaTransactionUseCase(store).execute(
        transaction_id=transaction_id,
        account_id=account_id,
        game=req.game,
        tx_type=req.tx_type,
        amount=req.amount,
        day=req.day,
        category=req.category,
        description=req.description,
    )
    return envelope(
        "Transacción de quiniela actualizada exitosamente",
        QuinielaTransactionResponse.from_domain(transaction).model_dump(),
    )


@router.delete("/transactions/{transaction_id}")
def delete_transaction(
    transaction_id: int,
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    DeleteQuinielaTransactionUseCase(store).execute(
        transaction_id=transaction_id, account_id=account_id
    )
    return envelope("Transacción de quiniela eliminada exitosamente")


# === Game catalogue ===

@router.get("/games")
def list_games():
    data = [
        {
            "game": entry.game.value,
            "income_categories": list(entry.income_categories),
            "egress_categories": list(entry.egress_categories),
        }
        for entry in list_game_catalog()
    ]
    return envelope("Juegos obtenidos exitosamente", data)


# === Draw schedules ===

@router.get("/schedules")
def get_schedules(
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    schedules, is_custom = GetDrawSchedulesUseCase(store).execute(account_id)
    message = (
        "Horarios personalizados obtenidos exitosamente" if is_custom
        else "Horarios por defecto obtenidos"
    )
    return envelope(message, [DrawScheduleItem.from_domain(s).model_dump(mode="json") for s in schedules])


@router.post("/schedules")
def replace_schedules(
    req: ReplaceSchedulesRequest,
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    schedules = ReplaceDrawSchedulesUseCase(store).execute(
        account_id, [item.to_domain() for item in req.schedules]
    )
    return envelope(
        "Horarios actualizados exitosamente",
        [DrawScheduleItem.from_domain(s).model_dump(mode="json") for s in schedules],
    )


@router.get("/modality-status")
def modality_status(
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    """Which modalities still take bets right now"""
    statuses = GetModalityStatusUseCase(store).execute(account_id)
    data = [
        {
            **DrawScheduleItem.from_domain(s.schedule).model_dump(mode="json"),
            "is_open": s.is_open,
            "minutes_remaining": s.minutes_remaining,
        }
        for s in statuses
    ]
    return envelope("Estado de modalidades obtenido exitosamente", data)
