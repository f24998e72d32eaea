"""
Expense API endpoints
"""
from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator

from app.api.deps import get_current_account_id, get_ledger_store
from app.api.v1.common import envelope, money, parse_day_param
from app.application.expenses import (
    ListExpensesUseCase,
    CreateExpenseUseCase,
    UpdateExpenseUseCase,
    DeleteExpenseUseCase,
)
from app.application.ledger_store import LedgerStore
from app.domain.expense import Expense, EXPENSE_CATEGORIES
from app.utils.validation import validate_and_normalize_amount, parse_day


router = APIRouter(prefix="/api/v1/expenses", tags=["expenses"])


# === Request/Response models ===

class ExpenseRequest(BaseModel):
    day: date
    category: str
    subcategory: str | None = None
    amount: Decimal  # "100,50" / "100.50" / 100.5
    description: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v):
        """Comma or dot separator, at most 2 decimals"""
        return validate_and_normalize_amount(v, max_decimal_places=2)

    @field_validator("day", mode="before")
    @classmethod
    def validate_day(cls, v):
        return parse_day(v)


class ExpenseResponse(BaseModel):
    id: int
    amount: str
    category: str
    subcategory: str | None
    label: str
    description: str
    day: str

    @classmethod
    def from_domain(cls, e: Expense) -> "ExpenseResponse":
        return cls(
            id=e.id,
            amount=money(e.amount),
            category=e.category,
            subcategory=e.subcategory,
            label=e.label,
            description=e.description,
            day=e.day_date.isoformat(),
        )


# === Endpoints ===

@router.get("/categories")
def list_categories():
    """Expense categories known to the UI"""
    data = [
        {
            "id": c.id,
            "name": c.name,
            "subcategories": [{"id": k, "name": v} for k, v in c.subcategories.items()],
        }
        for c in EXPENSE_CATEGORIES.values()
    ]
    return envelope("Categorías obtenidas exitosamente", data)


@router.get("/{day}")
def list_expenses(
    day: str,
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    """Gastos de un día (más recientes primero)"""
    expenses = ListExpensesUseCase(store).execute(account_id, parse_day_param(day))
    return envelope(
        "Gastos obtenidos exitosamente",
        [ExpenseResponse.from_domain(e).model_dump() for e in expenses],
    )


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_expense(
    req: ExpenseRequest,
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    expense = CreateExpenseUseCase(store).execute(
        account_id=account_id,
        amount=req.amount,
        category=req.category,
        subcategory=req.subcategory,
        description=req.description,
        day=req.day,
    )
    return envelope("Gasto creado exitosamente", ExpenseResponse.from_domain(expense).model_dump())


@router.put("/{expense_id}")
def update_expense(
    expense_id: int,
    req: ExpenseRequest,
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    expense = UpdateExpenseUseCase(store).execute(
        expense_id=expense_id,
        account_id=account_id,
        amount=req.amount,
        category=req.category,
        subcategory=req.subcategory,
        description=req.description,
        day=req.day,
    )
    return envelope("Gasto actualizado exitosamente", ExpenseResponse.from_domain(expense).model_dump())


@router.delete("/{expense_id}")
def delete_expense(
    expense_id: int,
    account_id: int = Depends(get_current_account_id),
    store: LedgerStore = Depends(get_ledger_store),
):
    """Soft delete"""
    DeleteExpenseUseCase(store).execute(expense_id=expense_id, account_id=account_id)
    return envelope("Gasto eliminado exitosamente")
