"""
Expense domain entity - cash outflows of the internal till ("caja interna")
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from app.domain.errors import LedgerValidationError

CATEGORY_MAX_LEN = 50
DESCRIPTION_MAX_LEN = 255


@dataclass(frozen=True)
class ExpenseCategory:
    id: str
    name: str
    subcategories: dict[str, str]  # id -> display name


# Known categories offered by the UI. Unknown ids are still accepted and
# shown with their raw value.
EXPENSE_CATEGORIES: dict[str, ExpenseCategory] = {
    "sueldo": ExpenseCategory("sueldo", "Sueldo", {}),
    "servicios": ExpenseCategory(
        "servicios",
        "Servicios",
        {
            "luz": "Luz",
            "agua": "Agua",
            "internet": "Internet",
            "alquiler": "Alquiler",
        },
    ),
    "otros": ExpenseCategory("otros", "Otros", {}),
}


def expense_label(category: str, subcategory: str | None = None) -> str:
    """
    Display label for an expense: "Servicios - Luz", "Sueldo", or the raw id.
    """
    known = EXPENSE_CATEGORIES.get(category)
    if known is None:
        return category
    if subcategory:
        sub_name = known.subcategories.get(subcategory)
        if sub_name:
            return f"{known.name} - {sub_name}"
    return known.name


@dataclass
class Expense:
    """
    Expense record.

    Amount is always positive. Deleting an expense clears is_active; rows are
    never physically removed.
    """
    account_id: int
    amount: Decimal
    category: str
    day_date: date
    description: str = ""
    subcategory: str | None = None
    id: int | None = None
    is_active: bool = True

    @property
    def label(self) -> str:
        return expense_label(self.category, self.subcategory)

    @staticmethod
    def create(
        account_id: int,
        amount: Decimal,
        category: str,
        day_date: date,
        description: str = "",
        subcategory: str | None = None,
    ) -> "Expense":
        """
        Build a validated expense

        Raises:
            LedgerValidationError: amount <= 0, empty/long category, long texts
        """
        category = (category or "").strip()
        subcategory = (subcategory or "").strip() or None
        description = (description or "").strip()

        if amount <= 0:
            raise LedgerValidationError("El monto debe ser mayor a 0")
        if not category:
            raise LedgerValidationError("La categoría es requerida")
        if len(category) > CATEGORY_MAX_LEN:
            raise LedgerValidationError(
                f"La categoría no puede tener más de {CATEGORY_MAX_LEN} caracteres"
            )
        if subcategory and len(subcategory) > CATEGORY_MAX_LEN:
            raise LedgerValidationError(
                f"La subcategoría no puede tener más de {CATEGORY_MAX_LEN} caracteres"
            )
        if len(description) > DESCRIPTION_MAX_LEN:
            raise LedgerValidationError(
                f"La descripción no puede tener más de {DESCRIPTION_MAX_LEN} caracteres"
            )

        return Expense(
            account_id=account_id,
            amount=amount,
            category=category,
            subcategory=subcategory,
            description=description,
            day_date=day_date,
        )
