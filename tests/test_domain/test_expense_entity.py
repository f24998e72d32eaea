"""
Tests for Expense domain entity
"""
import pytest
from datetime import date
from decimal import Decimal

from app.domain.errors import LedgerValidationError
from app.domain.expense import Expense, expense_label


def test_expense_create_strips_fields():
    """Crear gasto: se recortan espacios y la subcategoría vacía queda en None"""
    expense = Expense.create(
        account_id=1,
        amount=Decimal("1500.00"),
        category="  sueldo ",
        subcategory="   ",
        description=" Sueldo quincena ",
        day_date=date(2024, 3, 10),
    )

    assert expense.category == "sueldo"
    assert expense.subcategory is None
    assert expense.description == "Sueldo quincena"
    assert expense.id is None
    assert expense.is_active is True


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-10")])
def test_expense_amount_must_be_positive(amount):
    """El monto de un gasto debe ser mayor a 0"""
    with pytest.raises(LedgerValidationError) as exc:
        Expense.create(account_id=1, amount=amount, category="otros", day_date=date(2024, 3, 10))
    assert exc.value.message == "El monto debe ser mayor a 0"
    assert exc.value.code == "VALIDATION"


def test_expense_category_required():
    """La categoría es obligatoria"""
    with pytest.raises(LedgerValidationError, match="La categoría es requerida"):
        Expense.create(account_id=1, amount=Decimal("10"), category="", day_date=date(2024, 3, 10))


def test_expense_text_limits():
    """Límites de longitud: categoría 50, descripción 255"""
    with pytest.raises(LedgerValidationError):
        Expense.create(account_id=1, amount=Decimal("10"), category="x" * 51, day_date=date(2024, 3, 10))
    with pytest.raises(LedgerValidationError):
        Expense.create(
            account_id=1, amount=Decimal("10"), category="otros",
            description="x" * 256, day_date=date(2024, 3, 10),
        )


def test_expense_label():
    """Etiqueta visible de categoría/subcategoría"""
    assert expense_label("servicios", "luz") == "Servicios - Luz"
    assert expense_label("servicios", None) == "Servicios"
    assert expense_label("sueldo") == "Sueldo"
    assert expense_label("mantenimiento") == "mantenimiento"
