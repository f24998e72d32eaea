"""
Tests for the quiniela game catalogue and QuinielaTransaction entity
"""
import pytest
from datetime import date
from decimal import Decimal

from app.domain.errors import LedgerValidationError
from app.domain.quiniela import (
    GameType,
    QuinielaTransaction,
    TransactionType,
    categories_for,
    default_description,
    game_from_name,
    income_categories,
    split_modality,
)


@pytest.mark.parametrize("name,expected", [
    ("Quiniela", GameType.QUINIELA),
    ("Quiniela - Matutina", GameType.QUINIELA),
    ("Quiniela Express", GameType.QUINIELA_EXPRESS),
    ("Express", GameType.QUINIELA_EXPRESS),
    ("Quini 6", GameType.QUINI_6),
    ("quini6", GameType.QUINI_6),
    ("Loto 5", GameType.LOTO_5),
    ("Telekino TJ", GameType.TELEKINO),
    ("Loto Plus", GameType.LOTO_PLUS),
    ("Bingo", None),
])
def test_game_from_name(name, expected):
    """Nombres de juego se resuelven por tabla, no por substring"""
    assert game_from_name(name) == expected


def test_split_modality():
    assert split_modality("Quiniela - Nocturna") == ("Quiniela", "Nocturna")
    assert split_modality("Loto") == ("Loto", None)


def test_income_categories_per_game():
    """Categorías de ingreso según el juego"""
    assert income_categories("Quiniela - Matutina") == ("Apuestas Nuevas",)
    assert income_categories("Quiniela Express") == ("Valor de Jugada",)
    assert income_categories("Brinco") == ("Venta de Tickets",)
    # juego desconocido: categorías de Quiniela
    assert income_categories("Bingo") == ("Apuestas Nuevas",)


def test_egress_categories_shared():
    assert categories_for("Loto", TransactionType.EGRESS) == (
        "Premio Pagado", "Comisión Pagada", "Devolución",
    )


def test_default_description():
    """Descripción por defecto: la modalidad identifica las líneas de Quiniela"""
    assert default_description("Quiniela - Matutina", TransactionType.INCOME, "Apuestas Nuevas") \
        == "Total jugadas Matutina"
    assert default_description("Quiniela - Matutina", TransactionType.EGRESS, "Premio Pagado") \
        == "Premio Pagado - Matutina"
    assert default_description("Loto", TransactionType.INCOME, "Venta de Tickets") \
        == "Venta de Tickets - Loto"


def test_create_income_defaults_category_and_description():
    """Ingreso sin categoría toma la primera categoría del juego"""
    tx = QuinielaTransaction.create(
        account_id=1,
        game="Quiniela - Vespertina",
        tx_type="ingreso",
        amount=Decimal("3200.00"),
        day_date=date(2024, 3, 10),
    )

    assert tx.tx_type == TransactionType.INCOME
    assert tx.category == "Apuestas Nuevas"
    assert tx.source == "Quiniela - Vespertina"
    assert tx.description == "Total jugadas Vespertina"


def test_create_accepts_zero_amount():
    """Monto cero es válido (modalidad sin jugadas)"""
    tx = QuinielaTransaction.create(
        account_id=1, game="Loto", tx_type="ingreso",
        amount=Decimal("0"), day_date=date(2024, 3, 10),
    )
    assert tx.amount == Decimal("0")


def test_create_rejects_negative_amount():
    with pytest.raises(LedgerValidationError, match="El monto no puede ser negativo"):
        QuinielaTransaction.create(
            account_id=1, game="Loto", tx_type="egreso", category="Premio Pagado",
            amount=Decimal("-1"), day_date=date(2024, 3, 10),
        )


def test_create_egress_requires_category():
    with pytest.raises(LedgerValidationError, match="La categoría es requerida para egresos"):
        QuinielaTransaction.create(
            account_id=1, game="Loto", tx_type="egreso",
            amount=Decimal("100"), day_date=date(2024, 3, 10),
        )


def test_create_rejects_unknown_type_and_missing_game():
    with pytest.raises(LedgerValidationError, match="ingreso"):
        QuinielaTransaction.create(
            account_id=1, game="Loto", tx_type="otro",
            amount=Decimal("1"), day_date=date(2024, 3, 10),
        )
    with pytest.raises(LedgerValidationError, match="El juego es requerido"):
        QuinielaTransaction.create(
            account_id=1, game="  ", tx_type="ingreso",
            amount=Decimal("1"), day_date=date(2024, 3, 10),
        )
