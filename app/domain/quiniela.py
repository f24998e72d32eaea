"""
Quiniela domain - betting-shop income/egress lines and the game catalogue
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from app.domain.errors import LedgerValidationError

GAME_MAX_LEN = 50
DESCRIPTION_MAX_LEN = 255


class TransactionType(str, Enum):
    """Direction of a quiniela line; the amount itself is never negative"""
    INCOME = "ingreso"
    EGRESS = "egreso"


class GameType(str, Enum):
    QUINIELA = "Quiniela"
    QUINIELA_EXPRESS = "Quiniela Express"
    LOTO = "Loto"
    LOTO_5 = "Loto 5"
    QUINI_6 = "Quini 6"
    BRINCO = "Brinco"
    POCEADA = "Poceada"
    TELEKINO = "Telekino"
    LOTO_PLUS = "Loto Plus"


_POOL_INCOME = ("Venta de Tickets",)

GAME_INCOME_CATEGORIES: dict[GameType, tuple[str, ...]] = {
    GameType.QUINIELA: ("Apuestas Nuevas",),
    GameType.QUINIELA_EXPRESS: ("Valor de Jugada",),
    GameType.LOTO: _POOL_INCOME,
    GameType.LOTO_5: _POOL_INCOME,
    GameType.QUINI_6: _POOL_INCOME,
    GameType.BRINCO: _POOL_INCOME,
    GameType.POCEADA: _POOL_INCOME,
    GameType.TELEKINO: _POOL_INCOME,
    GameType.LOTO_PLUS: _POOL_INCOME,
}

EGRESS_CATEGORIES: tuple[str, ...] = ("Premio Pagado", "Comisión Pagada", "Devolución")

# Display names seen in the UI, normalized with _name_key()
_GAME_ALIASES: dict[str, GameType] = {
    "quiniela": GameType.QUINIELA,
    "quinielaexpress": GameType.QUINIELA_EXPRESS,
    "express": GameType.QUINIELA_EXPRESS,
    "loto": GameType.LOTO,
    "loto5": GameType.LOTO_5,
    "quini6": GameType.QUINI_6,
    "brinco": GameType.BRINCO,
    "poceada": GameType.POCEADA,
    "telekino": GameType.TELEKINO,
    "telekinotj": GameType.TELEKINO,
    "lotoplus": GameType.LOTO_PLUS,
}

MODALITY_SEPARATOR = " - "


def _name_key(name: str) -> str:
    return "".join(name.lower().split())


def split_modality(game_name: str) -> tuple[str, str | None]:
    """
    "Quiniela - Matutina" -> ("Quiniela", "Matutina"); "Loto" -> ("Loto", None)
    """
    if MODALITY_SEPARATOR in game_name:
        base, modality = game_name.split(MODALITY_SEPARATOR, 1)
        return base.strip(), modality.strip() or None
    return game_name.strip(), None


def game_from_name(game_name: str) -> GameType | None:
    """Resolve a display name to a GameType, None when unknown"""
    base, _ = split_modality(game_name)
    return _GAME_ALIASES.get(_name_key(base))


def income_categories(game_name: str) -> tuple[str, ...]:
    """Income categories for a game; unknown games use the Quiniela ones"""
    game = game_from_name(game_name)
    return GAME_INCOME_CATEGORIES[game or GameType.QUINIELA]


def categories_for(game_name: str, tx_type: TransactionType) -> tuple[str, ...]:
    if tx_type == TransactionType.INCOME:
        return income_categories(game_name)
    return EGRESS_CATEGORIES


def default_description(game_name: str, tx_type: TransactionType, category: str) -> str:
    """
    Description used when the user leaves it empty.

    Quiniela lines carry their draw modality ("Quiniela - Nocturna"), so the
    modality is what identifies them in the day list.
    """
    base, modality = split_modality(game_name)
    if modality and game_from_name(base) == GameType.QUINIELA:
        if tx_type == TransactionType.INCOME:
            return f"Total jugadas {modality}"
        return f"{category} - {modality}"
    return f"{category} - {game_name}"


def parse_transaction_type(value) -> TransactionType:
    try:
        return TransactionType(value)
    except ValueError:
        raise LedgerValidationError('El tipo debe ser "ingreso" o "egreso"')


@dataclass
class QuinielaTransaction:
    """
    Quiniela transaction record.

    `source` is the game (with modality) the line belongs to, `category` the
    concept ("Apuestas Nuevas", "Premio Pagado"...). Zero amounts are allowed.
    """
    account_id: int
    tx_type: TransactionType
    category: str
    amount: Decimal
    day_date: date
    source: str
    description: str = ""
    id: int | None = None
    is_active: bool = True

    @staticmethod
    def create(
        account_id: int,
        game: str,
        tx_type,
        amount: Decimal,
        day_date: date,
        category: str | None = None,
        description: str | None = None,
    ) -> "QuinielaTransaction":
        """
        Build a validated quiniela line from what the user typed

        Args:
            game: game display name, stored as source
            tx_type: "ingreso" / "egreso"
            category: concept; income lines default to the game's first
                income category
            description: defaults to default_description()

        Raises:
            LedgerValidationError
        """
        tx_type = parse_transaction_type(tx_type)
        game = (game or "").strip()
        category = (category or "").strip()
        description = (description or "").strip()

        if not game:
            raise LedgerValidationError("El juego es requerido")
        if len(game) > GAME_MAX_LEN:
            raise LedgerValidationError(
                f"El juego no puede tener más de {GAME_MAX_LEN} caracteres"
            )
        if amount < 0:
            raise LedgerValidationError("El monto no puede ser negativo")

        if not category:
            if tx_type == TransactionType.EGRESS:
                raise LedgerValidationError("La categoría es requerida para egresos")
            category = income_categories(game)[0]
        if len(category) > GAME_MAX_LEN:
            raise LedgerValidationError(
                f"La categoría no puede tener más de {GAME_MAX_LEN} caracteres"
            )

        if not description:
            description = default_description(game, tx_type, category)
        if len(description) > DESCRIPTION_MAX_LEN:
            raise LedgerValidationError(
                f"La descripción no puede tener más de {DESCRIPTION_MAX_LEN} caracteres"
            )

        return QuinielaTransaction(
            account_id=account_id,
            tx_type=tx_type,
            category=category,
            amount=amount,
            day_date=day_date,
            source=game,
            description=description,
        )
