"""
Quiniela transaction use cases - CRUD of betting-shop lines, guarded by the day lock
"""
import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal

from app.application.day_guard import MutationGuard, RecordKind
from app.application.ledger_store import LedgerStore
from app.domain.errors import RecordNotFoundError
from app.domain.quiniela import (
    QuinielaTransaction,
    GameType,
    GAME_INCOME_CATEGORIES,
    EGRESS_CATEGORIES,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameCatalogEntry:
    game: GameType
    income_categories: tuple[str, ...]
    egress_categories: tuple[str, ...]


def list_game_catalog() -> list[GameCatalogEntry]:
    """Every game with the categories its income / egress lines may use"""
    return [
        GameCatalogEntry(
            game=game,
            income_categories=GAME_INCOME_CATEGORIES[game],
            egress_categories=EGRESS_CATEGORIES,
        )
        for game in GameType
    ]


class ListQuinielaTransactionsUseCase:
    def __init__(self, store: LedgerStore):
        self.store = store

    def execute(self, account_id: int, day: date) -> list[QuinielaTransaction]:
        return self.store.list_quiniela_transactions(account_id, day)


class CreateQuinielaTransactionUseCase:
    def __init__(self, store: LedgerStore, today: date | None = None):
        self.store = store
        self.guard = MutationGuard(store, today=today, kind=RecordKind.QUINIELA)

    def execute(
        self,
        account_id: int,
        game: str,
        tx_type: str,
        amount: Decimal,
        day: date,
        category: str | None = None,
        description: str | None = None,
    ) -> QuinielaTransaction:
        """
        Record an income or egress line of a game

        Args:
            game: game display name ("Quiniela - Matutina", "Loto"...)
            tx_type: "ingreso" / "egreso"
            amount: >= 0, zero is accepted
            category: concept; defaults to the game's income category for income

        Raises:
            LedgerValidationError, FutureDateError, DayFinalizedError
        """
        transaction = QuinielaTransaction.create(
            account_id=account_id,
            game=game,
            tx_type=tx_type,
            amount=amount,
            day_date=day,
            category=category,
            description=description,
        )
        self.guard.check_create(account_id, day)

        with self.store.unit_of_work():
            created = self.store.add_quiniela_transaction(transaction)

        logger.info(
            "Quiniela transaction created: account=%s id=%s type=%s amount=%s game=%s day=%s",
            account_id, created.id, created.tx_type.value, created.amount,
            created.source, day.isoformat(),
        )
        return created


class UpdateQuinielaTransactionUseCase:
    def __init__(self, store: LedgerStore, today: date | None = None):
        self.store = store
        self.guard = MutationGuard(store, today=today, kind=RecordKind.QUINIELA)

    def execute(
        self,
        transaction_id: int,
        account_id: int,
        game: str,
        tx_type: str,
        amount: Decimal,
        day: date,
        category: str | None = None,
        description: str | None = None,
    ) -> QuinielaTransaction:
        """
        Raises:
            RecordNotFoundError, LedgerValidationError, DayFinalizedError,
            FutureDateError
        """
        existing = self.store.get_quiniela_transaction(account_id, transaction_id)
        if existing is None:
            raise RecordNotFoundError("Transacción no encontrada")

        validated = QuinielaTransaction.create(
            account_id=account_id,
            game=game,
            tx_type=tx_type,
            amount=amount,
            day_date=day,
            category=category,
            description=description,
        )
        self.guard.check_update(account_id, current_day=existing.day_date, new_day=day)

        with self.store.unit_of_work():
            updated = self.store.save_quiniela_transaction(replace(validated, id=existing.id))

        logger.info(
            "Quiniela transaction updated: account=%s id=%s type=%s amount=%s day=%s",
            account_id, transaction_id, updated.tx_type.value, updated.amount, day.isoformat(),
        )
        return updated


class DeleteQuinielaTransactionUseCase:
    """Use case: soft-delete a quiniela line"""

    def __init__(self, store: LedgerStore):
        self.store = store
        self.guard = MutationGuard(store, kind=RecordKind.QUINIELA)

    def execute(self, transaction_id: int, account_id: int) -> None:
        existing = self.store.get_quiniela_transaction(account_id, transaction_id)
        if existing is None:
            raise RecordNotFoundError("Transacción no encontrada")

        self.guard.check_delete(account_id, existing.day_date)

        with self.store.unit_of_work():
            self.store.save_quiniela_transaction(replace(existing, is_active=False))

        logger.info(
            "Quiniela transaction deleted: account=%s id=%s day=%s",
            account_id, transaction_id, existing.day_date.isoformat(),
        )
