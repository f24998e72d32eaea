"""
SqlLedgerStore - LedgerStore on top of a SQLAlchemy session
"""
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.application.ledger_store import LedgerStore
from app.domain.daily_balance import DailyBalance
from app.domain.draw_schedule import DrawSchedule
from app.domain.errors import DuplicateRecordError
from app.domain.expense import Expense
from app.domain.quiniela import QuinielaTransaction, TransactionType
from app.infrastructure.db.models import (
    ExpenseModel,
    QuinielaTransactionModel,
    DailyBalanceModel,
    FinalizedDayModel,
    DrawScheduleModel,
)
from app.utils.money import to_money


class SqlLedgerStore(LedgerStore):
    """
    Writes are flushed immediately (so ids and constraint violations show up
    at the call site) and committed by unit_of_work().
    """

    def __init__(self, db: Session):
        self.db = db

    # --- expenses ---

    def list_expenses(self, account_id: int, day: date) -> list[Expense]:
        rows = self.db.query(ExpenseModel).filter(
            ExpenseModel.account_id == account_id,
            ExpenseModel.day_date == day,
            ExpenseModel.is_active == True,  # noqa: E712
        ).order_by(ExpenseModel.id.desc()).all()
        return [_to_expense(r) for r in rows]

    def get_expense(self, account_id: int, expense_id: int) -> Expense | None:
        row = self._expense_row(account_id, expense_id)
        return _to_expense(row) if row else None

    def add_expense(self, expense: Expense) -> Expense:
        row = ExpenseModel(
            account_id=expense.account_id,
            amount=expense.amount,
            category=expense.category,
            subcategory=expense.subcategory,
            description=expense.description,
            day_date=expense.day_date,
            is_active=expense.is_active,
        )
        self.db.add(row)
        self.db.flush()
        return _to_expense(row)

    def save_expense(self, expense: Expense) -> Expense:
        row = self.db.query(ExpenseModel).filter(
            ExpenseModel.id == expense.id,
            ExpenseModel.account_id == expense.account_id,
        ).one()
        row.amount = expense.amount
        row.category = expense.category
        row.subcategory = expense.subcategory
        row.description = expense.description
        row.day_date = expense.day_date
        row.is_active = expense.is_active
        self.db.flush()
        return _to_expense(row)

    def sum_expenses(self, account_id: int, start: date, end: date) -> Decimal:
        total = self.db.query(
            func.coalesce(func.sum(ExpenseModel.amount), 0)
        ).filter(
            ExpenseModel.account_id == account_id,
            ExpenseModel.day_date >= start,
            ExpenseModel.day_date <= end,
            ExpenseModel.is_active == True,  # noqa: E712
        ).scalar()
        return to_money(total)

    def _expense_row(self, account_id: int, expense_id: int) -> ExpenseModel | None:
        return self.db.query(ExpenseModel).filter(
            ExpenseModel.id == expense_id,
            ExpenseModel.account_id == account_id,
            ExpenseModel.is_active == True,  # noqa: E712
        ).first()

    # --- quiniela transactions ---

    def list_quiniela_transactions(self, account_id: int, day: date) -> list[QuinielaTransaction]:
        rows = self.db.query(QuinielaTransactionModel).filter(
            QuinielaTransactionModel.account_id == account_id,
            QuinielaTransactionModel.day_date == day,
            QuinielaTransactionModel.is_active == True,  # noqa: E712
        ).order_by(QuinielaTransactionModel.id.desc()).all()
        return [_to_quiniela(r) for r in rows]

    def get_quiniela_transaction(self, account_id: int, transaction_id: int) -> QuinielaTransaction | None:
        row = self.db.query(QuinielaTransactionModel).filter(
            QuinielaTransactionModel.id == transaction_id,
            QuinielaTransactionModel.account_id == account_id,
            QuinielaTransactionModel.is_active == True,  # noqa: E712
        ).first()
        return _to_quiniela(row) if row else None

    def add_quiniela_transaction(self, transaction: QuinielaTransaction) -> QuinielaTransaction:
        row = QuinielaTransactionModel(
            account_id=transaction.account_id,
            tx_type=transaction.tx_type.value,
            category=transaction.category,
            amount=transaction.amount,
            description=transaction.description,
            day_date=transaction.day_date,
            source=transaction.source,
            is_active=transaction.is_active,
        )
        self.db.add(row)
        self.db.flush()
        return _to_quiniela(row)

    def save_quiniela_transaction(self, transaction: QuinielaTransaction) -> QuinielaTransaction:
        row = self.db.query(QuinielaTransactionModel).filter(
            QuinielaTransactionModel.id == transaction.id,
            QuinielaTransactionModel.account_id == transaction.account_id,
        ).one()
        row.tx_type = transaction.tx_type.value
        row.category = transaction.category
        row.amount = transaction.amount
        row.description = transaction.description
        row.day_date = transaction.day_date
        row.source = transaction.source
        row.is_active = transaction.is_active
        self.db.flush()
        return _to_quiniela(row)

    def sum_quiniela(
        self, account_id: int, start: date, end: date, tx_type: TransactionType
    ) -> Decimal:
        total = self.db.query(
            func.coalesce(func.sum(QuinielaTransactionModel.amount), 0)
        ).filter(
            QuinielaTransactionModel.account_id == account_id,
            QuinielaTransactionModel.day_date >= start,
            QuinielaTransactionModel.day_date <= end,
            QuinielaTransactionModel.tx_type == tx_type.value,
            QuinielaTransactionModel.is_active == True,  # noqa: E712
        ).scalar()
        return to_money(total)

    # --- daily balance snapshots ---

    def get_daily_balance(self, account_id: int, day: date) -> DailyBalance | None:
        row = self._daily_balance_row(account_id, day)
        if row is None:
            return None
        return DailyBalance(
            account_id=row.account_id,
            day_date=row.day_date,
            opening_balance=to_money(row.opening_balance),
            total_income=to_money(row.total_income),
            total_egress=to_money(row.total_egress),
            closing_balance=to_money(row.closing_balance),
        )

    def upsert_daily_balance(self, balance: DailyBalance) -> None:
        row = self._daily_balance_row(balance.account_id, balance.day_date)
        if row is None:
            row = DailyBalanceModel(account_id=balance.account_id, day_date=balance.day_date)
            self.db.add(row)
        row.opening_balance = balance.opening_balance
        row.total_income = balance.total_income
        row.total_egress = balance.total_egress
        row.closing_balance = balance.closing_balance
        self._flush_unique(f"Ya existe un saldo para el {balance.day_date.isoformat()}")

    def _daily_balance_row(self, account_id: int, day: date) -> DailyBalanceModel | None:
        return self.db.query(DailyBalanceModel).filter(
            DailyBalanceModel.account_id == account_id,
            DailyBalanceModel.day_date == day,
        ).first()

    # --- finalized day markers ---

    def is_day_finalized(self, account_id: int, day: date) -> bool:
        return self.db.query(FinalizedDayModel.id).filter(
            FinalizedDayModel.account_id == account_id,
            FinalizedDayModel.day_date == day,
        ).first() is not None

    def add_finalized_day(self, account_id: int, day: date, finalized_at: datetime) -> None:
        self.db.add(FinalizedDayModel(
            account_id=account_id,
            day_date=day,
            finalized_at=finalized_at,
        ))
        self._flush_unique(f"El día {day.isoformat()} ya está finalizado")

    def list_finalized_days(self, account_id: int) -> list[date]:
        rows = self.db.query(FinalizedDayModel.day_date).filter(
            FinalizedDayModel.account_id == account_id,
        ).order_by(FinalizedDayModel.day_date.desc()).all()
        return [r.day_date for r in rows]

    # --- draw schedules ---

    def list_draw_schedules(self, account_id: int) -> list[DrawSchedule]:
        rows = self.db.query(DrawScheduleModel).filter(
            DrawScheduleModel.account_id == account_id,
            DrawScheduleModel.is_active == True,  # noqa: E712
        ).order_by(DrawScheduleModel.modality_id).all()
        return [
            DrawSchedule(
                modality_id=r.modality_id,
                modality_name=r.modality_name,
                opens_at=r.opens_at,
                closes_at=r.closes_at,
            )
            for r in rows
        ]

    def replace_draw_schedules(self, account_id: int, schedules: list[DrawSchedule]) -> None:
        self.db.query(DrawScheduleModel).filter(
            DrawScheduleModel.account_id == account_id,
            DrawScheduleModel.is_active == True,  # noqa: E712
        ).update({DrawScheduleModel.is_active: False}, synchronize_session="fetch")
        for s in schedules:
            self.db.add(DrawScheduleModel(
                account_id=account_id,
                modality_id=s.modality_id,
                modality_name=s.modality_name,
                opens_at=s.opens_at,
                closes_at=s.closes_at,
                is_active=True,
            ))
        self.db.flush()

    # --- transactions ---

    @contextmanager
    def unit_of_work(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _flush_unique(self, message: str) -> None:
        try:
            self.db.flush()
        except IntegrityError as exc:
            raise DuplicateRecordError(message) from exc


def _to_expense(row: ExpenseModel) -> Expense:
    return Expense(
        id=row.id,
        account_id=row.account_id,
        amount=to_money(row.amount),
        category=row.category,
        subcategory=row.subcategory,
        description=row.description,
        day_date=row.day_date,
        is_active=row.is_active,
    )


def _to_quiniela(row: QuinielaTransactionModel) -> QuinielaTransaction:
    return QuinielaTransaction(
        id=row.id,
        account_id=row.account_id,
        tx_type=TransactionType(row.tx_type),
        category=row.category,
        amount=to_money(row.amount),
        description=row.description,
        day_date=row.day_date,
        source=row.source,
        is_active=row.is_active,
    )
