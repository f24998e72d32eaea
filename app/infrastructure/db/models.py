"""
SQLAlchemy ORM models
"""
from decimal import Decimal
from datetime import date as date_type, time as time_type
from sqlalchemy import String, DateTime, Integer, Text, TIMESTAMP, Date, Time, func, Boolean, Numeric, UniqueConstraint, Index, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.db.session import Base


class User(Base):
    """
    Account owner. Every other table is scoped by account_id = users.id
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    # Login name: e-mail or quiniela agency number
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    quiniela_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")

    created_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    last_login_at: Mapped[DateTime | None] = mapped_column(
        TIMESTAMP(timezone=True), nullable=True
    )


class ExpenseModel(Base):
    """Cash expense of the internal till (soft-deleted via is_active)"""
    __tablename__ = "expenses"
    __table_args__ = (
        Index("ix_expenses_account_day", "account_id", "day_date"),
        CheckConstraint("amount > 0", name="ck_expenses_amount_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    subcategory: Mapped[str | None] = mapped_column(String(50), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    day_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )


class QuinielaTransactionModel(Base):
    """Betting-shop income/egress line; direction in tx_type, amount >= 0"""
    __tablename__ = "quiniela_transactions"
    __table_args__ = (
        Index("ix_quiniela_transactions_account_day", "account_id", "day_date"),
        CheckConstraint("tx_type IN ('ingreso', 'egreso')", name="ck_quiniela_transactions_type"),
        CheckConstraint("amount >= 0", name="ck_quiniela_transactions_amount"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    tx_type: Mapped[str] = mapped_column(String(10), nullable=False)  # ingreso / egreso
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    day_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    source: Mapped[str] = mapped_column(String(50), nullable=False)  # game / modality
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )


class DailyBalanceModel(Base):
    """
    Closing snapshot of a finalized day. Upserted, never duplicated.
    """
    __tablename__ = "daily_balances"
    __table_args__ = (
        UniqueConstraint("account_id", "day_date", name="uq_daily_balances_account_day"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    day_date: Mapped[date_type] = mapped_column(Date, nullable=False)

    opening_balance: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False, server_default="0")
    total_income: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False, server_default="0")
    total_egress: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False, server_default="0")
    closing_balance: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False, server_default="0")

    updated_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )


class FinalizedDayModel(Base):
    """
    Day lock marker: its existence alone makes (account, day) read-only.
    """
    __tablename__ = "finalized_days"
    __table_args__ = (
        UniqueConstraint("account_id", "day_date", name="uq_finalized_days_account_day"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    day_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    finalized_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )


class DrawScheduleModel(Base):
    """Per-account closing time of each quiniela modality"""
    __tablename__ = "draw_schedules"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    modality_id: Mapped[int] = mapped_column(Integer, nullable=False)
    modality_name: Mapped[str] = mapped_column(String(50), nullable=False)
    opens_at: Mapped[time_type] = mapped_column(Time, nullable=False)
    closes_at: Mapped[time_type] = mapped_column(Time, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
