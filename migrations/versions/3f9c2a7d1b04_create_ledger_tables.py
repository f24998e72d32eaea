"""create ledger tables

Revision ID: 3f9c2a7d1b04
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d1b04'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # 1. users
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('display_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('quiniela_number', sa.String(length=50), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('last_login_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )

    # 2. expenses
    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=20, scale=2), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('subcategory', sa.String(length=50), nullable=True),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('day_date', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('amount > 0', name='ck_expenses_amount_positive'),
    )
    op.create_index('ix_expenses_account_id', 'expenses', ['account_id'])
    op.create_index('ix_expenses_account_day', 'expenses', ['account_id', 'day_date'])

    # 3. quiniela_transactions
    op.create_table(
        'quiniela_transactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('tx_type', sa.String(length=10), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('amount', sa.Numeric(precision=20, scale=2), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('day_date', sa.Date(), nullable=False),
        sa.Column('source', sa.String(length=50), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("tx_type IN ('ingreso', 'egreso')", name='ck_quiniela_transactions_type'),
        sa.CheckConstraint('amount >= 0', name='ck_quiniela_transactions_amount'),
    )
    op.create_index('ix_quiniela_transactions_account_id', 'quiniela_transactions', ['account_id'])
    op.create_index('ix_quiniela_transactions_account_day', 'quiniela_transactions', ['account_id', 'day_date'])

    # 4. daily_balances
    op.create_table(
        'daily_balances',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('day_date', sa.Date(), nullable=False),
        sa.Column('opening_balance', sa.Numeric(precision=20, scale=2), nullable=False, server_default='0'),
        sa.Column('total_income', sa.Numeric(precision=20, scale=2), nullable=False, server_default='0'),
        sa.Column('total_egress', sa.Numeric(precision=20, scale=2), nullable=False, server_default='0'),
        sa.Column('closing_balance', sa.Numeric(precision=20, scale=2), nullable=False, server_default='0'),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('account_id', 'day_date', name='uq_daily_balances_account_day'),
    )
    op.create_index('ix_daily_balances_account_id', 'daily_balances', ['account_id'])

    # 5. finalized_days
    op.create_table(
        'finalized_days',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('day_date', sa.Date(), nullable=False),
        sa.Column('finalized_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('account_id', 'day_date', name='uq_finalized_days_account_day'),
    )
    op.create_index('ix_finalized_days_account_id', 'finalized_days', ['account_id'])

    # 6. draw_schedules
    op.create_table(
        'draw_schedules',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('modality_id', sa.Integer(), nullable=False),
        sa.Column('modality_name', sa.String(length=50), nullable=False),
        sa.Column('opens_at', sa.Time(), nullable=False),
        sa.Column('closes_at', sa.Time(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_draw_schedules_account_id', 'draw_schedules', ['account_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_draw_schedules_account_id', table_name='draw_schedules')
    op.drop_table('draw_schedules')
    op.drop_index('ix_finalized_days_account_id', table_name='finalized_days')
    op.drop_table('finalized_days')
    op.drop_index('ix_daily_balances_account_id', table_name='daily_balances')
    op.drop_table('daily_balances')
    op.drop_index('ix_quiniela_transactions_account_day', table_name='quiniela_transactions')
    op.drop_index('ix_quiniela_transactions_account_id', table_name='quiniela_transactions')
    op.drop_table('quiniela_transactions')
    op.drop_index('ix_expenses_account_day', table_name='expenses')
    op.drop_index('ix_expenses_account_id', table_name='expenses')
    op.drop_table('expenses')
    op.drop_table('users')
