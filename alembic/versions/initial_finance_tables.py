"""create users, transactions, budgets, pots and recurring bills

Revision ID: initial_finance_tables
Revises:
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'initial_finance_tables'
down_revision = None
branch_labels = None
depends_on = None

def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now()),
    ]

def _owner():
    return sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(254), nullable=False),
        sa.Column('hashed_password', sa.String, nullable=True),
        sa.Column('full_name', sa.String(100), nullable=False),
        sa.Column('balance', sa.Float, nullable=False, server_default='0'),
        sa.Column('avatar_url', sa.String, nullable=True),
        sa.Column('is_verified', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('google_id', sa.String, nullable=True, unique=True),
        sa.Column('auth_provider', sa.String(20), nullable=False, server_default='local'),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'transactions',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        _owner(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('avatar', sa.String(500), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('date', sa.DateTime, nullable=False),
        sa.Column('amount', sa.Float, nullable=False),
        sa.Column('recurring', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('is_template', sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_transactions_user_id', 'transactions', ['user_id'])
    op.create_index('ix_transactions_user_date', 'transactions', ['user_id', 'date'])
    op.create_index('ix_transactions_user_category', 'transactions', ['user_id', 'category'])

    op.create_table(
        'budgets',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        _owner(),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('maximum', sa.Float, nullable=False),
        sa.Column('theme', sa.String(7), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'category', name='uq_budgets_user_category'),
        sa.UniqueConstraint('user_id', 'theme', name='uq_budgets_user_theme'),
    )
    op.create_index('ix_budgets_user_id', 'budgets', ['user_id'])

    op.create_table(
        'pots',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        _owner(),
        sa.Column('name', sa.String(30), nullable=False),
        sa.Column('target', sa.Float, nullable=False),
        sa.Column('total', sa.Float, nullable=False, server_default='0'),
        sa.Column('theme', sa.String(7), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'theme', name='uq_pots_user_theme'),
    )
    op.create_index('ix_pots_user_id', 'pots', ['user_id'])

    op.create_table(
        'recurring_bills',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        _owner(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('amount', sa.Float, nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('due_day', sa.Integer, nullable=False),
        sa.Column('avatar', sa.String(500), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_recurring_bills_user_id', 'recurring_bills', ['user_id'])
    op.create_index('ix_recurring_bills_user_name', 'recurring_bills', ['user_id', 'name'])

def downgrade():
    op.drop_table('recurring_bills')
    op.drop_table('pots')
    op.drop_table('budgets')
    op.drop_table('transactions')
    op.drop_table('users')
