"""Create ledger tables

Revision ID: 20251001_000001
Revises: 
Create Date: 2025-10-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20251001_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('normalized_email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('company', sa.String(255), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('province', sa.String(50), nullable=True),
        sa.Column('referral_code', sa.String(20), nullable=False),
        sa.Column('referred_by', sa.String(20), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('total_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_paid', sa.DECIMAL(12, 2), nullable=False, server_default='0'),
        sa.Column('referral_earnings', sa.DECIMAL(12, 2), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('total_points >= 0', name='check_user_total_points_non_negative'),
        sa.CheckConstraint('total_paid >= 0', name='check_user_total_paid_non_negative'),
        sa.CheckConstraint('referral_earnings >= 0', name='check_user_referral_earnings_non_negative'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_normalized_email', 'users', ['normalized_email'], unique=True)
    op.create_index('ix_users_referral_code', 'users', ['referral_code'], unique=True)
    op.create_index('ix_users_total_points', 'users', ['total_points'])

    op.create_table(
        'certificate_sequences',
        sa.Column('year', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('last_value', sa.Integer(), nullable=False, server_default='0'),
        sa.CheckConstraint('last_value >= 0', name='check_certificate_sequence_non_negative'),
        sa.PrimaryKeyConstraint('year')
    )

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('points', sa.Integer(), nullable=False),
        sa.Column('amount', sa.DECIMAL(12, 2), nullable=False),
        sa.Column('referral_discount', sa.DECIMAL(12, 2), nullable=False, server_default='0'),
        sa.Column('referral_code_used', sa.String(20), nullable=True),
        sa.Column('certificate_number', sa.String(32), nullable=False),
        sa.Column('transaction_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('transaction_amount', sa.DECIMAL(15, 2), nullable=False),
        sa.Column('etransfer_reference', sa.String(255), nullable=False),
        sa.Column('etransfer_email', sa.String(255), nullable=False),
        sa.Column('etransfer_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('verified_by', sa.Integer(), nullable=True),
        sa.Column('verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('points >= 1', name='check_transaction_points_min'),
        sa.CheckConstraint('amount >= 0', name='check_transaction_amount_non_negative'),
        sa.CheckConstraint('referral_discount >= 0', name='check_transaction_referral_discount_non_negative'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['verified_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_transactions_user_id', 'transactions', ['user_id'])
    op.create_index('ix_transactions_certificate_number', 'transactions', ['certificate_number'], unique=True)
    op.create_index('ix_transactions_status', 'transactions', ['status'])
    op.create_index('idx_transaction_created_at', 'transactions', ['created_at'])
    op.create_index('idx_transaction_referral_code_status', 'transactions', ['referral_code_used', 'status'])

    op.create_table(
        'referrals',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('referrer_id', sa.Integer(), nullable=False),
        sa.Column('referred_user_id', sa.Integer(), nullable=False),
        sa.Column('transaction_id', sa.Integer(), nullable=False),
        sa.Column('referral_code', sa.String(20), nullable=False),
        sa.Column('reward_amount', sa.DECIMAL(12, 2), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('payment_method', sa.String(20), nullable=True),
        sa.Column('payment_reference', sa.String(255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('reward_amount >= 0', name='check_referral_reward_non_negative'),
        sa.CheckConstraint('referrer_id != referred_user_id', name='check_referral_not_self'),
        sa.ForeignKeyConstraint(['referrer_id'], ['users.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['referred_user_id'], ['users.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['transaction_id'], ['transactions.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_referrals_referrer_id', 'referrals', ['referrer_id'])
    op.create_index('ix_referrals_referred_user_id', 'referrals', ['referred_user_id'])
    op.create_index('ix_referrals_transaction_id', 'referrals', ['transaction_id'], unique=True)
    op.create_index('ix_referrals_status', 'referrals', ['status'])

    op.create_table(
        'withdrawal_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.DECIMAL(12, 2), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('amount > 0', name='check_withdrawal_amount_positive'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_withdrawal_requests_user_id', 'withdrawal_requests', ['user_id'])
    op.create_index('ix_withdrawal_requests_status', 'withdrawal_requests', ['status'])


def downgrade() -> None:
    op.drop_index('ix_withdrawal_requests_status', 'withdrawal_requests')
    op.drop_index('ix_withdrawal_requests_user_id', 'withdrawal_requests')
    op.drop_table('withdrawal_requests')

    op.drop_index('ix_referrals_status', 'referrals')
    op.drop_index('ix_referrals_transaction_id', 'referrals')
    op.drop_index('ix_referrals_referred_user_id', 'referrals')
    op.drop_index('ix_referrals_referrer_id', 'referrals')
    op.drop_table('referrals')

    op.drop_index('idx_transaction_referral_code_status', 'transactions')
    op.drop_index('idx_transaction_created_at', 'transactions')
    op.drop_index('ix_transactions_status', 'transactions')
    op.drop_index('ix_transactions_certificate_number', 'transactions')
    op.drop_index('ix_transactions_user_id', 'transactions')
    op.drop_table('transactions')

    op.drop_table('certificate_sequences')

    op.drop_index('ix_users_total_points', 'users')
    op.drop_index('ix_users_referral_code', 'users')
    op.drop_index('ix_users_normalized_email', 'users')
    op.drop_index('ix_users_email', 'users')
    op.drop_table('users')
