"""
Initial schema: users and groups, customers, billing, currencies, heads-up
schedules and the business taxonomy.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# Alembic revision identifiers
revision: str = '20260101_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def _soft_delete():
    return [sa.Column('is_delete', sa.Boolean(), nullable=False, server_default=sa.false())]


def _index(table: str, *columns: str, unique: bool = False) -> None:
    for column in columns:
        op.create_index(f'ix_{table}_{column}', table, [column], unique=unique)


def upgrade() -> None:
    op.create_table(
        'user_groups',
        *_timestamps(),
        *_soft_delete(),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('permissions', sa.JSON(), nullable=False),
        sa.Column('custom_permissions', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    _index('user_groups', 'is_delete', 'title')

    op.create_table(
        'users',
        *_timestamps(),
        *_soft_delete(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('role', sa.String(32), nullable=False, server_default='user'),
        sa.Column('otp', sa.String(255), nullable=True),
        sa.Column('otp_expiry', sa.DateTime(timezone=True), nullable=True),
        sa.Column('user_group_id', sa.Integer(), sa.ForeignKey('user_groups.id'), nullable=True),
    )
    _index('users', 'is_delete', 'email', 'user_group_id')

    op.create_table(
        'customers',
        *_timestamps(),
        *_soft_delete(),
        sa.Column('first_name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=False),
        sa.Column('business_name', sa.String(255), nullable=False),
        sa.Column('trading_name', sa.String(255), nullable=True),
        sa.Column('subscription', sa.String(255), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('business_size', sa.Integer(), nullable=True),
        sa.Column('business_entity', sa.String(255), nullable=True),
        sa.Column('business_type', sa.String(255), nullable=True),
        sa.Column('phone_number', sa.String(15), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('practice_area', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(32), nullable=False, server_default='Free'),
        sa.Column('expiry_date', sa.DateTime(timezone=True), nullable=True),
    )
    _index('customers', 'is_delete', 'business_type', 'email', 'status')

    op.create_table(
        'customer_verifications',
        *_timestamps(),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('email_otp', sa.String(16), nullable=True),
        sa.Column('email_otp_expiry', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_email_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    _index('customer_verifications', 'email', unique=True)

    op.create_table(
        'matters',
        *_timestamps(),
        *_soft_delete(),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('fee', sa.Numeric(12, 2), nullable=True),
        sa.Column('case_worker', sa.String(255), nullable=True),
        sa.Column('status', sa.String(64), nullable=False, server_default='open'),
        sa.Column('participants', sa.JSON(), nullable=True),
        sa.Column('supervisor', sa.String(255), nullable=True),
        sa.Column('issue_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('close_date', sa.DateTime(timezone=True), nullable=True),
    )
    _index('matters', 'is_delete', 'customer_id', 'status')

    op.create_table(
        'invoices',
        *_timestamps(),
        *_soft_delete(),
        sa.Column('invoice_number', sa.String(64), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('currency_id', sa.Integer(), nullable=True),
        sa.Column('order_id', sa.Integer(), nullable=True),
        sa.Column('plan', sa.String(255), nullable=True),
        sa.Column('status', sa.String(32), nullable=False, server_default='draft'),
        sa.Column('payment_status', sa.String(32), nullable=False, server_default='pending'),
        sa.Column('items', sa.JSON(), nullable=False),
        sa.Column('sub_total', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('vat_total', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('discount_total', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('outstanding_balance', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
    )
    _index('invoices', 'is_delete', 'invoice_number', 'customer_id', 'status')

    op.create_table(
        'installments',
        *_timestamps(),
        sa.Column('invoice_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(32), nullable=False, server_default='unpaid'),
        sa.Column('paid_date', sa.DateTime(timezone=True), nullable=True),
    )
    _index('installments', 'invoice_id', 'status')

    op.create_table(
        'time_bills',
        *_timestamps(),
        *_soft_delete(),
        sa.Column('customer_id', sa.Integer(), nullable=True),
        sa.Column('matter_id', sa.Integer(), nullable=True),
        sa.Column('entry_id', sa.String(64), nullable=True),
        sa.Column('case_worker', sa.String(255), nullable=True),
        sa.Column('matter', sa.String(255), nullable=True),
        sa.Column('cost_description', sa.Text(), nullable=True),
        sa.Column('unit', sa.String(64), nullable=True),
        sa.Column('duration', sa.String(32), nullable=False),
        sa.Column('hourly_rate', sa.String(32), nullable=False),
        sa.Column('activity', sa.String(255), nullable=True),
        sa.Column('type', sa.String(64), nullable=True),
        sa.Column('category', sa.String(255), nullable=True),
        sa.Column('sub_category', sa.String(255), nullable=True),
        sa.Column('date_of_work', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.String(64), nullable=True),
    )
    _index('time_bills', 'is_delete', 'customer_id', 'matter_id', 'status')

    op.create_table(
        'notes',
        *_timestamps(),
        *_soft_delete(),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(100), nullable=False),
    )
    _index('notes', 'is_delete', 'customer_id', 'type')

    op.create_table(
        'currencies',
        *_timestamps(),
        *_soft_delete(),
        sa.Column('customer_id', sa.Integer(), nullable=True),
        sa.Column('currency_code', sa.String(10), nullable=False),
        sa.Column('currency_name', sa.String(100), nullable=False),
        sa.Column('currency_symbol', sa.String(10), nullable=False),
        sa.Column('exchange_rate', sa.Float(), nullable=False, server_default='1'),
        sa.Column('is_crypto', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('usd_price', sa.Float(), nullable=False, server_default='0'),
    )
    _index('currencies', 'is_delete', 'customer_id', 'currency_code')

    op.create_table(
        'heads_up',
        *_timestamps(),
        *_soft_delete(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('module', sa.String(100), nullable=False),
        sa.Column('enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('rule', sa.Text(), nullable=True),
        sa.Column('frequency', sa.String(50), nullable=False),
        sa.Column('time_of_day', sa.String(10), nullable=True),
        sa.Column('time_zone', sa.String(64), nullable=True),
        sa.Column('status', sa.String(16), nullable=False, server_default='active'),
        sa.Column('next_run_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_run_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rows_in_email', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('content_type', sa.String(50), nullable=True),
        sa.Column('results_grouped', sa.String(50), nullable=True),
    )
    _index('heads_up', 'is_delete', 'module', 'status')

    for table in ('business_types', 'business_entities', 'business_practice_areas'):
        op.create_table(
            table,
            *_timestamps(),
            *_soft_delete(),
            sa.Column('name', sa.String(255), nullable=False),
        )
        _index(table, 'is_delete', 'name')

    op.create_table(
        'subcategories',
        *_timestamps(),
        *_soft_delete(),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('practice_area_id', sa.Integer(), nullable=False),
    )
    _index('subcategories', 'is_delete', 'title', 'practice_area_id')

    op.create_table(
        'custom_field_groups',
        *_timestamps(),
        *_soft_delete(),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('subcategory_id', sa.Integer(), nullable=True),
        sa.Column('linked_to', sa.String(255), nullable=True),
    )
    _index('custom_field_groups', 'is_delete', 'title', 'subcategory_id')

    op.create_table(
        'custom_fields',
        *_timestamps(),
        *_soft_delete(),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('practice_area_id', sa.Integer(), nullable=True),
        sa.Column('field_group_id', sa.Integer(), nullable=True),
        sa.Column('template_keyword', sa.String(255), nullable=True),
        sa.Column('type', sa.String(32), nullable=False, server_default='text'),
    )
    _index('custom_fields', 'is_delete', 'title', 'practice_area_id', 'field_group_id')


def downgrade() -> None:
    for table in (
        'custom_fields',
        'custom_field_groups',
        'subcategories',
        'business_practice_areas',
        'business_entities',
        'business_types',
        'heads_up',
        'currencies',
        'notes',
        'time_bills',
        'installments',
        'invoices',
        'matters',
        'customer_verifications',
        'customers',
        'users',
        'user_groups',
    ):
        op.drop_table(table)
