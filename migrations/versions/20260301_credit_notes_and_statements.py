"""
Add credit notes and financial statements.

- invoices gain user_id (creator, scopes VAT reporting) and marked_bad_on
- new credit_notes and financial_statements tables
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20260301_credit_notes_and_statements'
down_revision = '20260101_initial_schema'
branch_labels = None
depends_on = None


def _base_columns():
    return [
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_delete', sa.Boolean(), nullable=False, server_default=sa.false()),
    ]


def upgrade() -> None:
    with op.batch_alter_table('invoices') as batch:
        batch.add_column(sa.Column('user_id', sa.Integer(), nullable=True))
        batch.add_column(sa.Column('marked_bad_on', sa.DateTime(timezone=True), nullable=True))
    op.create_index('ix_invoices_user_id', 'invoices', ['user_id'])

    op.create_table(
        'credit_notes',
        *_base_columns(),
        sa.Column('credit_note_number', sa.String(64), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('invoice_id', sa.Integer(), nullable=False),
        sa.Column('currency_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(32), nullable=False, server_default='draft'),
    )
    for column in ('is_delete', 'credit_note_number', 'customer_id', 'invoice_id', 'user_id', 'status'):
        op.create_index(f'ix_credit_notes_{column}', 'credit_notes', [column])

    op.create_table(
        'financial_statements',
        *_base_columns(),
        sa.Column('matter_id', sa.String(64), nullable=False, server_default=''),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('currency_id', sa.Integer(), nullable=True),
        sa.Column('customer_name', sa.String(255), nullable=False, server_default=''),
        sa.Column('customer_email', sa.String(255), nullable=False, server_default=''),
        sa.Column('case_description', sa.Text(), nullable=False, server_default=''),
        sa.Column('completion_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('disbursements', sa.JSON(), nullable=False),
        sa.Column('total_disbursements', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('our_cost', sa.JSON(), nullable=False),
        sa.Column('total_our_costs', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('summary', sa.JSON(), nullable=False),
        sa.Column('total_amount_required', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('status', sa.String(32), nullable=False, server_default='draft'),
    )
    for column in ('is_delete', 'customer_id', 'status'):
        op.create_index(f'ix_financial_statements_{column}', 'financial_statements', [column])


def downgrade() -> None:
    op.drop_table('financial_statements')
    op.drop_table('credit_notes')
    op.drop_index('ix_invoices_user_id', table_name='invoices')
    with op.batch_alter_table('invoices') as batch:
        batch.drop_column('marked_bad_on')
        batch.drop_column('user_id')
