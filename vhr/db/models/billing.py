from sqlalchemy import Column, String, DateTime, Integer, Numeric, Text, JSON

from .base import Base, SoftDeleteMixin, TimestampMixin


class Matter(SoftDeleteMixin, Base):
    __tablename__ = 'matters'
    customer_id = Column(Integer, nullable=False, index=True)
    description = Column(Text, nullable=False)
    fee = Column(Numeric(12, 2), nullable=True)
    case_worker = Column(String(255), nullable=True)
    status = Column(String(64), nullable=False, default='open', index=True)
    participants = Column(JSON, nullable=True)
    supervisor = Column(String(255), nullable=True)
    issue_date = Column(DateTime(timezone=True), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    close_date = Column(DateTime(timezone=True), nullable=True)


class Invoice(SoftDeleteMixin, Base):
    __tablename__ = 'invoices'
    invoice_number = Column(String(64), nullable=False, index=True)
    customer_id = Column(Integer, nullable=False, index=True)
    currency_id = Column(Integer, nullable=True)
    order_id = Column(Integer, nullable=True)
    plan = Column(String(255), nullable=True)
    status = Column(String(32), nullable=False, default='draft', index=True)
    payment_status = Column(String(32), nullable=False, default='pending')
    items = Column(JSON, nullable=False, default=list)
    sub_total = Column(Numeric(12, 2), nullable=False, default=0)
    vat_total = Column(Numeric(12, 2), nullable=False, default=0)
    discount_total = Column(Numeric(12, 2), nullable=False, default=0)
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    outstanding_balance = Column(Numeric(12, 2), nullable=False, default=0)
    due_date = Column(DateTime(timezone=True), nullable=True)
    # Creator, used to scope VAT reporting
    user_id = Column(Integer, nullable=True, index=True)
    marked_bad_on = Column(DateTime(timezone=True), nullable=True)


class Installment(TimestampMixin, Base):
    """Installments are removed physically; there is no soft-delete flag."""
    __tablename__ = 'installments'
    invoice_id = Column(Integer, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(32), nullable=False, default='unpaid', index=True)
    paid_date = Column(DateTime(timezone=True), nullable=True)


class TimeBill(SoftDeleteMixin, Base):
    __tablename__ = 'time_bills'
    customer_id = Column(Integer, nullable=True, index=True)
    matter_id = Column(Integer, nullable=True, index=True)
    entry_id = Column(String(64), nullable=True)
    case_worker = Column(String(255), nullable=True)
    matter = Column(String(255), nullable=True)
    cost_description = Column(Text, nullable=True)
    unit = Column(String(64), nullable=True)
    # 'H:MM' or decimal hours, kept as entered
    duration = Column(String(32), nullable=False)
    # Decimal string
    hourly_rate = Column(String(32), nullable=False)
    activity = Column(String(255), nullable=True)
    type = Column(String(64), nullable=True)
    category = Column(String(255), nullable=True)
    sub_category = Column(String(255), nullable=True)
    date_of_work = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(64), nullable=True, index=True)


class Note(SoftDeleteMixin, Base):
    __tablename__ = 'notes'
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    customer_id = Column(Integer, nullable=False, index=True)
    type = Column(String(100), nullable=False, index=True)


class CreditNote(SoftDeleteMixin, Base):
    __tablename__ = 'credit_notes'
    credit_note_number = Column(String(64), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    customer_id = Column(Integer, nullable=False, index=True)
    invoice_id = Column(Integer, nullable=False, index=True)
    currency_id = Column(Integer, nullable=False)
    user_id = Column(Integer, nullable=True, index=True)
    status = Column(String(32), nullable=False, default='draft', index=True)


class FinancialStatement(SoftDeleteMixin, Base):
    """
    Completion statement for a matter.

    Line items are stored in the base currency as JSON lists; the three
    totals are recomputed from them on every write.
    """
    __tablename__ = 'financial_statements'
    matter_id = Column(String(64), nullable=False, default='')
    user_id = Column(Integer, nullable=True)
    customer_id = Column(Integer, nullable=False, index=True)
    currency_id = Column(Integer, nullable=True)
    customer_name = Column(String(255), nullable=False, default='')
    customer_email = Column(String(255), nullable=False, default='')
    case_description = Column(Text, nullable=False, default='')
    completion_date = Column(DateTime(timezone=True), nullable=True)
    disbursements = Column(JSON, nullable=False, default=list)
    total_disbursements = Column(Numeric(12, 2), nullable=False, default=0)
    our_cost = Column(JSON, nullable=False, default=list)
    total_our_costs = Column(Numeric(12, 2), nullable=False, default=0)
    summary = Column(JSON, nullable=False, default=list)
    total_amount_required = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(32), nullable=False, default='draft', index=True)
