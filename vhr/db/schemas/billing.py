from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from .common import CamelModel


class InvoiceStatus(str, Enum):
    draft = "draft"
    sent = "sent"
    paid = "paid"
    overdue = "overdue"
    cancelled = "cancelled"
    partialy_paid = "partialyPaid"
    disputed = "disputed"
    reminder = "reminder"
    resend = "resend"
    void = "void"
    viewed = "viewed"
    unpaid = "unpaid"
    bad = "bad"


class PaymentStatus(str, Enum):
    pending = "pending"
    paid = "paid"
    failed = "failed"
    refunded = "refunded"
    cancelled = "cancelled"


# Matters

class MatterBase(CamelModel):
    customer_id: int = Field(gt=0)
    description: str = Field(min_length=1)
    fee: Optional[float] = Field(default=None, ge=0)
    case_worker: Optional[str] = Field(default=None, max_length=255)
    status: str = Field(default="open", min_length=1, max_length=64)
    participants: Optional[Any] = None
    supervisor: Optional[str] = Field(default=None, max_length=255)
    issue_date: Optional[datetime] = None
    start_date: Optional[datetime] = None
    close_date: Optional[datetime] = None


class MatterCreate(MatterBase):
    pass


class MatterUpdate(CamelModel):
    customer_id: Optional[int] = Field(default=None, gt=0)
    description: Optional[str] = Field(default=None, min_length=1)
    fee: Optional[float] = Field(default=None, ge=0)
    case_worker: Optional[str] = Field(default=None, max_length=255)
    status: Optional[str] = Field(default=None, min_length=1, max_length=64)
    participants: Optional[Any] = None
    supervisor: Optional[str] = Field(default=None, max_length=255)
    issue_date: Optional[datetime] = None
    start_date: Optional[datetime] = None
    close_date: Optional[datetime] = None


class Matter(MatterBase):
    id: int
    is_delete: bool
    created_at: datetime
    updated_at: datetime


# Invoices

class InvoiceItem(CamelModel):
    description: Optional[str] = None
    quantity: float = Field(default=1, ge=0)
    amount: float = Field(ge=0)
    vat_rate: Union[str, float, None] = None
    is_discount: bool = False
    discount_type: Optional[str] = None
    discount_value: float = Field(default=0, ge=0)
    sub_total: Optional[float] = None
    vat_amount: Optional[float] = None
    discount_amount: Optional[float] = None
    total: Optional[float] = None


class InvoiceBase(CamelModel):
    invoice_number: str = Field(min_length=3, max_length=50)
    status: InvoiceStatus = InvoiceStatus.draft
    payment_status: PaymentStatus = PaymentStatus.pending
    plan: Optional[str] = Field(default=None, min_length=2, max_length=100)
    customer_id: int = Field(gt=0)
    currency_id: Optional[int] = Field(default=None, gt=0)
    order_id: Optional[int] = Field(default=None, gt=0)
    due_date: Optional[datetime] = None


class InvoiceCreate(InvoiceBase):
    amount: Optional[float] = Field(default=None, gt=0)
    items: List[InvoiceItem] = Field(default_factory=list)


class InvoiceUpdate(CamelModel):
    invoice_number: Optional[str] = Field(default=None, min_length=3, max_length=50)
    amount: Optional[float] = Field(default=None, gt=0)
    status: Optional[InvoiceStatus] = None
    payment_status: Optional[PaymentStatus] = None
    plan: Optional[str] = Field(default=None, min_length=2, max_length=100)
    currency_id: Optional[int] = Field(default=None, gt=0)
    order_id: Optional[int] = Field(default=None, gt=0)
    due_date: Optional[datetime] = None
    items: Optional[List[InvoiceItem]] = None


class Invoice(InvoiceBase):
    id: int
    status: str
    payment_status: str
    items: List[InvoiceItem]
    sub_total: float
    vat_total: float
    discount_total: float
    amount: float
    outstanding_balance: float
    user_id: Optional[int] = None
    marked_bad_on: Optional[datetime] = None
    is_delete: bool
    created_at: datetime
    updated_at: datetime


class InvoiceStats(CamelModel):
    start_date: datetime
    end_date: datetime
    total_invoices: int
    draft: int
    sent: int
    partialy_paid: int
    overdue: int
    paid: int
    unsent: int
    total_amount: float
    total_outstanding: float


class CancelInvoiceRequest(CamelModel):
    reason: Optional[str] = Field(default=None, max_length=500)


class InvoiceItemRemoval(CamelModel):
    removed_item: InvoiceItem
    updated_invoice: Invoice


class VatStats(CamelModel):
    start_date: datetime
    end_date: datetime
    total_vat_collected: float
    total_vat_paid: float
    net_vat_owed: float
    invoices_filed: int
    credit_notes_applied: float


# Installments

class InstallmentBase(CamelModel):
    invoice_id: int = Field(gt=0)
    amount: float = Field(gt=0)
    due_date: datetime
    status: str = Field(default="unpaid", min_length=1, max_length=32)
    paid_date: Optional[datetime] = None


class InstallmentCreate(InstallmentBase):
    pass


class InstallmentUpdate(CamelModel):
    invoice_id: Optional[int] = Field(default=None, gt=0)
    amount: Optional[float] = Field(default=None, gt=0)
    due_date: Optional[datetime] = None
    status: Optional[str] = Field(default=None, min_length=1, max_length=32)
    paid_date: Optional[datetime] = None


class Installment(InstallmentBase):
    id: int
    created_at: datetime
    updated_at: datetime


# Time bills

DURATION_PATTERN = r"^(\d{1,2}:\d{2}|\d+(\.\d+)?)$"
RATE_PATTERN = r"^\d+(\.\d+)?$"


class TimeBillBase(CamelModel):
    customer_id: Optional[int] = Field(default=None, gt=0)
    matter_id: Optional[int] = Field(default=None, gt=0)
    entry_id: Optional[str] = None
    case_worker: Optional[str] = Field(default=None, max_length=255)
    matter: Optional[str] = Field(default=None, max_length=255)
    cost_description: Optional[str] = None
    unit: Optional[str] = None
    duration: str = Field(pattern=DURATION_PATTERN)
    hourly_rate: str = Field(pattern=RATE_PATTERN)
    activity: Optional[str] = None
    type: Optional[str] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    date_of_work: Optional[datetime] = None
    status: Optional[str] = None


class TimeBillCreate(TimeBillBase):
    pass


class TimeBillUpdate(CamelModel):
    customer_id: Optional[int] = Field(default=None, gt=0)
    matter_id: Optional[int] = Field(default=None, gt=0)
    entry_id: Optional[str] = None
    case_worker: Optional[str] = Field(default=None, max_length=255)
    matter: Optional[str] = Field(default=None, max_length=255)
    cost_description: Optional[str] = None
    unit: Optional[str] = None
    duration: Optional[str] = Field(default=None, pattern=DURATION_PATTERN)
    hourly_rate: Optional[str] = Field(default=None, pattern=RATE_PATTERN)
    activity: Optional[str] = None
    type: Optional[str] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    date_of_work: Optional[datetime] = None
    status: Optional[str] = None


class TimeBill(TimeBillBase):
    id: int
    duration: str
    hourly_rate: str
    is_delete: bool
    created_at: datetime
    updated_at: datetime


class TimeBillPagination(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class TimeBillPage(CamelModel):
    data: List[TimeBill]
    pagination: TimeBillPagination


class BulkDeleteRequest(CamelModel):
    ids: List[int] = Field(default_factory=list)


class BulkDeleteResult(CamelModel):
    success: bool = True
    deleted_count: int
    not_found_ids: List[int]
    message: str


class CalendarDay(CamelModel):
    date: str
    total_amount: float
    total_hours: float


class CalendarSummary(CamelModel):
    start_date: datetime
    end_date: datetime
    days: List[CalendarDay]
    total_amount: float
    total_hours: float


# Notes

class NoteBase(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    customer_id: int = Field(gt=0)
    type: str = Field(min_length=1, max_length=100)


class NoteCreate(NoteBase):
    pass


class NoteUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)
    customer_id: Optional[int] = Field(default=None, gt=0)
    type: Optional[str] = Field(default=None, min_length=1, max_length=100)


class Note(NoteBase):
    id: int
    is_delete: bool
    created_at: datetime
    updated_at: datetime
