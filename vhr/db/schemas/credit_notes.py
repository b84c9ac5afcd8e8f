from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field

from .common import CamelModel


class CreditNoteStatus(str, Enum):
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


class CreditNoteBase(CamelModel):
    credit_note_number: str = Field(min_length=3, max_length=50)
    amount: float = Field(gt=0)
    customer_id: int = Field(gt=0)
    invoice_id: int = Field(gt=0)
    currency_id: int = Field(gt=0)
    status: CreditNoteStatus = CreditNoteStatus.draft


class CreditNoteCreate(CreditNoteBase):
    pass


class CreditNoteUpdate(CamelModel):
    credit_note_number: Optional[str] = Field(default=None, min_length=3, max_length=50)
    amount: Optional[float] = Field(default=None, gt=0)
    customer_id: Optional[int] = Field(default=None, gt=0)
    invoice_id: Optional[int] = Field(default=None, gt=0)
    currency_id: Optional[int] = Field(default=None, gt=0)
    status: Optional[CreditNoteStatus] = None


class CreditNote(CreditNoteBase):
    id: int
    status: str
    user_id: Optional[int] = None
    is_delete: bool
    created_at: datetime
    updated_at: datetime


class CreditNoteMonth(CamelModel):
    month: str
    count: int
    total_amount: float


class CreditNoteStats(CamelModel):
    total_credit_notes: int
    total_amount: float
    status_counts: Dict[str, int]
    monthly_stats: List[CreditNoteMonth]
