from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import EmailStr, Field

from .common import CamelModel


class StatementStatus(str, Enum):
    draft = "draft"
    sent = "sent"
    unsent = "unsent"
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


class StatementLine(CamelModel):
    """A disbursement or our-cost row; `total` is always recomputed."""
    description: Optional[str] = None
    charges: float = Field(default=0, ge=0)
    vat_amount: float = Field(default=0, ge=0)
    total: Optional[float] = None


class SummaryLine(CamelModel):
    label: str = Field(min_length=1, max_length=255)
    sub_total: float = 0
    total: Optional[float] = None


class FinancialStatementWrite(CamelModel):
    """
    Create and update payload.

    Updates replace the whole statement: omitted line lists become empty and
    the customer is looked up again from `customer_email`.
    """
    matter_id: str = Field(default="", max_length=64)
    customer_name: str = Field(min_length=1, max_length=255)
    customer_email: EmailStr
    currency_id: Optional[int] = Field(default=None, gt=0)
    case_description: Optional[str] = None
    completion_date: Optional[datetime] = None
    disbursements: List[StatementLine] = Field(default_factory=list)
    our_cost: List[StatementLine] = Field(default_factory=list)
    summary: List[SummaryLine] = Field(default_factory=list)
    status: StatementStatus = StatementStatus.draft


class FinancialStatement(CamelModel):
    id: int
    matter_id: str
    user_id: Optional[int] = None
    customer_id: int
    currency_id: Optional[int] = None
    customer_name: str
    customer_email: str
    case_description: str
    completion_date: Optional[datetime] = None
    disbursements: List[StatementLine]
    total_disbursements: float
    our_cost: List[StatementLine]
    total_our_costs: float
    summary: List[SummaryLine]
    total_amount_required: float
    status: str
    is_delete: bool
    created_at: datetime
    updated_at: datetime


class StatementLineRemoval(CamelModel):
    removed_item: StatementLine
    updated_statement: FinancialStatement
