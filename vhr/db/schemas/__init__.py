"""
Domain-split Pydantic schemas with an aggregator.

Re-exports every request/response schema so routers can use
`from vhr.db import schemas` and refer to `schemas.<Name>`.
"""

from .common import CamelModel, Envelope, Page, MessageResponse
from .users import (
    CustomPermission,
    UserGroupBase,
    UserGroupCreate,
    UserGroupUpdate,
    UserGroup,
    UserBase,
    UserCreate,
    UserUpdate,
    User,
    GroupMember,
    EffectivePermissions,
)
from .auth import (
    SignupRequest,
    LoginRequest,
    TokenResponse,
    ForgotPasswordRequest,
    ResetPasswordRequest,
)
from .customers import (
    CustomerStatus,
    CustomerBase,
    CustomerCreate,
    CustomerUpdate,
    Customer,
    SendVerificationCodeRequest,
    VerifyCodeRequest,
    CheckEmailRequest,
    EmailAvailability,
)
from .billing import (
    InvoiceStatus,
    PaymentStatus,
    MatterCreate,
    MatterUpdate,
    Matter,
    InvoiceItem,
    InvoiceCreate,
    InvoiceUpdate,
    Invoice,
    InvoiceStats,
    CancelInvoiceRequest,
    InvoiceItemRemoval,
    VatStats,
    InstallmentCreate,
    InstallmentUpdate,
    Installment,
    TimeBillCreate,
    TimeBillUpdate,
    TimeBill,
    TimeBillPagination,
    TimeBillPage,
    BulkDeleteRequest,
    BulkDeleteResult,
    CalendarDay,
    CalendarSummary,
    NoteCreate,
    NoteUpdate,
    Note,
)
from .credit_notes import (
    CreditNoteStatus,
    CreditNoteCreate,
    CreditNoteUpdate,
    CreditNote,
    CreditNoteMonth,
    CreditNoteStats,
)
from .financial import (
    StatementStatus,
    StatementLine,
    SummaryLine,
    FinancialStatementWrite,
    FinancialStatement,
    StatementLineRemoval,
)
from .currencies import (
    CurrencyCreate,
    CurrencyUpdate,
    Currency,
    CurrencyBulkCreate,
    BulkItemError,
    CurrencyBulkResult,
    CurrencyList,
)
from .heads_up import HeadsUpStatus, HeadsUpCreate, HeadsUpUpdate, HeadsUp
from .business import (
    NamedItemCreate,
    NamedItem,
    CustomFieldType,
    SubcategoryCreate,
    SubcategoryUpdate,
    Subcategory,
    CustomFieldCreate,
    CustomFieldUpdate,
    CustomField,
    CustomFieldGroupCreate,
    CustomFieldGroupUpdate,
    CustomFieldGroup,
    CustomFieldGroupDetail,
)

__all__ = [
    # common
    "CamelModel",
    "Envelope",
    "Page",
    "MessageResponse",
    # users/groups
    "CustomPermission",
    "UserGroupBase",
    "UserGroupCreate",
    "UserGroupUpdate",
    "UserGroup",
    "UserBase",
    "UserCreate",
    "UserUpdate",
    "User",
    "GroupMember",
    "EffectivePermissions",
    # auth
    "SignupRequest",
    "LoginRequest",
    "TokenResponse",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    # customers
    "CustomerStatus",
    "CustomerBase",
    "CustomerCreate",
    "CustomerUpdate",
    "Customer",
    "SendVerificationCodeRequest",
    "VerifyCodeRequest",
    "CheckEmailRequest",
    "EmailAvailability",
    # billing
    "InvoiceStatus",
    "PaymentStatus",
    "MatterCreate",
    "MatterUpdate",
    "Matter",
    "InvoiceItem",
    "InvoiceCreate",
    "InvoiceUpdate",
    "Invoice",
    "InvoiceStats",
    "CancelInvoiceRequest",
    "InvoiceItemRemoval",
    "VatStats",
    "InstallmentCreate",
    "InstallmentUpdate",
    "Installment",
    "TimeBillCreate",
    "TimeBillUpdate",
    "TimeBill",
    "TimeBillPagination",
    "TimeBillPage",
    "BulkDeleteRequest",
    "BulkDeleteResult",
    "CalendarDay",
    "CalendarSummary",
    "NoteCreate",
    "NoteUpdate",
    "Note",
    # credit notes
    "CreditNoteStatus",
    "CreditNoteCreate",
    "CreditNoteUpdate",
    "CreditNote",
    "CreditNoteMonth",
    "CreditNoteStats",
    # financial statements
    "StatementStatus",
    "StatementLine",
    "SummaryLine",
    "FinancialStatementWrite",
    "FinancialStatement",
    "StatementLineRemoval",
    # currencies
    "CurrencyCreate",
    "CurrencyUpdate",
    "Currency",
    "CurrencyBulkCreate",
    "BulkItemError",
    "CurrencyBulkResult",
    "CurrencyList",
    # heads-up
    "HeadsUpStatus",
    "HeadsUpCreate",
    "HeadsUpUpdate",
    "HeadsUp",
    # business taxonomy
    "NamedItemCreate",
    "NamedItem",
    "CustomFieldType",
    "SubcategoryCreate",
    "SubcategoryUpdate",
    "Subcategory",
    "CustomFieldCreate",
    "CustomFieldUpdate",
    "CustomField",
    "CustomFieldGroupCreate",
    "CustomFieldGroupUpdate",
    "CustomFieldGroup",
    "CustomFieldGroupDetail",
]
