"""
Domain-split SQLAlchemy models with an aggregator.

Exposes `Base`, `now_utc`, and all ORM classes from a single import point.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .users import User, UserGroup
from .customers import Customer, CustomerVerification
from .billing import Matter, Invoice, Installment, TimeBill, Note, CreditNote, FinancialStatement
from .currencies import Currency
from .heads_up import HeadsUp
from .business import (
    BusinessType,
    BusinessEntity,
    BusinessPracticeArea,
    Subcategory,
    CustomFieldGroup,
    CustomField,
)

__all__ = [
    # base
    "Base",
    "now_utc",
    # users/groups
    "User",
    "UserGroup",
    # customers
    "Customer",
    "CustomerVerification",
    # billing
    "Matter",
    "Invoice",
    "Installment",
    "TimeBill",
    "Note",
    "CreditNote",
    "FinancialStatement",
    # settings
    "Currency",
    "HeadsUp",
    # business taxonomy
    "BusinessType",
    "BusinessEntity",
    "BusinessPracticeArea",
    "Subcategory",
    "CustomFieldGroup",
    "CustomField",
]
