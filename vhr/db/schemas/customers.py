from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import EmailStr, Field

from .common import CamelModel

PHONE_PATTERN = r"^[0-9]{10,15}$"


class CustomerStatus(str, Enum):
    active = "Active"
    trial = "Trial"
    license_expired = "License Expired"
    free = "Free"


class CustomerBase(CamelModel):
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    business_name: str = Field(min_length=1, max_length=100)
    trading_name: str = Field(min_length=1, max_length=100)
    subscription: str = Field(min_length=1)
    note: Optional[str] = None
    business_size: int = Field(ge=1)
    business_entity: str = Field(min_length=1)
    business_type: str = Field(min_length=1)
    phone_number: str = Field(pattern=PHONE_PATTERN)
    practice_area: List[str] = Field(default_factory=list)
    status: CustomerStatus = CustomerStatus.free
    expiry_date: Optional[datetime] = None


class CustomerCreate(CustomerBase):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)


class CustomerUpdate(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    business_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    trading_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    subscription: Optional[str] = None
    note: Optional[str] = None
    business_size: Optional[int] = Field(default=None, ge=1)
    business_entity: Optional[str] = None
    business_type: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    practice_area: Optional[List[str]] = None
    status: Optional[CustomerStatus] = None
    expiry_date: Optional[datetime] = None


class Customer(CamelModel):
    id: int
    first_name: str
    last_name: str
    business_name: str
    trading_name: Optional[str] = None
    subscription: Optional[str] = None
    note: Optional[str] = None
    business_size: Optional[int] = None
    business_entity: Optional[str] = None
    business_type: Optional[str] = None
    phone_number: str
    email: str
    practice_area: List[str]
    status: str
    expiry_date: Optional[datetime] = None
    is_delete: bool
    created_at: datetime
    updated_at: datetime


class SendVerificationCodeRequest(CamelModel):
    email: EmailStr


class VerifyCodeRequest(CamelModel):
    email: EmailStr
    otp: str = Field(pattern=r"^[0-9]{6}$")


class CheckEmailRequest(CamelModel):
    email: EmailStr


class EmailAvailability(CamelModel):
    success: bool
    exists: bool
    message: str
