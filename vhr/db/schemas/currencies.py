from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import CamelModel


class CurrencyBase(CamelModel):
    customer_id: Optional[int] = Field(default=None, gt=0)
    currency_code: str = Field(min_length=2, max_length=10)
    currency_name: str = Field(min_length=2, max_length=100)
    currency_symbol: str = Field(min_length=1, max_length=10)
    exchange_rate: float = Field(default=1, ge=0)
    is_crypto: bool = False
    usd_price: float = Field(default=0, ge=0, alias="USDPrice")


class CurrencyCreate(CurrencyBase):
    pass


class CurrencyUpdate(CamelModel):
    customer_id: Optional[int] = Field(default=None, gt=0)
    currency_code: Optional[str] = Field(default=None, min_length=2, max_length=10)
    currency_name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    currency_symbol: Optional[str] = Field(default=None, min_length=1, max_length=10)
    exchange_rate: Optional[float] = Field(default=None, ge=0)
    is_crypto: Optional[bool] = None
    usd_price: Optional[float] = Field(default=None, ge=0, alias="USDPrice")


class Currency(CurrencyBase):
    id: int
    is_delete: bool
    created_at: datetime
    updated_at: datetime


class CurrencyBulkCreate(CamelModel):
    # Items stay untyped so each one is validated on its own.
    currencies: List[dict] = Field(default_factory=list)


class BulkItemError(CamelModel):
    index: int
    error: str


class CurrencyBulkResult(CamelModel):
    success: bool = True
    data: List[Currency]
    errors: Optional[List[BulkItemError]] = None
    message: str


class CurrencyList(CamelModel):
    success: bool = True
    data: List[Currency]
    total: int
