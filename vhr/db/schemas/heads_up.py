from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .common import CamelModel


class HeadsUpStatus(str, Enum):
    active = "active"
    inactive = "inactive"


class HeadsUpBase(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    module: str = Field(min_length=1, max_length=100)
    enabled: bool = True
    rule: Optional[str] = None
    frequency: str = Field(min_length=1, max_length=50)
    time_of_day: Optional[str] = Field(default=None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    time_zone: Optional[str] = Field(default=None, max_length=64)
    status: HeadsUpStatus = HeadsUpStatus.active
    next_run_date: Optional[datetime] = None
    last_run_date: Optional[datetime] = None
    rows_in_email: int = Field(default=0, ge=0)
    content_type: Optional[str] = Field(default=None, max_length=50)
    results_grouped: Optional[str] = Field(default=None, max_length=50)


class HeadsUpCreate(HeadsUpBase):
    pass


class HeadsUpUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    module: Optional[str] = Field(default=None, min_length=1, max_length=100)
    enabled: Optional[bool] = None
    rule: Optional[str] = None
    frequency: Optional[str] = Field(default=None, min_length=1, max_length=50)
    time_of_day: Optional[str] = Field(default=None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    time_zone: Optional[str] = Field(default=None, max_length=64)
    status: Optional[HeadsUpStatus] = None
    next_run_date: Optional[datetime] = None
    last_run_date: Optional[datetime] = None
    rows_in_email: Optional[int] = Field(default=None, ge=0)
    content_type: Optional[str] = Field(default=None, max_length=50)
    results_grouped: Optional[str] = Field(default=None, max_length=50)


class HeadsUp(HeadsUpBase):
    id: int
    status: str
    is_delete: bool
    created_at: datetime
    updated_at: datetime
