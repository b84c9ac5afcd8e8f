from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .common import CamelModel


class NamedItemBase(CamelModel):
    name: str = Field(min_length=2, max_length=255)


class NamedItemCreate(NamedItemBase):
    pass


class NamedItem(NamedItemBase):
    """Shared shape of business types, business entities and practice areas."""
    id: int
    is_delete: bool
    created_at: datetime
    updated_at: datetime


class CustomFieldType(str, Enum):
    client_select = "client_select"
    firm_users = "firm_users"
    full_address = "full_address"
    website_url = "website_url"
    date = "date"
    time = "time"
    phone = "phone"
    email = "email"
    text = "text"
    paragraph = "paragraph"
    rich_text = "rich_text"
    checkboxes = "checkboxes"
    multiple_choice = "multiple_choice"
    user_select = "user_select"
    dropdown = "dropdown"
    matter_select = "matter_select"
    header = "header"
    price_currency = "price_currency"
    integer = "integer"
    decimal = "decimal"
    file_upload = "file_upload"
    tags = "tags"
    boolean = "boolean"
    duration = "duration"
    rating = "rating"
    signature = "signature"


class SubcategoryBase(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    practice_area_id: int = Field(gt=0)


class SubcategoryCreate(SubcategoryBase):
    pass


class SubcategoryUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    practice_area_id: Optional[int] = Field(default=None, gt=0)


class Subcategory(SubcategoryBase):
    id: int
    is_delete: bool
    created_at: datetime
    updated_at: datetime


class CustomFieldBase(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    practice_area_id: Optional[int] = Field(default=None, gt=0)
    field_group_id: Optional[int] = Field(default=None, gt=0)
    template_keyword: Optional[str] = Field(default=None, max_length=255)
    type: CustomFieldType = CustomFieldType.text


class CustomFieldCreate(CustomFieldBase):
    pass


class CustomFieldUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    practice_area_id: Optional[int] = Field(default=None, gt=0)
    field_group_id: Optional[int] = Field(default=None, gt=0)
    template_keyword: Optional[str] = Field(default=None, max_length=255)
    type: Optional[CustomFieldType] = None


class CustomField(CustomFieldBase):
    id: int
    type: str
    is_delete: bool
    created_at: datetime
    updated_at: datetime


class CustomFieldGroupBase(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    subcategory_id: Optional[int] = Field(default=None, gt=0)
    linked_to: Optional[str] = Field(default=None, max_length=255)


class CustomFieldGroupCreate(CustomFieldGroupBase):
    pass


class CustomFieldGroupUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    subcategory_id: Optional[int] = Field(default=None, gt=0)
    linked_to: Optional[str] = Field(default=None, max_length=255)


class CustomFieldGroup(CustomFieldGroupBase):
    id: int
    is_delete: bool
    created_at: datetime
    updated_at: datetime


class CustomFieldGroupDetail(CustomFieldGroup):
    fields: List[CustomField] = Field(default_factory=list)
