from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import EmailStr, Field, field_validator

from vhr.utils.role_permissions import RoleEnum, PermissionLevel, PERMISSION_MODULES
from .common import CamelModel


class CustomPermission(CamelModel):
    module: str = Field(min_length=1, max_length=100)
    level: PermissionLevel


def _check_permissions(value: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if value is None:
        return value
    unknown = sorted(set(value) - set(PERMISSION_MODULES))
    if unknown:
        raise ValueError(f"Unknown permission modules: {', '.join(unknown)}")
    missing = [m for m in PERMISSION_MODULES if m not in value]
    if missing:
        raise ValueError(f"Missing permission modules: {', '.join(missing)}")
    allowed = {lvl.value for lvl in PermissionLevel}
    for module, level in value.items():
        if level not in allowed:
            raise ValueError(f"Invalid permission level '{level}' for module '{module}'")
    return value


class UserGroupBase(CamelModel):
    title: str = Field(min_length=2, max_length=255)
    description: Optional[str] = None
    permissions: Optional[Dict[str, str]] = None
    custom_permissions: List[CustomPermission] = Field(default_factory=list)
    is_active: bool = True

    @field_validator("permissions")
    @classmethod
    def validate_permissions(cls, value):
        return _check_permissions(value)


class UserGroupCreate(UserGroupBase):
    pass


class UserGroupUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=2, max_length=255)
    description: Optional[str] = None
    permissions: Optional[Dict[str, str]] = None
    custom_permissions: Optional[List[CustomPermission]] = None
    is_active: Optional[bool] = None

    @field_validator("permissions")
    @classmethod
    def validate_permissions(cls, value):
        return _check_permissions(value)


class UserGroup(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    permissions: Dict[str, str]
    custom_permissions: List[CustomPermission]
    is_active: bool
    created_at: datetime
    updated_at: datetime
    user_count: int = 0


class UserBase(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    role: RoleEnum = RoleEnum.user
    user_group_id: Optional[int] = None


class UserCreate(UserBase):
    password: str = Field(min_length=6, max_length=128)


class UserUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    role: Optional[RoleEnum] = None
    user_group_id: Optional[int] = None
    password: Optional[str] = Field(default=None, min_length=6, max_length=128)


class User(CamelModel):
    id: int
    name: str
    email: str
    role: str
    user_group_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class GroupMember(CamelModel):
    id: int
    name: str
    email: str
    role: str
    created_at: datetime


class EffectivePermissions(CamelModel):
    user_id: int
    role: str
    has_full_access: bool
    user_group_id: Optional[int] = None
    permissions: Optional[Dict[str, str]] = None
    custom_permissions: Optional[List[CustomPermission]] = None
    message: Optional[str] = None
