"""
Effective permission resolution for a single user.

Precedence: the super-admin role short-circuits to full access before any
group lookup; otherwise the assigned group is loaded (non-deleted, active or
not) and its default record and custom overrides are returned verbatim for
callers to combine (custom wins, see
`vhr.utils.role_permissions.effective_level`).
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from vhr.db import models
from vhr.utils.role_permissions import ROLE_SUPER_ADMIN

logger = logging.getLogger(__name__)

MESSAGE_FULL_ACCESS = "Super admin has full access"
MESSAGE_NO_GROUP = "User is not assigned to any group"
MESSAGE_GROUP_UNAVAILABLE = "Assigned group not found or inactive"


def resolve_effective_permissions(db: Session, user_id: int) -> Optional[Dict[str, Any]]:
    """
    Return the effective permission payload for `user_id`, or None when the
    user does not exist or is soft-deleted.
    """
    user = (
        db.query(models.User)
        .filter(models.User.id == user_id, models.User.is_delete.is_(False))
        .first()
    )
    if user is None:
        return None

    result: Dict[str, Any] = {
        "user_id": user.id,
        "role": user.role,
        "has_full_access": False,
        "user_group_id": user.user_group_id,
        "permissions": None,
        "custom_permissions": None,
        "message": None,
    }

    if user.role == ROLE_SUPER_ADMIN:
        result["has_full_access"] = True
        result["message"] = MESSAGE_FULL_ACCESS
        return result

    if user.user_group_id is None:
        result["message"] = MESSAGE_NO_GROUP
        return result

    group = (
        db.query(models.UserGroup)
        .filter(
            models.UserGroup.id == user.user_group_id,
            models.UserGroup.is_delete.is_(False),
        )
        .first()
    )
    if group is None:
        logger.info(f"User {user.id} references unavailable group {user.user_group_id}")
        result["message"] = MESSAGE_GROUP_UNAVAILABLE
        return result

    result["permissions"] = dict(group.permissions or {})
    result["custom_permissions"] = list(group.custom_permissions or [])
    return result
