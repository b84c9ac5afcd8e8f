"""
API dependency helpers.

Provides bearer-token authentication with role allow-lists, and the raw
query-string parsing shared by list endpoints.
"""
import logging
from datetime import datetime
from typing import Callable, Iterable, Optional, Tuple

import jwt
from fastapi import Depends, Header, HTTPException, Query, status
from sqlalchemy.orm import Session

from vhr.db import models
from vhr.db.database import get_db
from vhr.db.pagination import PageParams
from vhr.utils.dates import parse_date_param
from vhr.utils.security import decode_access_token

logger = logging.getLogger(__name__)


def _bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return token.strip()


def get_current_user(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(default=None),
) -> models.User:
    """Resolve the bearer token to a live user row; 401/403 otherwise."""
    token = _bearer_token(authorization)
    try:
        payload = decode_access_token(token)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = db.query(models.User).filter(models.User.id == payload.user_id).first()
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    if user.is_delete:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account has been deactivated")
    return user


def authorize(roles: Iterable[str]) -> Callable[..., models.User]:
    """
    Build a dependency that admits only users whose role is in `roles`.

    The role is read from the database row, not from the token, so a role
    change takes effect on the next request.
    """
    allowed = frozenset(roles)

    def _dependency(user: models.User = Depends(get_current_user)) -> models.User:
        if user.role not in allowed:
            logger.info(f"Rejected user {user.id} with role {user.role}; allowed: {sorted(allowed)}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden: insufficient role")
        return user

    return _dependency


def page_params(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
) -> PageParams:
    # Kept as strings so junk values fall back to defaults instead of a 400
    return PageParams.from_raw(page, limit)


def date_range(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
) -> Tuple[Optional[datetime], Optional[datetime]]:
    try:
        return (
            parse_date_param(start_date),
            parse_date_param(end_date, end_of_day=True),
        )
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid date format")
