"""
Authentication endpoints: signup, login, password reset by emailed OTP, and
the current-user lookup.
"""
import logging
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from vhr.api.deps import get_current_user
from vhr.db import models, schemas
from vhr.db.database import get_db
from vhr.db.repositories import users as users_repo
from vhr.services.notification_service import NotificationService, get_notification_service
from vhr.utils.dates import as_aware
from vhr.utils.role_permissions import RoleEnum
from vhr.utils.security import create_access_token, generate_otp, hash_password, verify_password
from vhr.utils.settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=schemas.TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: schemas.SignupRequest, db: Session = Depends(get_db)):
    if users_repo.get_user_by_email(db, str(payload.email)):
        raise HTTPException(status_code=400, detail="Email already exists")
    role = RoleEnum.super_admin if payload.role == RoleEnum.super_admin else RoleEnum.user
    user = users_repo.create_user(
        db,
        schemas.UserCreate(name=payload.name, email=payload.email, password=payload.password, role=role),
    )
    logger.info(f"User {user.id} signed up with role {user.role}")
    return {"token": create_access_token(user.id, user.role), "user": user}


@router.post("/login", response_model=schemas.TokenResponse)
def login(payload: schemas.LoginRequest, db: Session = Depends(get_db)):
    user = users_repo.get_user_by_email(db, str(payload.email))
    if user is None or not verify_password(payload.password, user.password):
        logger.info(f"Failed login for {payload.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return {"token": create_access_token(user.id, user.role), "user": user}


@router.post("/forgot-password", response_model=schemas.MessageResponse)
def forgot_password(
    payload: schemas.ForgotPasswordRequest,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
):
    user = users_repo.get_user_by_email(db, str(payload.email))
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    expiry_minutes = get_settings().otp_expiry_minutes
    otp = generate_otp()
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=expiry_minutes)
    users_repo.set_user_otp(db, user, hash_password(otp), expires_at)
    logger.info(f"Issued password reset OTP for user {user.id}")

    notifier.notify_password_reset_otp(user.email, user.name, otp, expiry_minutes)
    return {"success": True, "message": "OTP sent to your email"}


@router.post("/reset-password", response_model=schemas.MessageResponse)
def reset_password(payload: schemas.ResetPasswordRequest, db: Session = Depends(get_db)):
    user = users_repo.get_user_by_email(db, str(payload.email))
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    expiry = as_aware(user.otp_expiry)
    if not user.otp or expiry is None or expiry < datetime.now(timezone.utc):
        raise HTTPException(status_code=400, detail="Invalid or expired OTP")
    if not verify_password(payload.otp, user.otp):
        raise HTTPException(status_code=400, detail="Invalid or expired OTP")

    users_repo.set_user_password(db, user, payload.new_password)
    logger.info(f"Password reset for user {user.id}")
    return {"success": True, "message": "Password reset successfully"}


@router.get("/me", response_model=schemas.Envelope[schemas.User])
def me(current_user: models.User = Depends(get_current_user)):
    return {"success": True, "data": current_user}
