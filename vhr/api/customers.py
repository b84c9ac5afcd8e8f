"""
Customer endpoints: email verification codes, customer CRUD and the
deleted-customer listing.

A customer can only be created for an email that passed verification.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from vhr.api.deps import authorize, date_range, page_params
from vhr.db import schemas
from vhr.db.database import get_db
from vhr.db.pagination import PageParams, normalize_order, page_payload
from vhr.db.repositories import customers as customers_repo
from vhr.db.repositories import users as users_repo
from vhr.services.notification_service import NotificationService, get_notification_service
from vhr.utils.dates import as_aware
from vhr.utils.role_permissions import ALL_ROLES, SUPER_ADMIN_ONLY
from vhr.utils.security import generate_otp
from vhr.utils.settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/customers", tags=["customers"])

super_admin = authorize(SUPER_ADMIN_ONLY)
any_role = authorize(ALL_ROLES)


@router.post("/send-email-verification-code", response_model=schemas.MessageResponse, status_code=status.HTTP_201_CREATED)
def send_verification_code_endpoint(
    payload: schemas.SendVerificationCodeRequest,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
    _user=Depends(any_role),
):
    email = str(payload.email)
    if customers_repo.get_customer_by_email(db, email):
        raise HTTPException(status_code=409, detail="This email is already registered as a customer")
    if users_repo.get_user_by_email(db, email):
        raise HTTPException(status_code=409, detail="This email is already registered in the system")

    expiry_minutes = get_settings().customer_code_expiry_minutes
    code = generate_otp()
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=expiry_minutes)
    customers_repo.upsert_verification_code(db, email, code, expires_at)
    logger.info(f"Issued customer verification code for {email}")

    notifier.notify_customer_verification_code(email, code, expiry_minutes)
    return {"success": True, "message": "Verification code sent to email"}


@router.post("/check-email", response_model=schemas.EmailAvailability)
def check_email_endpoint(
    payload: schemas.CheckEmailRequest,
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    """Report whether a non-deleted customer or user already holds the email."""
    email = str(payload.email)
    if customers_repo.get_customer_by_email(db, email) or users_repo.get_user_by_email(db, email):
        return {"success": False, "exists": True, "message": "This Email is already Registered in the system"}
    return {"success": True, "exists": False, "message": "Email is available"}


@router.post("/verify-verification-code", response_model=schemas.MessageResponse)
def verify_code_endpoint(
    payload: schemas.VerifyCodeRequest,
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    verification = customers_repo.get_verification(db, str(payload.email))
    if verification is None or verification.email_otp != payload.otp:
        raise HTTPException(status_code=404, detail="Customer Not Found")
    expiry = as_aware(verification.email_otp_expiry)
    if expiry is None or expiry < datetime.now(timezone.utc):
        raise HTTPException(status_code=400, detail="Verification Code Expired")
    customers_repo.mark_verified(db, verification)
    logger.info(f"Verified customer email {verification.email}")
    return {"success": True, "message": "Email verified successfully"}


@router.post("", response_model=schemas.Envelope[schemas.Customer], status_code=status.HTTP_201_CREATED)
def create_customer_endpoint(
    customer: schemas.CustomerCreate,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
    _user=Depends(super_admin),
):
    email = str(customer.email)
    verification = customers_repo.get_verification(db, email)
    if verification is None:
        raise HTTPException(status_code=400, detail="Please verify your email before creating a customer.")
    if not verification.is_email_verified:
        raise HTTPException(status_code=400, detail="Email is not verified. Please verify email first.")
    if customers_repo.get_customer_by_email(db, email):
        raise HTTPException(status_code=409, detail="Customer with this email already exists")

    created = customers_repo.create_customer(db, customer)
    logger.info(f"Created customer {created.id}")
    notifier.notify_customer_registration(created.email, created.first_name, created.business_name)
    return {"success": True, "data": created, "message": "Customer created successfully"}


@router.get("", response_model=schemas.Page[schemas.Customer])
def list_customers_endpoint(
    params: PageParams = Depends(page_params),
    email: Optional[str] = None,
    status_filter: Optional[str] = Query(default=None, alias="status"),
    business_type: Optional[str] = Query(default=None, alias="type"),
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    order: Optional[str] = None,
    dates: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    start, end = dates
    customers, total = customers_repo.get_customers(
        db,
        params,
        email=email,
        status=status_filter,
        business_type=business_type,
        start=start,
        end=end,
        sort_by=sort_by,
        order=normalize_order(order, "asc"),
    )
    return page_payload(customers, total, params)


@router.get("/deleted", response_model=schemas.Page[schemas.Customer])
def list_deleted_customers_endpoint(
    params: PageParams = Depends(page_params),
    order: Optional[str] = None,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    customers, total = customers_repo.get_customers(
        db, params, order=normalize_order(order, "desc"), deleted=True
    )
    return page_payload(customers, total, params)


@router.get("/{customer_id}", response_model=schemas.Envelope[schemas.Customer])
def get_customer_endpoint(customer_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
    customer = customers_repo.get_customer(db, customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return {"success": True, "data": customer}


@router.put("/{customer_id}", response_model=schemas.Envelope[schemas.Customer])
def update_customer_endpoint(
    customer_id: int,
    customer: schemas.CustomerUpdate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    db_customer = customers_repo.get_customer(db, customer_id)
    if db_customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    updated = customers_repo.update_customer(db, db_customer, customer)
    logger.info(f"Updated customer {updated.id}")
    return {"success": True, "data": updated, "message": "Customer updated successfully"}


@router.delete("/{customer_id}", response_model=schemas.MessageResponse)
def delete_customer_endpoint(customer_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    db_customer = customers_repo.get_customer(db, customer_id)
    if db_customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    customers_repo.soft_delete_customer(db, db_customer)
    logger.info(f"Deleted customer {customer_id}")
    return {"success": True, "message": "Customer deleted successfully"}
