"""
Notification service: renders and dispatches the service's transactional email.

Delivery is best-effort. Each `notify_*` method returns the send result
(`{'success': bool, ...}`) and never raises for SMTP or template failures, so
callers can log the outcome without failing the request.
"""

import asyncio
import logging
from inspect import isawaitable
from typing import Any, Dict, Optional

from jinja2 import TemplateError

from vhr.services.email_service import EmailService, get_email_service
from vhr.utils.settings import get_settings

logger = logging.getLogger(__name__)

# Template name constants (match actual template file names)
TEMPLATE_PASSWORD_RESET_OTP = 'password_reset_otp'
TEMPLATE_CUSTOMER_VERIFICATION_CODE = 'customer_verification_code'
TEMPLATE_CUSTOMER_REGISTRATION = 'customer_registration'


class NotificationService:
    """Builds template context for each event and hands the result to the email service."""

    def __init__(self, email_service: Optional[EmailService] = None):
        self.email_service = email_service or get_email_service()

    def _dispatch(self, to_email: str, subject: str, template: str, context: Dict[str, Any]) -> Dict[str, Any]:
        try:
            rendered = self.email_service.render(template, context)
        except TemplateError as e:
            logger.warning(f"Could not render {template} for {to_email}: {e}")
            return {'success': False, 'error': str(e)}

        send_res = self.email_service.send_email(to_email, subject, rendered)
        if isawaitable(send_res):
            send_res = asyncio.run(send_res)
        if not send_res.get('success'):
            logger.warning(f"Email '{subject}' to {to_email} not delivered: {send_res.get('error', 'Unknown error')}")
        return send_res

    def notify_password_reset_otp(self, to_email: str, name: str, otp: str, expires_in_minutes: int) -> Dict[str, Any]:
        settings = get_settings()
        return self._dispatch(
            to_email,
            "Your password reset code",
            TEMPLATE_PASSWORD_RESET_OTP,
            {
                'name': name,
                'otp': otp,
                'expires_in_minutes': expires_in_minutes,
                'reset_url': settings.frontend_reset_password_url,
            },
        )

    def notify_customer_verification_code(self, to_email: str, code: str, expires_in_minutes: int) -> Dict[str, Any]:
        return self._dispatch(
            to_email,
            "Verify your email address",
            TEMPLATE_CUSTOMER_VERIFICATION_CODE,
            {'code': code, 'expires_in_minutes': expires_in_minutes},
        )

    def notify_customer_registration(self, to_email: str, first_name: str, business_name: str) -> Dict[str, Any]:
        settings = get_settings()
        return self._dispatch(
            to_email,
            "Welcome to VHR",
            TEMPLATE_CUSTOMER_REGISTRATION,
            {
                'first_name': first_name,
                'business_name': business_name,
                'login_url': settings.frontend_login_url,
            },
        )


def get_notification_service() -> NotificationService:
    """FastAPI dependency; tests override it with a service wrapping a fake email backend."""
    return NotificationService()
