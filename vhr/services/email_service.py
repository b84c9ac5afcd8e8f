"""
Outbound transactional email.

Messages are rendered from Jinja2 templates under ``vhr/templates/email``
(``<name>.html`` plus an optional ``<name>.txt``) and delivered over SMTP
with aiosmtplib. SMTP settings come from the environment.
"""

import html
import logging
import os
import re
from dataclasses import dataclass
from email.message import EmailMessage
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional

import aiosmtplib
from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class SmtpSettings:
    host: str
    port: int
    username: str = ""
    password: str = ""
    start_tls: bool = True
    use_ssl: bool = False
    sender_address: str = "noreply@vhr.local"
    sender_name: str = "VHR"
    reply_to: str = ""
    template_dir: str = str(TEMPLATE_DIR)

    @classmethod
    def from_env(cls) -> "SmtpSettings":
        return cls(
            host=os.getenv("SMTP_HOST", "localhost"),
            port=int(os.getenv("SMTP_PORT", "587")),
            username=os.getenv("SMTP_USERNAME", ""),
            password=os.getenv("SMTP_PASSWORD", ""),
            start_tls=_flag("SMTP_USE_TLS", "true"),
            use_ssl=_flag("SMTP_USE_SSL", "false"),
            sender_address=os.getenv("FROM_EMAIL", "noreply@vhr.local"),
            sender_name=os.getenv("FROM_NAME", "VHR"),
            reply_to=os.getenv("REPLY_TO_EMAIL", ""),
            template_dir=os.getenv("EMAIL_TEMPLATE_DIR", str(TEMPLATE_DIR)),
        )

    @property
    def configured(self) -> bool:
        return bool(self.host and self.port and self.sender_address)

    def problems(self) -> List[str]:
        """Human-readable configuration errors; empty when the settings are usable."""
        found = []
        if not self.host:
            found.append("SMTP_HOST is required")
        if self.port <= 0:
            found.append("SMTP_PORT must be a positive integer")
        if not self.sender_address:
            found.append("FROM_EMAIL is required")
        if self.use_ssl and self.start_tls:
            found.append("SMTP_USE_SSL and SMTP_USE_TLS are mutually exclusive")
        return found


class RenderedEmail(NamedTuple):
    html: str
    text: str


def html_to_text(markup: str) -> str:
    return _WHITESPACE.sub(" ", html.unescape(_TAG.sub("", markup))).strip()


class EmailService:
    """Renders templates and hands finished messages to the SMTP server."""

    def __init__(self, settings: Optional[SmtpSettings] = None):
        self.settings = settings or SmtpSettings.from_env()
        for problem in self.settings.problems():
            logger.warning(f"Email configuration problem: {problem}")
        if not Path(self.settings.template_dir).is_dir():
            logger.warning(f"Email template directory not found: {self.settings.template_dir}")
        self.templates = Environment(
            loader=FileSystemLoader(self.settings.template_dir),
            autoescape=select_autoescape(["html"]),
        )

    def render(self, template_name: str, context: Dict[str, Any]) -> RenderedEmail:
        markup = self.templates.get_template(f"{template_name}.html").render(**context)
        try:
            text = self.templates.get_template(f"{template_name}.txt").render(**context)
        except TemplateNotFound:
            text = html_to_text(markup)
        return RenderedEmail(html=markup, text=text)

    def build_message(self, to_email: str, subject: str, rendered: RenderedEmail, reply_to: Optional[str] = None) -> EmailMessage:
        message = EmailMessage()
        message["From"] = f"{self.settings.sender_name} <{self.settings.sender_address}>"
        message["To"] = to_email
        message["Subject"] = subject
        if reply_to or self.settings.reply_to:
            message["Reply-To"] = reply_to or self.settings.reply_to
        message.set_content(rendered.text)
        message.add_alternative(rendered.html, subtype="html")
        return message

    async def send_email(self, to_email: str, subject: str, rendered: RenderedEmail, reply_to: Optional[str] = None) -> Dict[str, Any]:
        """
        Deliver one message.

        Returns ``{"success": True}`` or ``{"success": False, "error": ...}``;
        SMTP and network failures are reported, not raised.
        """
        if not self.settings.configured:
            return {"success": False, "error": "Email service not configured"}
        problems = self.settings.problems()
        if problems:
            return {"success": False, "error": f"Configuration errors: {', '.join(problems)}"}

        message = self.build_message(to_email, subject, rendered, reply_to)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.settings.host,
                port=self.settings.port,
                username=self.settings.username or None,
                password=self.settings.password or None,
                start_tls=self.settings.start_tls and not self.settings.use_ssl,
                use_tls=self.settings.use_ssl,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP delivery to {to_email} failed: {e}")
            return {"success": False, "error": str(e)}

        logger.info(f"Sent '{subject}' to {to_email}")
        return {"success": True}


_email_service: Optional[EmailService] = None


def get_email_service() -> EmailService:
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
