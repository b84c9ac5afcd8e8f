import dataclasses

import pytest

from vhr.services.email_service import EmailService, RenderedEmail, SmtpSettings, html_to_text
from vhr.services.notification_service import NotificationService

SETTINGS = SmtpSettings(host="localhost", port=25)


class RecordingEmailService(EmailService):
    def __init__(self, result=None):
        super().__init__(SETTINGS)
        self.sent = []
        self.result = result or {"success": True}

    def send_email(self, to_email, subject, rendered, reply_to=None):
        self.sent.append({"to": to_email, "subject": subject, "html": rendered.html, "text": rendered.text})
        return self.result


class AsyncRecordingEmailService(RecordingEmailService):
    async def send_email(self, to_email, subject, rendered, reply_to=None):
        self.sent.append({"to": to_email, "subject": subject})
        return self.result


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("SMTP_HOST", "")
    monkeypatch.setenv("SMTP_USE_SSL", "true")
    monkeypatch.setenv("SMTP_USE_TLS", "true")
    settings = SmtpSettings.from_env()
    assert settings.configured is False
    problems = settings.problems()
    assert "SMTP_HOST is required" in problems
    assert "SMTP_USE_SSL and SMTP_USE_TLS are mutually exclusive" in problems


def test_render_password_reset_uses_text_template():
    rendered = EmailService(SETTINGS).render(
        "password_reset_otp",
        {"name": "Ada", "otp": "123456", "expires_in_minutes": 10, "reset_url": "http://x/reset"},
    )
    assert "123456" in rendered.html
    assert "Your password reset code is 123456." in rendered.text


def test_render_without_text_template_falls_back_to_stripped_html():
    rendered = EmailService(SETTINGS).render("customer_verification_code", {"code": "654321", "expires_in_minutes": 5})
    assert "654321" in rendered.text
    assert "<" not in rendered.text


def test_html_to_text_unescapes_entities():
    assert html_to_text("<p>Tom &amp; Jerry</p>\n<p>Ltd</p>") == "Tom & Jerry Ltd"


def test_build_message_has_both_parts():
    service = EmailService(dataclasses.replace(SETTINGS, reply_to="help@vhr.local"))
    message = service.build_message("a@example.com", "Hi", RenderedEmail(html="<p>Hi</p>", text="Hi"))
    assert message["To"] == "a@example.com"
    assert message["Reply-To"] == "help@vhr.local"
    assert [part.get_content_type() for part in message.iter_parts()] == ["text/plain", "text/html"]


@pytest.mark.asyncio
async def test_send_without_configuration_reports_failure():
    service = EmailService(dataclasses.replace(SETTINGS, host=""))
    result = await service.send_email("a@example.com", "Hi", RenderedEmail(html="<p>Hi</p>", text="Hi"))
    assert result == {"success": False, "error": "Email service not configured"}


@pytest.mark.asyncio
async def test_conflicting_transport_flags_block_delivery(caplog):
    settings = dataclasses.replace(SETTINGS, use_ssl=True, start_tls=True)
    with caplog.at_level("WARNING", logger="vhr.services.email_service"):
        service = EmailService(settings)
    assert "SMTP_USE_SSL and SMTP_USE_TLS are mutually exclusive" in caplog.text
    result = await service.send_email("a@example.com", "Hi", RenderedEmail(html="<p>Hi</p>", text="Hi"))
    assert result["success"] is False
    assert result["error"].startswith("Configuration errors: ")


def test_notification_dispatches_rendered_email():
    fake = RecordingEmailService()
    result = NotificationService(fake).notify_customer_verification_code("c@example.com", "111222", 5)
    assert result["success"] is True
    assert fake.sent[0]["to"] == "c@example.com"
    assert fake.sent[0]["subject"] == "Verify your email address"
    assert "111222" in fake.sent[0]["html"]


def test_notification_awaits_async_transport():
    fake = AsyncRecordingEmailService()
    result = NotificationService(fake).notify_customer_registration("c@example.com", "Ada", "Lovelace Ltd")
    assert result["success"] is True
    assert len(fake.sent) == 1


def test_notification_failure_is_returned_not_raised():
    fake = RecordingEmailService(result={"success": False, "error": "smtp down"})
    result = NotificationService(fake).notify_password_reset_otp("u@example.com", "Ada", "000111", 10)
    assert result == {"success": False, "error": "smtp down"}


def test_missing_template_is_reported():
    fake = RecordingEmailService()
    result = NotificationService(fake)._dispatch("u@example.com", "x", "no_such_template", {})
    assert result["success"] is False
    assert fake.sent == []
