import os

os.environ.setdefault("PYTEST_RUNNING", "1")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from vhr.api.main import app
from vhr.db import models
from vhr.db.database import SessionLocal, engine
from vhr.services.email_service import EmailService, SmtpSettings
from vhr.services.notification_service import NotificationService, get_notification_service
from vhr.utils.role_permissions import ROLE_SUPER_ADMIN, ROLE_USER, get_default_permissions
from vhr.utils.security import create_access_token, hash_password

DEFAULT_PASSWORD = "secret123"


@pytest.fixture(scope="session", autouse=True)
def create_schema_once():
    """Create all tables once per test session (SQLite in-memory lives for the process)."""
    models.Base.metadata.create_all(bind=engine)
    yield
    models.Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_data():
    """Truncate all tables between tests without dropping metadata (faster)."""
    connection = engine.connect()
    trans = connection.begin()
    for table in reversed(models.Base.metadata.sorted_tables):
        connection.execute(table.delete())
    trans.commit()
    connection.close()
    yield


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


class FakeEmailService(EmailService):
    """Renders the real templates but records messages instead of sending them."""

    def __init__(self):
        super().__init__(SmtpSettings(host="localhost", port=25))
        self.sent = []

    def send_email(self, to_email, subject, rendered, reply_to=None):
        self.sent.append({"to": to_email, "subject": subject, "html": rendered.html, "text": rendered.text})
        return {"success": True}


@pytest.fixture
def outbox():
    fake = FakeEmailService()
    app.dependency_overrides[get_notification_service] = lambda: NotificationService(fake)
    yield fake.sent
    app.dependency_overrides.pop(get_notification_service, None)


@pytest.fixture
def client(outbox):
    return TestClient(app)


@pytest.fixture
def group_factory(db_session: Session):
    def _create(title: str, permissions=None, custom_permissions=None, is_active: bool = True, is_delete: bool = False):
        group = models.UserGroup(
            title=title,
            permissions=permissions or get_default_permissions(),
            custom_permissions=custom_permissions or [],
            is_active=is_active,
            is_delete=is_delete,
        )
        db_session.add(group)
        db_session.commit()
        db_session.refresh(group)
        return group
    return _create


@pytest.fixture
def user_factory(db_session: Session):
    def _create(email: str, role: str = ROLE_USER, group=None, is_delete: bool = False, password: str = DEFAULT_PASSWORD):
        user = models.User(
            name=email.split("@")[0],
            email=email,
            password=hash_password(password),
            role=role,
            user_group_id=group.id if group is not None else None,
            is_delete=is_delete,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _create


@pytest.fixture
def customer_factory(db_session: Session):
    def _create(email: str = "client@example.com", is_delete: bool = False):
        customer = models.Customer(
            first_name="Grace",
            last_name="Hopper",
            business_name="Hopper Legal",
            phone_number="0123456789",
            email=email,
            password=hash_password(DEFAULT_PASSWORD),
            practice_area=[],
            is_delete=is_delete,
        )
        db_session.add(customer)
        db_session.commit()
        db_session.refresh(customer)
        return customer
    return _create


@pytest.fixture
def currency_factory(db_session: Session):
    def _create(code: str = "EUR", exchange_rate: float = 1.0):
        currency = models.Currency(
            currency_code=code,
            currency_name=code,
            currency_symbol=code,
            exchange_rate=exchange_rate,
        )
        db_session.add(currency)
        db_session.commit()
        db_session.refresh(currency)
        return currency
    return _create


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


@pytest.fixture
def auth_headers():
    return bearer


@pytest.fixture
def admin_headers(user_factory):
    return bearer(user_factory("admin@example.com", role=ROLE_SUPER_ADMIN))


@pytest.fixture
def user_headers(user_factory):
    return bearer(user_factory("staff@example.com", role=ROLE_USER))
