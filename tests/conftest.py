import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")

import pytest
from datetime import datetime, timedelta, UTC
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import get_db
from app.models.base import Base
from app.config import settings
from app.core.security import hash_password, issue_session_token
# Import all model classes to ensure they're registered with SQLAlchemy
from app.models.tenant import Tenant
from app.models.user import User
from app.models.invitation import Invitation
from app.models.category import Category
from app.models.meal import Meal
from app.models.system_message import SystemMessage
from app.models.order import Order
from app.models.counter import Counter
from app.models.role import UserRole
from app.models.session_identity import SessionIdentity
from app.models.subscription import SubscriptionPlan, SubscriptionStatus
# Import FastAPI app AFTER model imports
from app.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "correct-horse-battery"

APP_HOST = "app.localhost"
ROOT_HOST = settings.BASE_DOMAIN


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def host_client(db_session):
    """
    Factory for test clients bound to a host name.

    Usage: host_client("taco-shop.localhost").get("/")
    Redirects are not followed so tests can assert on them.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    clients = []

    def make(host: str) -> TestClient:
        test_client = TestClient(app, base_url=f"http://{host}", follow_redirects=False)
        clients.append(test_client)
        return test_client

    yield make

    for test_client in clients:
        test_client.close()
    app.dependency_overrides.clear()


def create_tenant(
    db,
    slug: str,
    name: str | None = None,
    plan: SubscriptionPlan = SubscriptionPlan.STANDARD,
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
) -> Tenant:
    tenant = Tenant(
        slug=slug,
        name=name or slug.replace("-", " ").title(),
        direction="Av. Siempre Viva 742",
        phone="555-0100",
        subscription_plan=plan,
        subscription_status=status,
    )
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    return tenant


def create_user(
    db,
    tenant: Tenant,
    username: str,
    role: UserRole = UserRole.ADMIN,
    password: str = TEST_PASSWORD,
    is_active: bool = True,
) -> User:
    user = User(
        full_name=username.title(),
        username=username,
        email=f"{username}@example.com",
        password_hash=hash_password(password),
        tenant_id=tenant.id,
        role=role,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_test_token(user: User, tenant: Tenant, issued_at: datetime | None = None) -> str:
    """
    Generate a valid session token for testing.

    Args:
        user: User whose id and role are embedded
        tenant: Tenant whose id, slug, plan and status are embedded
        issued_at: Issue time, defaults to now

    Returns:
        Encoded session token
    """
    identity = SessionIdentity(
        user_id=user.id,
        tenant_id=tenant.id,
        tenant_slug=tenant.slug,
        role=user.role,
        subscription_plan=tenant.subscription_plan,
        subscription_status=tenant.subscription_status,
    )
    return issue_session_token(identity, now=issued_at)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def hours_ago(hours: float) -> datetime:
    return datetime.now(UTC) - timedelta(hours=hours)


@pytest.fixture
def premium_tenant(db_session):
    return create_tenant(db_session, "taco-shop", plan=SubscriptionPlan.PREMIUM)


@pytest.fixture
def standard_tenant(db_session):
    return create_tenant(db_session, "pizza-place")


@pytest.fixture
def platform_tenant(db_session):
    return create_tenant(db_session, "viw-platform", name="Viw Platform", plan=SubscriptionPlan.PREMIUM)


@pytest.fixture
def admin_user(db_session, premium_tenant):
    return create_user(db_session, premium_tenant, "tacoadmin", UserRole.ADMIN)


@pytest.fixture
def staff_user(db_session, premium_tenant):
    return create_user(db_session, premium_tenant, "tacostaff", UserRole.STAFF)


@pytest.fixture
def viewer_user(db_session, premium_tenant):
    return create_user(db_session, premium_tenant, "tacoviewer", UserRole.VIEWER)


@pytest.fixture
def other_admin(db_session, standard_tenant):
    return create_user(db_session, standard_tenant, "pizzaadmin", UserRole.ADMIN)


@pytest.fixture
def superadmin_user(db_session, platform_tenant):
    return create_user(db_session, platform_tenant, "root", UserRole.SUPERADMIN)


@pytest.fixture
def admin_headers(admin_user, premium_tenant):
    """Authorization headers for the premium tenant's admin"""
    return bearer(create_test_token(admin_user, premium_tenant))


@pytest.fixture
def staff_headers(staff_user, premium_tenant):
    return bearer(create_test_token(staff_user, premium_tenant))


@pytest.fixture
def viewer_headers(viewer_user, premium_tenant):
    return bearer(create_test_token(viewer_user, premium_tenant))


@pytest.fixture
def other_admin_headers(other_admin, standard_tenant):
    """Authorization headers for the standard tenant's admin"""
    return bearer(create_test_token(other_admin, standard_tenant))


@pytest.fixture
def superadmin_headers(superadmin_user, platform_tenant):
    return bearer(create_test_token(superadmin_user, platform_tenant))
