"""Test configuration and fixtures."""

from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.config import settings
from app.core.database import Base, get_db
from app.core.permissions import Role
from app.core.security import get_password_hash
from app.core.tenancy import AccessContext
from app.models.tenant import Tenant
from app.models.user import User
from main import app

PASSWORD = "password123"

# Create test engine with NullPool to avoid connection issues
test_engine = create_async_engine(
    settings.TEST_DATABASE_URL,
    echo=False,
    poolclass=NullPool,
)
test_session_maker = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
    """Override database dependency for tests."""
    async with test_session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def setup_database() -> AsyncGenerator[None, None]:
    """Create test database tables before each test that needs it."""
    app.dependency_overrides[get_db] = override_get_db

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture
async def db(setup_database: None) -> AsyncGenerator[AsyncSession, None]:
    """Get database session for tests."""
    async with test_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(setup_database: None) -> AsyncGenerator[AsyncClient, None]:
    """Get async HTTP client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ============== Helpers ==============


def auth_header(token: str) -> dict[str, str]:
    """Create authorization header."""
    return {"Authorization": f"Bearer {token}"}


def context_for(user: User) -> AccessContext:
    """Access context of a fixture user, as the API would derive it."""
    return AccessContext.from_user(user)


async def make_user(
    db: AsyncSession,
    email: str,
    role: Role,
    tenant: Tenant | None = None,
    supervisor: User | None = None,
    first_name: str = "Test",
) -> User:
    user = User(
        email=email,
        password_hash=get_password_hash(PASSWORD),
        first_name=first_name,
        last_name=role.value.capitalize(),
        role=role,
        tenant_id=tenant.id if tenant else None,
        supervisor_id=supervisor.id if supervisor else None,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def login(client: AsyncClient, email: str) -> str:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": PASSWORD},
    )
    return response.json()["access_token"]


# ============== Tenants ==============


@pytest_asyncio.fixture
async def tenant(db: AsyncSession) -> Tenant:
    """Create the main test tenant."""
    tenant = Tenant(
        name="Acme Realty",
        subdomain="acme",
        monthly_fee=Decimal("99.00"),
    )
    db.add(tenant)
    await db.commit()
    await db.refresh(tenant)
    yield tenant


@pytest_asyncio.fixture
async def other_tenant(db: AsyncSession) -> Tenant:
    """Create a second tenant for isolation tests."""
    tenant = Tenant(
        name="Globex Homes",
        subdomain="globex",
        monthly_fee=Decimal("49.00"),
    )
    db.add(tenant)
    await db.commit()
    await db.refresh(tenant)
    yield tenant


# ============== Users ==============


@pytest_asyncio.fixture
async def superadmin(db: AsyncSession) -> User:
    """Create a platform superadmin (no tenant)."""
    yield await make_user(db, "root@platform.io", Role.SUPERADMIN, first_name="Root")


@pytest_asyncio.fixture
async def admin(db: AsyncSession, tenant: Tenant) -> User:
    """Create the tenant admin."""
    yield await make_user(db, "admin@acme.io", Role.ADMIN, tenant, first_name="Ada")


@pytest_asyncio.fixture
async def supervisor(db: AsyncSession, tenant: Tenant) -> User:
    """Create a supervisor in the main tenant."""
    yield await make_user(db, "super@acme.io", Role.SUPERVISOR, tenant, first_name="Sam")


@pytest_asyncio.fixture
async def sales(db: AsyncSession, tenant: Tenant, supervisor: User) -> User:
    """Create a sales agent on the supervisor's team."""
    yield await make_user(
        db, "sales@acme.io", Role.SALES, tenant, supervisor=supervisor, first_name="Sid"
    )


@pytest_asyncio.fixture
async def other_sales(db: AsyncSession, tenant: Tenant) -> User:
    """Create a sales agent outside the supervisor's team."""
    yield await make_user(db, "solo@acme.io", Role.SALES, tenant, first_name="Sol")


@pytest_asyncio.fixture
async def other_admin(db: AsyncSession, other_tenant: Tenant) -> User:
    """Create the admin of the second tenant."""
    yield await make_user(db, "admin@globex.io", Role.ADMIN, other_tenant, first_name="Gus")


# ============== Tokens ==============


@pytest_asyncio.fixture
async def superadmin_token(client: AsyncClient, superadmin: User) -> str:
    return await login(client, superadmin.email)


@pytest_asyncio.fixture
async def admin_token(client: AsyncClient, admin: User) -> str:
    return await login(client, admin.email)


@pytest_asyncio.fixture
async def supervisor_token(client: AsyncClient, supervisor: User) -> str:
    return await login(client, supervisor.email)


@pytest_asyncio.fixture
async def sales_token(client: AsyncClient, sales: User) -> str:
    return await login(client, sales.email)


@pytest_asyncio.fixture
async def other_sales_token(client: AsyncClient, other_sales: User) -> str:
    return await login(client, other_sales.email)


@pytest_asyncio.fixture
async def other_admin_token(client: AsyncClient, other_admin: User) -> str:
    return await login(client, other_admin.email)
