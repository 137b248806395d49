"""
Global test configuration for pytest.

This file is automatically loaded by pytest and contains global fixtures
and configuration settings that apply to all tests.
"""
import os
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time, so configure before importing the package
os.environ.setdefault("DATABASE_TYPE", "sqlite")
os.environ.setdefault("SQLITE_DB_PATH", ":memory:")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from teamkeys.core.dependencies import get_session_factory
from teamkeys.core.unit_of_work import UnitOfWork
from teamkeys.db.all_models import Base
from teamkeys.main import create_app
from teamkeys.models.api_key import ApiKey
from teamkeys.models.enums import AuthenticationType, UserRole
from teamkeys.models.team import Team
from teamkeys.models.user import User
from teamkeys.services.auth_service import AuthContext, create_access_token


def _id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def make_team():
    """Build a transient Team."""
    def _make(name: str = "Acme") -> Team:
        return Team(id=_id(), name=name)
    return _make


@pytest.fixture
def make_user():
    """Build a transient User attached to ``team``."""
    def _make(team: Team, role: UserRole = UserRole.MEMBER, suspended: bool = False) -> User:
        user_id = _id()
        user = User(
            id=user_id,
            team_id=team.id,
            name=f"user-{user_id[:8]}",
            email=f"{user_id}@example.com",
            role=role,
            suspended_at=datetime.now(timezone.utc) if suspended else None,
        )
        user.team = team
        return user
    return _make


@pytest.fixture
def make_key():
    """Build a transient ApiKey owned by ``user``."""
    def _make(user: User, name: str = "CI token") -> ApiKey:
        key = ApiKey(id=_id(), name=name, user_id=user.id, hash=uuid.uuid4().hex * 2, last4="abcd")
        key.user = user
        return key
    return _make


@pytest.fixture
def app_auth():
    """Wrap a user in an app-authenticated context."""
    def _make(user: User, auth_type: AuthenticationType = AuthenticationType.APP) -> AuthContext:
        return AuthContext(user=user, type=auth_type, ip="127.0.0.1")
    return _make


@pytest.fixture
def mock_uow():
    """Create a mock unit of work with mocked repositories."""
    uow = MagicMock(spec=UnitOfWork)
    uow.user_repository = AsyncMock()
    uow.api_key_repository = AsyncMock()
    uow.event_repository = AsyncMock()
    uow.event_repository.create.side_effect = lambda data: SimpleNamespace(id=_id(), **data)
    return uow


# Integration fixtures: a real database file per test

@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Session factory bound to a fresh SQLite database with all tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def seeded(session_factory):
    """
    Two teams. Team A has an admin, two members and a viewer; team B has an
    admin and a member. Returns ids and app tokens for each user.
    """
    people = {
        "admin": ("a", UserRole.ADMIN),
        "member": ("a", UserRole.MEMBER),
        "other_member": ("a", UserRole.MEMBER),
        "viewer": ("a", UserRole.VIEWER),
        "b_admin": ("b", UserRole.ADMIN),
        "b_member": ("b", UserRole.MEMBER),
    }
    teams = {"a": _id(), "b": _id()}
    users = {}
    async with session_factory() as session:
        for label, team_id in teams.items():
            session.add(Team(id=team_id, name=f"Team {label.upper()}"))
        await session.flush()
        for label, (team, role) in people.items():
            user_id = _id()
            session.add(User(
                id=user_id,
                team_id=teams[team],
                name=label,
                email=f"{label}@example.com",
                role=role,
            ))
            users[label] = user_id
        await session.commit()

    return SimpleNamespace(
        teams=teams,
        users=users,
        tokens={label: create_access_token({"sub": user_id}) for label, user_id in users.items()},
    )


@pytest.fixture
def app(session_factory):
    """Create the application wired to the test database."""
    app = create_app()
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    return app


@pytest_asyncio.fixture
async def client(app):
    """Async HTTP client speaking to the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def bearer():
    def _headers(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def future_date():
    return datetime.now(timezone.utc) + timedelta(days=30)


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
