"""
Shared fixtures: a throwaway SQLite database per test, a seeded team with a
dataroom, and an httpx client bound to the FastAPI app.

Run:  pytest backend/tests -v
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from papermark.database import Base, get_db, get_session_factory
from papermark.main import app
from papermark.models import Dataroom, DataroomDocument, DataroomFolder, Document, Team, User, UserTeam
from papermark.services.auth import create_access_token
from papermark.services.slug import slugify


@pytest_asyncio.fixture
async def engine(tmp_path):
    # file-backed so concurrent sessions each get their own connection
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'papermark.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def seed(db: AsyncSession):
    """Team "Acme" with member alice, outsider bob, and one dataroom."""
    alice = User(email="alice@example.com", name="Alice")
    bob = User(email="bob@example.com", name="Bob")
    team = Team(name="Acme")
    other_team = Team(name="Globex")
    db.add_all([alice, bob, team, other_team])
    await db.flush()

    db.add(UserTeam(team_id=team.id, user_id=alice.id, role="ADMIN"))
    db.add(UserTeam(team_id=other_team.id, user_id=bob.id))
    dataroom = Dataroom(team_id=team.id, name="Series A")
    other_dataroom = Dataroom(team_id=other_team.id, name="Globex Deal")
    db.add_all([dataroom, other_dataroom])
    await db.commit()

    return SimpleNamespace(
        alice=alice,
        bob=bob,
        team=team,
        other_team=other_team,
        dataroom=dataroom,
        other_dataroom=other_dataroom,
        alice_headers={"Authorization": f"Bearer {create_access_token(alice.id)}"},
        bob_headers={"Authorization": f"Bearer {create_access_token(bob.id)}"},
        url=f"/teams/{team.id}/datarooms/{dataroom.id}/folders",
    )


async def add_folder(
    db: AsyncSession,
    dataroom_id: str,
    name: str,
    parent: DataroomFolder | None = None,
    order_index: int | None = None,
) -> DataroomFolder:
    prefix = parent.path if parent is not None else ""
    folder = DataroomFolder(
        dataroom_id=dataroom_id,
        name=name,
        path=f"{prefix}/{slugify(name)}",
        parent_id=parent.id if parent is not None else None,
        order_index=order_index,
    )
    db.add(folder)
    await db.commit()
    return folder


async def add_document(
    db: AsyncSession,
    team_id: str,
    dataroom_id: str,
    name: str,
    folder: DataroomFolder | None = None,
    order_index: int | None = None,
    type: str = "pdf",
) -> DataroomDocument:
    document = Document(team_id=team_id, name=name, type=type)
    db.add(document)
    await db.flush()
    link = DataroomDocument(
        dataroom_id=dataroom_id,
        document_id=document.id,
        folder_id=folder.id if folder is not None else None,
        order_index=order_index,
    )
    db.add(link)
    await db.commit()
    return link


@pytest_asyncio.fixture
async def tree(db: AsyncSession, seed):
    """
    /finance            1 doc
      /finance/audit    2 docs
        .../2024        1 doc
          .../q1        0 docs
      /finance/tax      1 doc
    /legal              0 docs
    root                2 docs
    """
    team_id, dataroom_id = seed.team.id, seed.dataroom.id
    finance = await add_folder(db, dataroom_id, "Finance", order_index=0)
    legal = await add_folder(db, dataroom_id, "Legal", order_index=1)
    audit = await add_folder(db, dataroom_id, "Audit", parent=finance)
    year = await add_folder(db, dataroom_id, "2024", parent=audit)
    q1 = await add_folder(db, dataroom_id, "Q1", parent=year)
    tax = await add_folder(db, dataroom_id, "Tax", parent=finance)

    await add_document(db, team_id, dataroom_id, "Budget.xlsx", folder=finance, type="sheet")
    await add_document(db, team_id, dataroom_id, "Auditor letter", folder=audit, order_index=1)
    await add_document(db, team_id, dataroom_id, "Audit report", folder=audit, order_index=0)
    await add_document(db, team_id, dataroom_id, "Annual statement", folder=year)
    await add_document(db, team_id, dataroom_id, "Tax return", folder=tax)
    await add_document(db, team_id, dataroom_id, "Pitch deck", order_index=0)
    await add_document(db, team_id, dataroom_id, "Cap table", order_index=1, type="sheet")

    return SimpleNamespace(finance=finance, legal=legal, audit=audit, year=year, q1=q1, tax=tax)
