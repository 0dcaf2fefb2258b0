"""Shared fixtures: an in-memory store, API client and user/board factories."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session

from taskboard import models  # noqa: F401  registers the tables
from taskboard.database import build_engine, get_session
from taskboard.main import app
from taskboard.models import BoardMember, User
from taskboard.schemas.board import BoardCreate
from taskboard.schemas.card import CardCreate
from taskboard.services import boards, cards, lists
from taskboard.services.auth import token_for_user
from taskboard.utils.security import hash_password


PASSWORD = "s3cret-pass"


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Hash once; bcrypt is deliberately slow."""
    return hash_password(PASSWORD)


@pytest.fixture
def engine():
    """Create a fresh in-memory database per test."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine, autoflush=False) as session:
        yield session


@pytest.fixture
def client(engine):
    """API client whose requests each get their own session on the test engine."""

    def override_get_session():
        session = Session(engine, autoflush=False)
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session, password_hash):
    """Factory creating committed users."""

    def _make_user(name: str, email: str = None) -> User:
        user = User(
            email=email or f"{name.lower()}@taskboard.io",
            name=name,
            hashed_password=password_hash,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def owner(make_user) -> User:
    return make_user("Owner")


@pytest.fixture
def member(make_user) -> User:
    return make_user("Member")


@pytest.fixture
def outsider(make_user) -> User:
    return make_user("Outsider")


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {token_for_user(user)}"}

    return _auth_headers


@pytest.fixture
def add_member(session):
    def _add_member(board_id: str, user: User) -> BoardMember:
        board_member = BoardMember(board_id=board_id, user_id=user.id, role="member")
        session.add(board_member)
        session.commit()
        return board_member

    return _add_member


@pytest.fixture
def board(session, owner, member, add_member):
    """Board owned by ``owner`` with ``member`` invited."""
    created = boards.create_board(session, owner.id, BoardCreate(title="Sprint"))
    add_member(created.id, member)
    return created


@pytest.fixture
def board_lists(session, owner, board):
    """Three lists on ``board`` at orders 0, 1, 2."""
    return [
        lists.create_list(session, owner.id, board.id, title)
        for title in ("Todo", "Doing", "Done")
    ]


@pytest.fixture
def make_card(session, owner):
    def _make_card(list_id: str, title: str = "Card", user: User = None):
        return cards.create_card(session, (user or owner).id, list_id, CardCreate(title=title))

    return _make_card
