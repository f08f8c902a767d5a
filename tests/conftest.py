import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event, func, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from chapterquiz.core.database import get_db, init_db
from chapterquiz.main import app
from chapterquiz.manage import create_user
from chapterquiz.models.orm import Chapter, Choice, Question
from chapterquiz.models.schemas import QuestionDraft
from chapterquiz.services.authoring import create_chapter


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool, future=True)

    @event.listens_for(eng, "connect")
    def _foreign_keys(dbapi_conn, _record):
        dbapi_conn.execute("PRAGMA foreign_keys=ON")

    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)


@pytest.fixture
def users(session_factory):
    create_user("alice", "alice-pw", "Alice", session_factory=session_factory)
    create_user("bob", "bob-pw", session_factory=session_factory)
    return ["alice", "bob"]


@pytest.fixture
def db(session_factory, users):
    with session_factory() as session:
        yield session


def draft(text, correct="B", **overrides):
    options = {"A": "3", "B": "4", "C": "5", "D": "6"}
    options.update(overrides)
    return QuestionDraft(question_text=text, options=options, correct_choice=correct)


@pytest.fixture
def make_draft():
    return draft


@pytest.fixture
def math_chapter(db):
    return create_chapter(db, "alice", "Math", "arithmetic", [draft("2+2?", "B")])


@pytest.fixture
def counts(session_factory):
    def _counts():
        with session_factory() as s:
            return tuple(s.scalar(select(func.count()).select_from(m)) for m in (Chapter, Question, Choice))
    return _counts


@pytest.fixture
def client(session_factory, users):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def alice(client):
    r = client.post("/login", data={"userid": "alice", "password": "alice-pw"}, follow_redirects=False)
    assert r.status_code == 303
    return client
