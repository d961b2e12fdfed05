import os

# before the app is imported: keep the module-level engine off the disk
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine, select

from app import main
from app.config import settings
from app.deps import get_db
from app.models import DailyPuzzle, SecretWord
from app.services.seed import seed_words

from .helpers import SECRETS, TODAY, WORDS


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        seed_words(session, WORDS, SECRETS)
        yield session


@pytest.fixture
def low_threshold(monkeypatch):
    """The test dictionary is tiny; two words per side is enough to generate."""
    monkeypatch.setattr(settings, "MIN_BRACKET_CANDIDATES", 2)


@pytest.fixture
def bingo_puzzle(session):
    """Today's puzzle: APPLE .. CHAIR, secret BINGO."""
    secret = session.exec(select(SecretWord).where(SecretWord.word == "bingo")).one()
    secret.used = True
    puzzle = DailyPuzzle(
        date=TODAY,
        top_word="apple",
        bottom_word="chair",
        secret_word_id=secret.id,
    )
    session.add(secret)
    session.add(puzzle)
    session.commit()
    session.refresh(puzzle)
    return puzzle


@pytest.fixture
def client(engine, session, monkeypatch):
    def override_get_db():
        with Session(engine) as db:
            yield db

    main.app.dependency_overrides[get_db] = override_get_db
    monkeypatch.setattr(main, "today", lambda: TODAY)
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()
