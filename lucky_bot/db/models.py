import json
from pathlib import Path
from sqlalchemy import create_engine, Column, Boolean, Integer, String, Text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from lucky_bot.config import database_url
from lucky_bot.states import QUESTION_COUNT

Base = declarative_base()

SessionLocal = sessionmaker()


class Conversation(Base):
    """Onboarding flags and the current stage of one conversation."""

    __tablename__ = "conversations"

    conversation_id = Column(String(64), primary_key=True)
    stage = Column(String(20), nullable=True)  # NULL for rows older than stages
    turn_count = Column(Integer, nullable=False, default=0)
    said_hello = Column(Boolean, nullable=False, default=False)
    greeted_name = Column(Boolean, nullable=False, default=False)
    offer_game = Column(Boolean, nullable=False, default=False)
    play_a_game = Column(Boolean, nullable=False, default=False)


class Profile(Base):
    __tablename__ = "user_profiles"

    user_id = Column(String(64), primary_key=True)
    name = Column(Text, nullable=True)


class Progress(Base):
    """Quiz score of one user."""

    __tablename__ = "trivia_progress"

    user_id = Column(String(64), primary_key=True)
    points = Column(Integer, nullable=False, default=0)

    # Answered flags stored as JSON: [true, false, ...]
    answered = Column(String(100), default=json.dumps([False] * QUESTION_COUNT))

    def get_answered(self) -> list[bool]:
        if self.answered:
            return json.loads(self.answered)
        return [False] * QUESTION_COUNT

    def set_answered(self, answered: list[bool]) -> None:
        self.answered = json.dumps(answered)


def create_db_engine(url: str) -> Engine:
    """Create an engine; in-memory SQLite shares one connection."""
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite:///"):
        Path(url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, echo=False)


def init_db(url: str = database_url) -> Engine:
    """Initialize the database, create tables and bind sessions to it."""
    engine = create_db_engine(url)
    Base.metadata.create_all(engine)
    SessionLocal.configure(bind=engine)
    return engine


def get_session() -> Session:
    """Get a database session."""
    return SessionLocal()
