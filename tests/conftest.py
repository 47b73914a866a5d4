import logging

import pytest
from sqlalchemy.orm import sessionmaker

from lucky_bot.db.models import init_db
from lucky_bot.db.repository import StateStore
from lucky_bot.services.turns import TurnDispatcher


@pytest.fixture
def engine():
    """Fresh in-memory database for every test."""
    engine = init_db("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return StateStore(sessionmaker(bind=engine))


@pytest.fixture
def turns(store):
    return TurnDispatcher(store, logging.getLogger("tests.turns"), pace=0)
