"""Shared fixtures for the concert store tests."""

import os
from datetime import datetime
from pathlib import Path

import pytest

from concerts.domain.models import Concert, Genre, Performer
from concerts.logging import clear_log_context
from concerts.persistence import RelationalConcertStore
from tests.helpers import DB_INIT_SCRIPT, FIXTURES_DIR

CONFIG_ENV_VARS = (
    "CONCERT_DATABASE_URL",
    "CONCERT_INIT_SCRIPT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "ENVIRONMENT",
)


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding test data files."""
    return FIXTURES_DIR


@pytest.fixture
def db_init_script() -> Path:
    """SQL script that resets the schema and seeds 22 concerts."""
    return DB_INIT_SCRIPT


@pytest.fixture
def store():
    """Empty store on an in-memory database."""
    store = RelationalConcertStore("sqlite:///:memory:")
    yield store
    store.close()


@pytest.fixture
def seeded_store(tmp_path, db_init_script):
    """Store on a fresh database file seeded by db-init.sql."""
    store = RelationalConcertStore(
        f"sqlite:///{tmp_path / 'concerts.db'}", init_script=db_init_script
    )
    yield store
    store.close()


@pytest.fixture
def bruno_mars() -> Performer:
    """Unsaved performer."""
    return Performer(name="Bruno Mars", image_ref="BrunoMars.jpg", genre=Genre.RHYTHM_AND_BLUES)


@pytest.fixture
def magic_tour(bruno_mars) -> Concert:
    """Unsaved concert featuring the bruno_mars performer."""
    return Concert(
        title="24K Magic World Tour",
        date=datetime(2017, 9, 2, 19, 30),
        performer=bruno_mars,
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every configuration variable from the environment."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
    # load_config may have set variables from a .env file
    for name in CONFIG_ENV_VARS:
        os.environ.pop(name, None)


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()
