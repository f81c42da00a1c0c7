# File: tests/conftest.py

import pytest
import os
import sys
import sqlalchemy
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy_utils import database_exists, create_database

# 1. Add project root to path and point the app at a throwaway SQLite file
sys.path.append(os.getcwd())
TEST_DATABASE_URL = "sqlite:///./test_phrasecoach.db"
os.environ["PHRASECOACH_DATABASE_URL"] = TEST_DATABASE_URL

# 2. Import Settings
from phrasecoach.core.config.settings import settings
from phrasecoach.features.media.domain.interfaces import IAudioPlayer, ISpeechRecognizer

# 3. Create Test Engine
TEST_ENGINE = create_engine(settings.DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=TEST_ENGINE)


@pytest.fixture(scope="session", autouse=True)
def global_setup():
    """
    Runs once per test session.
    Ensures DB exists and all tables are registered and created.
    """
    if not database_exists(TEST_ENGINE.url):
        create_database(TEST_ENGINE.url)

    from phrasecoach.core.database.connection import init_db

    init_db(TEST_ENGINE)

    yield


@pytest.fixture(scope="function", autouse=True)
def clean_db(global_setup):
    """
    Runs before EVERY test.
    Empties every table so tests never see each other's rows.
    """
    from phrasecoach.core.database.base import Base

    Base.metadata.create_all(bind=TEST_ENGINE)

    with TEST_ENGINE.connect() as conn:
        trans = conn.begin()
        is_sqlite = TEST_ENGINE.dialect.name == "sqlite"
        table_names = sqlalchemy.inspect(TEST_ENGINE).get_table_names()
        if table_names:
            if is_sqlite:
                conn.execute(text("PRAGMA foreign_keys = OFF;"))
                for table in table_names:
                    conn.execute(text(f'DELETE FROM "{table}";'))
                conn.execute(text("PRAGMA foreign_keys = ON;"))
            else:
                conn.execute(text("SET session_replication_role = 'replica';"))
                for table in table_names:
                    conn.execute(text(f'TRUNCATE TABLE "{table}" CASCADE;'))
                conn.execute(text("SET session_replication_role = 'origin';"))
        trans.commit()

    yield


@pytest.fixture(scope="function")
def db_session():
    """
    Provides a session for the test to use.
    """
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


# --- Fake device services ---

class FakePlayer(IAudioPlayer):
    """Records calls into a shared log; raises `fail_with` on the next play() if set."""

    def __init__(self, log):
        self.log = log
        self.fail_with = None
        self.played = []

    def play(self, audio_ref):
        if self.fail_with:
            error, self.fail_with = self.fail_with, None
            raise error
        self.log.append("player.play")
        self.played.append(audio_ref)

    def stop(self):
        self.log.append("player.stop")


class FakeRecognizer(ISpeechRecognizer):
    """Records calls into a shared log; raises `fail_with` on the next start() if set."""

    def __init__(self, log):
        self.log = log
        self.fail_with = None
        self.locales = []

    def start(self, locale):
        if self.fail_with:
            error, self.fail_with = self.fail_with, None
            raise error
        self.log.append("recognizer.start")
        self.locales.append(locale)

    def stop(self):
        self.log.append("recognizer.stop")


@pytest.fixture
def call_log():
    return []


@pytest.fixture
def player(call_log):
    return FakePlayer(call_log)


@pytest.fixture
def recognizer(call_log):
    return FakeRecognizer(call_log)
