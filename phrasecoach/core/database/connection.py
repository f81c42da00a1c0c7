# File: phrasecoach/core/database/connection.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from phrasecoach.core.config.settings import settings
from phrasecoach.core.database.base import Base

# Recognizer callbacks arrive on service threads, so SQLite connections must be shareable
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """Creates the course store tables on `bind` (the app engine by default)."""
    from phrasecoach.features.courses.data import sql_models  # noqa: F401 (registers tables)

    Base.metadata.create_all(bind=bind or engine)
    return sorted(Base.metadata.tables)
