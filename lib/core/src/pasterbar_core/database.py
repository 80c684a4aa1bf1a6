"""
pasterbar_core.database

Shared SQLAlchemy declarative base and session management for ORM model definitions.

Overview:
- Provides a single `declarative_base()` instance (`Base`) inherited by the ORM
    entity classes.
- Includes a utility class for generating SQLAlchemy sessions bound to the
    SQLite history database.

Contents:
- Base:
    Singleton `declarative_base` instance. ClipboardHistoryEntity inherits from it.

- DatabaseSessionGenerator:
    Utility class to generate SQLAlchemy sessions bound to a specific engine.
    - __init__(settings: HistoryStoreSettings):
        Ensures the database directory exists and creates the engine.
    - get_session() -> Session:
        Creates a new synchronous SQLAlchemy session.
    - init_db():
        Creates all tables defined in the ORM models if they are absent.
    - dispose():
        Releases pooled connections.

Design Notes:
- The engine is created with `check_same_thread=False` because the detector and
    feed tasks run on their own threads; callers serialize access themselves.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from pasterbar_core.config import HistoryStoreSettings


Base = declarative_base()
"""Singleton `declarative_base` instance for ORM models."""


class DatabaseSessionGenerator:
    """
    Utility class to generate SQLAlchemy sessions bound to a specific engine.

    Attributes:
        engine (sqlalchemy.engine.Engine): The SQLAlchemy engine to bind sessions to.
    """

    def __init__(self, settings: HistoryStoreSettings):
        settings.database_path.parent.mkdir(parents=True, exist_ok=True)
        self.engine = create_engine(
            settings.database_url,
            echo=settings.echo,
            connect_args={"check_same_thread": False},
        )
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def get_session(self):
        """
        Creates a new SQLAlchemy session bound to the configured engine.

        Returns:
            sqlalchemy.orm.Session: A new session instance.
        """
        return self._session_factory()

    def init_db(self):
        """
        Initializes the database by creating all tables defined in the ORM models.
        """
        Base.metadata.create_all(self.engine)

    def dispose(self):
        """Release the engine's pooled connections."""
        self.engine.dispose()
