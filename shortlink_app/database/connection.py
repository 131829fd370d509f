"""
Database handle and per-request sessions.

The Database object is created and connected once by the application
lifespan (see main.py), stored on app.state, and released on shutdown.
Request handlers never touch the engine directly: they receive a scoped
Session through the get_db dependency.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shortlink_app.exceptions import StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the SQLAlchemy engine and session factory.

    Lifecycle:
        database = Database(url)
        database.connect()      # engine + tables
        with database.session() as db:
            ...
        database.dispose()      # release pooled connections
    """

    def __init__(self, url: str):
        self.url = url
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    def connect(self) -> None:
        """Create the engine, the session factory and any missing tables"""
        if self.engine is not None:
            return

        connect_args = {"check_same_thread": False} if self.is_sqlite else {}
        self.engine = create_engine(self.url, connect_args=connect_args, pool_pre_ping=True)
        if self.is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        # Import models to ensure they're registered with Base
        from shortlink_app import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database connected: %s", self.engine.url.render_as_string(hide_password=True))

    def dispose(self) -> None:
        """Release all pooled connections"""
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("Database connections released")

    def drop_all(self) -> None:
        """Drop every table (for tests)"""
        if self.engine is not None:
            Base.metadata.drop_all(bind=self.engine)

    def new_session(self) -> Session:
        if self._session_factory is None:
            raise StorageError("Database is not connected")
        return self._session_factory()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Scoped session: always closed, rolled back if left mid-transaction"""
        db = self.new_session()
        try:
            yield db
        finally:
            db.close()


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency yielding a session from the app's Database"""
    database: Database = request.app.state.database
    with database.session() as db:
        yield db
