"""
Database session management and configuration - SQLAlchemy over DATABASE_URL.
"""

from contextlib import contextmanager
from typing import Generator, Optional

from loguru import logger
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bizassist.config.settings import settings
from bizassist.models.domain import Base


class Database:
    """
    Database connection manager

    Handles engine creation, schema setup and session management. SQLite URLs
    get a thread-agnostic connection; server databases get a connection pool.
    """

    def __init__(self, url: Optional[str] = None, echo: bool = False):
        """
        Initialize database connection

        Args:
            url: SQLAlchemy URL (defaults to the resolved DATABASE_URL setting)
            echo: Log every SQL statement
        """
        self.url = url or settings.resolved_database_url()
        parsed = make_url(self.url)
        self.is_sqlite = parsed.get_backend_name() == "sqlite"

        logger.info(f"Connecting to database: {parsed.render_as_string(hide_password=True)}")

        in_memory = self.is_sqlite and parsed.database in (None, "", ":memory:")
        if self.is_sqlite:
            engine_kwargs = {"connect_args": {"check_same_thread": False}}
            if in_memory:
                # One shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs = {
                "pool_pre_ping": True,   # Verify connections before using
                "pool_recycle": 3600,    # Recycle connections after 1 hour
                "pool_size": 5,
                "max_overflow": 10,
            }

        self.engine = create_engine(self.url, echo=echo, **engine_kwargs)

        if self.is_sqlite:
            self._register_sqlite_pragmas(immediate=not in_memory)

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

        self._test_connection()

    def _register_sqlite_pragmas(self, immediate: bool):
        """
        Enable foreign keys and a busy timeout on every SQLite connection.

        File databases also open every transaction with BEGIN IMMEDIATE, so a
        read-modify-write holds the write lock from its first SELECT and a
        second writer waits on busy_timeout instead of reading stale rows.
        """
        @event.listens_for(self.engine, "connect")
        def set_sqlite_pragmas(dbapi_conn, connection_record):
            if immediate:
                # Hand transaction control to the "begin" listener below
                dbapi_conn.isolation_level = None
            cursor = dbapi_conn.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.execute("PRAGMA busy_timeout=5000")
            finally:
                cursor.close()

        if immediate:
            @event.listens_for(self.engine, "begin")
            def begin_immediate(conn):
                conn.exec_driver_sql("BEGIN IMMEDIATE")

    def _test_connection(self):
        """Test database connection on initialization"""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.success(f"✅ Connected to {self.engine.dialect.name} database")
        except Exception as e:
            logger.error(f"❌ Failed to connect to database: {e}")
            raise

    def create_all(self) -> None:
        """Create any missing tables"""
        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def get_session(self) -> Session:
        """
        Get a new database session

        Returns:
            SQLAlchemy Session
        """
        return self.SessionLocal()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations

        Usage:
            with db.session_scope() as session:
                session.scalars(select(ProductRecord)).all()
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Database error: {e}")
            raise
        finally:
            session.close()
