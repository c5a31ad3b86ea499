"""Database connection utilities."""
import logging
from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import DatabaseConfig
from app.models import Base

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages database connections and operations."""

    def __init__(self, config: DatabaseConfig):
        """
        Initialize database manager.

        Args:
            config: Database configuration
        """
        self.config = config
        self._engine = None
        self._session_maker = None

    @property
    def engine(self):
        """Get SQLAlchemy engine."""
        if self._engine is None:
            self._engine = self.config.get_database_engine()
        return self._engine

    @property
    def session_maker(self):
        """Get session maker."""
        if self._session_maker is None:
            self._session_maker = sessionmaker(
                autocommit=False,
                autoflush=False,
                bind=self.engine,
            )
        return self._session_maker

    def create_tables(self):
        """Create all tables."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Created all database tables")

    def drop_tables(self):
        """Drop all tables."""
        Base.metadata.drop_all(bind=self.engine)
        logger.info("Dropped all database tables")

    def get_session(self) -> Session:
        """Get a database session."""
        return self.session_maker()

    def health_check(self) -> bool:
        """Check database connectivity."""
        try:
            with self.get_session() as session:
                result = session.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    def close(self):
        """Close database connections."""
        if self._engine:
            self._engine.dispose()


class TestDatabaseManager(DatabaseManager):
    """Database manager for testing with in-memory SQLite."""

    __test__ = False  # Tell pytest to skip this class

    def __init__(self):
        """Initialize test database manager."""
        self.config = None
        self._engine = create_engine(
            "sqlite:///:memory:",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=False,
        )
        self._session_maker = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self._engine,
        )


# Global database manager instance
_db_manager: DatabaseManager | None = None


def get_database_manager(config: DatabaseConfig | None = None) -> DatabaseManager:
    """Get or create database manager instance."""
    global _db_manager
    if _db_manager is None:
        if config is None:
            from app.config.service import settings

            config = settings
        _db_manager = DatabaseManager(config)
    return _db_manager


def get_db_session() -> Generator[Session, None, None]:
    """Dependency to get database session."""
    db_manager = get_database_manager()
    session = db_manager.get_session()
    try:
        yield session
    finally:
        session.close()
