from sqlmodel import SQLModel, create_engine, Session
from school_admin.core.config import settings
import logging

logger = logging.getLogger(__name__)


def normalize_database_url(url: str) -> str:
    """SQLAlchemy prefers postgresql:// over postgres://."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def build_engine(url: str):
    """Create an engine for the given URL with pool options suited to its backend."""
    url = normalize_database_url(url)
    if url.startswith("sqlite"):
        # FastAPI serves sync endpoints from a thread pool
        return create_engine(url, echo=False, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


logger.info(f"Connecting to database: {normalize_database_url(settings.database_url)[:20]}...")  # Log partial URL for debugging

engine = build_engine(settings.database_url)


def get_session():
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session


def init_db():
    """Initialize database tables."""
    # Import models to register them with SQLModel
    from school_admin.models import models  # noqa: F401
    SQLModel.metadata.create_all(engine)
