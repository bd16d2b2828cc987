from sqlalchemy import create_engine
from sqlmodel import Session, SQLModel
from sqlalchemy.orm import sessionmaker

from taskactivity.core.config import settings

# Import all models to register them with SQLModel metadata
from taskactivity.models import User, DropdownValue, UserDropdownAccess  # noqa: F401

# Create database engine
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, future=True)

# Create session factory
SessionLocal = sessionmaker(bind=engine, class_=Session, autoflush=False, autocommit=False, future=True)

# Read-only engine for the admin query tool (falls back to the main engine)
if settings.QUERY_DATABASE_URL:
    query_engine = create_engine(settings.QUERY_DATABASE_URL, pool_pre_ping=True, future=True)
else:
    query_engine = engine

QuerySessionLocal = sessionmaker(bind=query_engine, class_=Session, autoflush=False, autocommit=False, future=True)


def get_db():
    """Dependency for getting database session"""
    with SessionLocal() as session:
        yield session


def get_query_db():
    """Dependency for the session used to run admin queries"""
    with QuerySessionLocal() as session:
        yield session


def init_db():
    """Initialize database tables"""
    SQLModel.metadata.create_all(engine)
