"""Database engine construction and session management."""

from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

# Base class for declarative models
Base = declarative_base()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create a database engine for the given URL.

    Server databases get a connection pool; SQLite gets a connection that can
    be shared with the worker threads FastAPI runs sync dependencies in.

    Args:
        database_url: SQLAlchemy database URL
        echo: Log emitted SQL statements

    Returns:
        Engine: SQLAlchemy engine
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo,
        )

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=10,  # Number of connections to maintain
        max_overflow=20,  # Maximum number of connections beyond pool_size
        echo=echo,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to an engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )


def init_db(engine: Engine) -> None:
    """Create all tables known to the declarative base."""
    # Import models so they register on Base.metadata
    import partydrop.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency for getting database session.

    The session factory is built once by the application factory and kept on
    ``app.state``.

    Yields:
        Session: SQLAlchemy database session

    Example:
        ```python
        from partydrop.database import get_db

        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
        ```
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
