from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker


def build_engine(database_url: str) -> Engine:
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(database_url: str) -> sessionmaker:
    """Session factory for processes outside the web app (workers, scripts)."""
    return sessionmaker(autocommit=False, autoflush=False, bind=build_engine(database_url))
