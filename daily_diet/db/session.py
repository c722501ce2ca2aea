# daily_diet/db/session.py
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker


def make_engine(url: str, **kwargs) -> Engine:
    connect_args = kwargs.pop("connect_args", {})
    if url.startswith("sqlite"):
        # sessions are used from FastAPI's threadpool
        connect_args.setdefault("check_same_thread", False)
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True, **kwargs)


@lru_cache
def get_engine(url: str) -> Engine:
    """One engine (and connection pool) per database URL for the life of the process."""
    return make_engine(url)


SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False)
