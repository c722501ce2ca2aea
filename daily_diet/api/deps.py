from typing import Iterator

from fastapi import Depends
from sqlalchemy.orm import Session

from daily_diet.core.config import Settings, get_settings
from daily_diet.db.session import SessionLocal, get_engine


def get_db(settings: Settings = Depends(get_settings)) -> Iterator[Session]:
    """One Session per request, always closed after the response."""
    db = SessionLocal(bind=get_engine(settings.database_url))
    try:
        yield db
    finally:
        db.close()
