from uuid import uuid4
from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.orm import relationship

from daily_diet.db.base import Base
from daily_diet.core.security import now_utc


def new_id() -> str:
    return str(uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)  # doubles as the session token
    name = Column(String(120), nullable=False)
    email = Column(String(320), unique=True, index=True, nullable=False)  # store lowercase
    password = Column(String(255), nullable=False)  # passlib hash, never plaintext

    # set together on register/resend, cleared together on verify
    verification_code = Column(String(6), nullable=True)
    code_expires_at = Column(DateTime(timezone=True), nullable=True)
    email_verified = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    meals = relationship("Meal", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
