from datetime import datetime, timedelta, timezone
from typing import Optional
import hmac, secrets, string
from passlib.context import CryptContext

pwd_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# compared against when no account matches, so login does the same work either way
DUMMY_PASSWORD_HASH = pwd_ctx.hash("daily-diet-placeholder")

VERIFICATION_CODE_LENGTH = 6

def ensure_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """Return a timezone-aware UTC datetime. If naive, assume UTC."""
    if dt is None:
        return None
    return dt.astimezone(timezone.utc) if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)

def hash_password(p: str) -> str:
    return pwd_ctx.hash(p)

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_ctx.verify(plain, hashed)

def now_utc() -> datetime:
    return datetime.now(timezone.utc)

def generate_verification_code(length: int = VERIFICATION_CODE_LENGTH) -> str:
    return "".join(secrets.choice(string.digits) for _ in range(length))

def code_expiry(ttl_minutes: int) -> datetime:
    return now_utc() + timedelta(minutes=ttl_minutes)

def constant_time_equals(a: Optional[str], b: Optional[str]) -> bool:
    if a is None or b is None:
        return False
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
