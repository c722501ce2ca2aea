import logging
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from daily_diet.api.deps import get_db
from daily_diet.api.deps_auth import require_api_key, set_session_cookie
from daily_diet.core.config import Settings, get_settings
from daily_diet.core.errors import bad_request, conflict, internal_error, unauthorized
from daily_diet.core.security import (
    hash_password, verify_password, now_utc, ensure_aware, DUMMY_PASSWORD_HASH,
    generate_verification_code, code_expiry, constant_time_equals,
)
from daily_diet.models.user import User
from daily_diet.schemas.common import MessageResponse, error_responses
from daily_diet.schemas.user import (
    RegisterBody, RegisterResponse, VerifyBody, ResendBody, LoginBody,
    UserOut, UserListResponse, SessionResponse,
)
from daily_diet.services.mailer import EmailDeliveryError, send_verification_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

INVALID_CREDENTIALS = "Please enter a valid email or password"


def _normalize_email(email: str) -> str:
    return email.lower().strip()


def _email_taken(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).first() is not None


def _send_code(settings: Settings, user: User) -> None:
    try:
        send_verification_email(settings, user.email, user.name, user.verification_code)
    except EmailDeliveryError as e:
        # the user row stays; /users/resend-code recovers
        raise internal_error(str(e))


# ---------- LIST (admin) ----------
@router.get(
    "",
    response_model=UserListResponse,
    response_model_exclude_none=True,
    summary="List all users",
    description="Admin endpoint. Requires the `x-api-key` header. Passwords are never returned.",
    dependencies=[Depends(require_api_key)],
    responses=error_responses(401, 500),
)
def list_users(db: Session = Depends(get_db)):
    users = db.query(User).order_by(User.created_at.desc()).all()
    return UserListResponse(users=[UserOut.model_validate(u) for u in users])


# ---------- REGISTER ----------
@router.post(
    "",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user and send verification code",
    description="""
Create a user with a **unique email**.

A 6 digit verification code is emailed to the user and expires after 15 minutes.
Protected endpoints return `403` until the email is verified.
""",
    responses=error_responses(400, 409, 500),
)
def register(body: RegisterBody, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    email = _normalize_email(body.email)

    if _email_taken(db, email):
        raise conflict("Email already exists")

    user = User(
        name=body.name,
        email=email,
        password=hash_password(body.password),
        verification_code=generate_verification_code(),
        code_expires_at=code_expiry(settings.verification_code_ttl_min),
        email_verified=False,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent registration won the unique constraint
        db.rollback()
        raise conflict("Email already exists")

    logger.info("Registered user %s", user.id)
    _send_code(settings, user)
    return RegisterResponse(email=email)


# ---------- VERIFY ----------
@router.post(
    "/verify",
    response_model=SessionResponse,
    response_model_exclude_none=True,
    summary="Verify email with code",
    description="On success the session cookie is set and the session id is returned.",
    tags=["auth"],
    responses=error_responses(400, 401, 500),
)
def verify_email(
    body: VerifyBody,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    email = _normalize_email(body.email)
    user = db.query(User).filter(User.email == email).first()

    if not user:
        raise unauthorized("User not found")
    if user.email_verified:
        raise unauthorized("Email already verified")
    if not constant_time_equals(user.verification_code, body.code):
        logger.info("Verification failed for user %s: wrong code", user.id)
        raise unauthorized("Invalid code")
    if not user.code_expires_at or now_utc() > ensure_aware(user.code_expires_at):
        logger.info("Verification failed for user %s: code expired", user.id)
        raise unauthorized("Code expired")

    user.email_verified = True
    user.verification_code = None
    user.code_expires_at = None
    db.commit()
    db.refresh(user)

    logger.info("Verified email for user %s", user.id)
    session_id = set_session_cookie(response, user, settings)
    return SessionResponse(user=UserOut.model_validate(user), session_id=session_id)


# ---------- RESEND ----------
@router.post(
    "/resend-code",
    response_model=MessageResponse,
    summary="Resend verification code",
    description="Issues a fresh code (and expiry) and emails it. The previous code stops working.",
    tags=["auth"],
    responses=error_responses(400, 401, 500),
)
def resend_code(body: ResendBody, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    email = _normalize_email(body.email)
    user = db.query(User).filter(User.email == email).first()

    if not user:
        raise bad_request("User not found, please try again!", error="User not found")
    if user.email_verified:
        raise bad_request("Email was already verified", error="Email already verified")

    user.verification_code = generate_verification_code()
    user.code_expires_at = code_expiry(settings.verification_code_ttl_min)
    db.commit()

    logger.info("Re-issued verification code for user %s", user.id)
    _send_code(settings, user)
    return MessageResponse(message="Code successfully sent!")


# ---------- LOGIN ----------
@router.post(
    "/session",
    response_model=SessionResponse,
    response_model_exclude_none=True,
    summary="Log in",
    description="""
Checks email and password and sets the `sessionId` cookie (7 days).

Unknown email, unverified account and wrong password all return the same `401`.
""",
    responses=error_responses(400, 401, 500),
)
def login(
    body: LoginBody,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    email = _normalize_email(body.email)
    user = db.query(User).filter(User.email == email).first()
    # always hash once so unknown and unverified accounts take as long as a wrong password
    password_ok = verify_password(body.password, user.password if user else DUMMY_PASSWORD_HASH)
    if not user or not user.email_verified or not password_ok:
        logger.info("Rejected login attempt")
        raise unauthorized(INVALID_CREDENTIALS, error="Invalid credentials")

    session_id = set_session_cookie(response, user, settings)
    return SessionResponse(user=UserOut.model_validate(user), session_id=session_id)
