# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – registration and login.

Notes
-----
* Login answers 404 for an unknown email and 401 for a wrong password.
* No session or token is issued.  A 200 from /login proves the credentials
  of that single request only.
* Emails are stored lower-cased, so uniqueness ignores case.  It is checked
  before the insert and enforced again by the unique index on
  ``users.email``; losing that race is reported as 409 too.
"""

from email_validator import EmailNotValidError, validate_email
from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from core.config import settings
from core.exceptions import (
    ConflictError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    envelope,
)
from core.logger import logger
from core.security import hash_password, verify_password
from models.user import User
from auth.schemas import LoginRequest, RegisterRequest, UserPublic

router = APIRouter(tags=["auth"])

_REGISTER_FIELDS = ("firstName", "lastName", "email", "password", "role")


def _require_fields(body, fields) -> None:
    """Raise 400 naming the first field that is absent or blank."""
    for name in fields:
        value = getattr(body, name)
        if value is None or not str(value).strip():
            raise ValidationError(f"{name} is required")


def _normalize_email(email: str) -> str:
    """Validate the syntax and return the lower-cased normalized address."""
    try:
        validated = validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise ValidationError("Invalid email address")
    return validated.normalized.lower()


def _public_user(user: User) -> dict:
    return UserPublic(
        id=user.id,
        firstName=user.first_name,
        lastName=user.last_name,
        email=user.email,
        role=user.role,
    ).model_dump()


# ---------------------------------------------------------------------------
# POST /register
# ---------------------------------------------------------------------------


@router.post("/register")
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create a user account and return it without the password."""
    _require_fields(body, _REGISTER_FIELDS)
    email = _normalize_email(body.email)

    if db.query(User).filter(User.email == email).first():
        raise ConflictError("User with this email already exists")

    if len(body.password) < settings.min_password_length:
        raise ValidationError(
            f"Password must be at least {settings.min_password_length} characters"
        )

    try:
        password_hash = hash_password(body.password)
    except (ValueError, TypeError) as exc:
        raise InternalError("Error hashing password") from exc

    user = User(
        first_name=body.firstName,
        last_name=body.lastName,
        email=email,
        password=password_hash,
        role=body.role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent registration with the same email won the insert
        db.rollback()
        raise ConflictError("User with this email already exists")
    except SQLAlchemyError as exc:
        db.rollback()
        raise InternalError("Error inserting user into database") from exc
    db.refresh(user)

    logger.info("Registered user id=%s role=%s", user.id, user.role)
    return envelope(200, "User registered successfully", user=_public_user(user))


# ---------------------------------------------------------------------------
# POST /login
# ---------------------------------------------------------------------------


@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Verify credentials and return the user without the password."""
    _require_fields(body, ("email", "password"))

    email = body.email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise NotFoundError("User not found")

    try:
        matched = verify_password(body.password, user.password)
    except (ValueError, TypeError) as exc:
        raise InternalError("Error comparing passwords") from exc

    if not matched:
        logger.info("Failed login for user id=%s", user.id)
        raise UnauthorizedError("Incorrect password")

    return envelope(200, "Login successful", user=_public_user(user))
