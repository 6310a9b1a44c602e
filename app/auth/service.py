
import logging
from sqlalchemy.orm import Session
from app.errors import AuthError, ConflictError, InvalidTokenError, ValidationError
from app.models.user import User
from app.utils.security import (
    TokenClaims, hash_password, verify_password,
    create_access_token, create_refresh_token, verify_token, REFRESH,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
LOGIN_FAILED_MESSAGE = "Invalid email or password"


def normalize_email(email: str | None) -> str | None:
    """Emails are stored and looked up lowercased so any casing of an address logs in."""
    if email is None:
        return None
    return email.strip().lower() or None


def _issue_pair(user: User) -> dict:
    claims = TokenClaims.for_user(user)
    return {
        "user": user,
        "access_token": create_access_token(claims),
        "refresh_token": create_refresh_token(claims),
    }

def register_user(db: Session, name: str | None, email: str | None, password: str | None, role: str = "customer") -> dict:
    email = normalize_email(email)
    if not name or not email or not password:
        raise ValidationError("Name, email, and password are required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    if db.query(User).filter(User.email == email).first():
        raise ConflictError("User with this email already exists", code="REGISTRATION_FAILED")

    user = User(name=name, email=email, password_hash=hash_password(password), role=role, email_verified=False)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("registered user %s (%s)", user.id, user.role)
    return _issue_pair(user)

def login_user(db: Session, email: str | None, password: str | None) -> dict:
    email = normalize_email(email)
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        logger.info("failed login for %s", email)
        raise AuthError(LOGIN_FAILED_MESSAGE, code="LOGIN_FAILED")
    return _issue_pair(user)

def refresh_access_token(refresh_token: str | None) -> str:
    if not refresh_token:
        raise ValidationError("Refresh token is required")
    try:
        claims = verify_token(refresh_token, REFRESH)
    except InvalidTokenError:
        raise InvalidTokenError("Invalid or expired refresh token", code="INVALID_REFRESH_TOKEN")
    return create_access_token(claims)
