
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from passlib.context import CryptContext
from jose import jwt, JWTError
from app.config import settings
from app.errors import InvalidTokenError

pwd_context = CryptContext(schemes=["bcrypt_sha256", "bcrypt"], deprecated="auto")

ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: str
    role: str

    @classmethod
    def for_user(cls, user) -> "TokenClaims":
        return cls(user_id=user.id, email=user.email, role=user.role)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password, hashed)
    except (ValueError, TypeError):
        return False

def _secret_for(kind: str) -> str:
    if kind == ACCESS:
        return settings.jwt_secret
    if kind == REFRESH:
        return settings.jwt_refresh_secret
    raise ValueError(f"unknown token kind: {kind}")

def _encode(claims: TokenClaims, kind: str, lifetime: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": claims.user_id,
        "email": claims.email,
        "role": claims.role,
        "type": kind,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(to_encode, _secret_for(kind), algorithm=settings.jwt_algorithm)

def create_access_token(claims: TokenClaims, expires_minutes: int | None = None) -> str:
    minutes = settings.access_token_expire_minutes if expires_minutes is None else expires_minutes
    return _encode(claims, ACCESS, timedelta(minutes=minutes))

def create_refresh_token(claims: TokenClaims, expires_days: int | None = None) -> str:
    days = settings.refresh_token_expire_days if expires_days is None else expires_days
    return _encode(claims, REFRESH, timedelta(days=days))

def verify_token(token: str, kind: str = ACCESS) -> TokenClaims:
    try:
        payload = jwt.decode(token, _secret_for(kind), algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidTokenError(f"Invalid or expired {kind} token") from exc

    if payload.get("type") != kind:
        raise InvalidTokenError(f"Invalid or expired {kind} token")

    user_id = payload.get("sub")
    email = payload.get("email")
    role = payload.get("role")
    if not user_id or not email or not role:
        raise InvalidTokenError(f"Invalid or expired {kind} token")
    return TokenClaims(user_id=user_id, email=email, role=role)
