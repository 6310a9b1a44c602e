
from fastapi import Request, Depends
from sqlalchemy.orm import Session
from app.db.session import SessionLocal
from app.errors import AuthError, ForbiddenError, InvalidTokenError, NotFoundError
from app.models.user import User
from app.utils.security import TokenClaims, verify_token, ACCESS


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def bearer_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return None

def get_current_claims(request: Request) -> TokenClaims:
    token = bearer_token(request)
    if not token:
        raise AuthError("No token provided")
    try:
        return verify_token(token, ACCESS)
    except InvalidTokenError:
        raise InvalidTokenError("Invalid or expired token")

def get_current_user(claims: TokenClaims = Depends(get_current_claims), db: Session = Depends(get_db)) -> User:
    user = db.get(User, claims.user_id)
    if user is None:
        raise NotFoundError("User not found", code="USER_NOT_FOUND")
    return user

def require_role(*roles: str):
    def _check(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if claims.role not in roles:
            raise ForbiddenError("Insufficient permissions")
        return claims
    return _check
