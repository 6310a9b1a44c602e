
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.auth.deps import get_db, get_current_user
from app.schemas.auth import RegisterIn, LoginIn, RefreshIn, AuthOut, AccessTokenOut, UserOut
from app.auth.service import register_user, login_user, refresh_access_token
from app.models.user import User
from app.utils.responses import ok

router = APIRouter(prefix="/api/auth", tags=["auth"])

def _auth_out(result: dict) -> AuthOut:
    return AuthOut(
        user=UserOut.model_validate(result["user"]),
        access_token=result["access_token"],
        refresh_token=result["refresh_token"],
    )

@router.post("/register", status_code=201)
def register(body: RegisterIn, db: Session = Depends(get_db)):
    result = register_user(db, body.name, body.email, body.password)
    return ok(_auth_out(result), status_code=201)

@router.post("/login")
def login(body: LoginIn, db: Session = Depends(get_db)):
    result = login_user(db, body.email, body.password)
    return ok(_auth_out(result))

@router.post("/refresh")
def refresh(body: RefreshIn):
    token = refresh_access_token(body.refresh_token)
    return ok(AccessTokenOut(access_token=token))

@router.get("/me")
def me(user: User = Depends(get_current_user)):
    return ok({"user": UserOut.model_validate(user)})
