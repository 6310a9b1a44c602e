
from datetime import datetime
from pydantic import EmailStr
from app.schemas.common import CamelModel

class RegisterIn(CamelModel):
    name: str | None = None
    email: EmailStr | None = None
    password: str | None = None

class LoginIn(CamelModel):
    email: str | None = None
    password: str | None = None

class RefreshIn(CamelModel):
    refresh_token: str | None = None

class UserOut(CamelModel):
    id: str
    name: str
    email: str
    role: str
    avatar_url: str | None = None
    email_verified: bool
    created_at: datetime
    updated_at: datetime

class AuthOut(CamelModel):
    user: UserOut
    access_token: str
    refresh_token: str

class AccessTokenOut(CamelModel):
    access_token: str
