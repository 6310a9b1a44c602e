import pytest
from jose import jwt

from app.config import settings
from app.errors import InvalidTokenError
from app.utils.security import (
    ACCESS, REFRESH, TokenClaims,
    create_access_token, create_refresh_token, hash_password, verify_password, verify_token,
)

CLAIMS = TokenClaims(user_id="u-1", email="a@example.com", role="admin")


def test_hash_and_verify():
    hashed = hash_password("correct horse")
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_hash_is_salted():
    assert hash_password("same") != hash_password("same")


def test_verify_with_malformed_hash_is_false():
    assert verify_password("anything", "not-a-hash") is False


def test_access_token_round_trip():
    token = create_access_token(CLAIMS)
    assert verify_token(token, ACCESS) == CLAIMS


def test_refresh_token_round_trip():
    token = create_refresh_token(CLAIMS)
    assert verify_token(token, REFRESH) == CLAIMS


def test_refresh_token_rejected_as_access():
    with pytest.raises(InvalidTokenError):
        verify_token(create_refresh_token(CLAIMS), ACCESS)


def test_access_token_rejected_as_refresh():
    with pytest.raises(InvalidTokenError):
        verify_token(create_access_token(CLAIMS), REFRESH)


def test_expired_access_token():
    with pytest.raises(InvalidTokenError):
        verify_token(create_access_token(CLAIMS, expires_minutes=-1), ACCESS)


def test_token_lifetimes():
    access = jwt.get_unverified_claims(create_access_token(CLAIMS))
    refresh = jwt.get_unverified_claims(create_refresh_token(CLAIMS))
    assert access["exp"] - access["iat"] == settings.access_token_expire_minutes * 60
    assert refresh["exp"] - refresh["iat"] == settings.refresh_token_expire_days * 86400


def test_token_signed_with_other_key_rejected():
    forged = jwt.encode(
        {"sub": "u-1", "email": "a@example.com", "role": "admin", "type": ACCESS},
        "not-the-secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError):
        verify_token(forged, ACCESS)


def test_token_missing_claims_rejected():
    token = jwt.encode({"sub": "u-1", "type": ACCESS}, settings.jwt_secret, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        verify_token(token, ACCESS)


def test_garbage_token_rejected():
    with pytest.raises(InvalidTokenError):
        verify_token("not.a.jwt", ACCESS)
