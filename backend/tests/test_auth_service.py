from datetime import datetime, timedelta, timezone

import jwt
import pytest

from scheduler.modules.auth.service import (
    CreateAccessToken,
    HashPassword,
    InvalidPasswordError,
    IsAccessTokenValid,
    SignIn,
)

NOW = datetime.now(tz=timezone.utc)


def test_token_round_trip():
    token = CreateAccessToken("secret", NOW, 8)
    assert IsAccessTokenValid(token, "secret")


def test_token_carries_password_hash():
    token = CreateAccessToken("secret", NOW, 8)
    payload = jwt.decode(token, options={"verify_signature": False})
    assert payload["pwd_hash"] == HashPassword("secret")


def test_token_invalid_after_password_change():
    token = CreateAccessToken("secret", NOW, 8)
    assert not IsAccessTokenValid(token, "another")


def test_expired_token_is_invalid():
    token = CreateAccessToken("secret", NOW - timedelta(hours=10), 8)
    assert not IsAccessTokenValid(token, "secret")


def test_garbage_token_is_invalid():
    assert not IsAccessTokenValid("not-a-token", "secret")


def test_sign_in():
    assert IsAccessTokenValid(SignIn("secret", "secret", NOW, 8), "secret")
    with pytest.raises(InvalidPasswordError):
        SignIn("guess", "secret", NOW, 8)


def test_sign_in_without_password_configured():
    assert SignIn("anything", None, NOW, 8) == ""
