from datetime import timedelta

import pytest
from jose import jwt

from docblog.core.config import get_settings
from docblog.core.errors import ConfigurationError, InvalidTokenError
from docblog.core.security import create_access_token, decode_access_token, hash_password, verify_password


def test_password_hash_round_trip():
    hashed = hash_password("secret1")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


def test_token_carries_user_id():
    token = create_access_token("user-1")
    assert decode_access_token(token) == "user-1"


def test_expired_token_is_rejected():
    token = create_access_token("user-1", expires_delta=timedelta(seconds=-5))
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_token_signed_with_other_secret_is_rejected():
    forged = jwt.encode({"sub": "user-1"}, "another-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        decode_access_token(forged)


def test_token_without_subject_is_rejected():
    settings = get_settings()
    token = jwt.encode({"role": "admin"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_missing_secret(monkeypatch):
    token = create_access_token("user-1")
    unsigned = get_settings().model_copy(update={"jwt_secret": ""})
    monkeypatch.setattr("docblog.core.security.get_settings", lambda: unsigned)
    with pytest.raises(ConfigurationError):
        create_access_token("user-1")
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)
