"""Password hashing and the session token issuer/verifier."""
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from powerfolio.core.config import Settings
from powerfolio.core.security import (
    InvalidTokenError,
    TokenConfig,
    TokenService,
    get_password_hash,
    verify_password,
)


@pytest.fixture
def tokens():
    return TokenService(TokenConfig(secret="unit-test-secret", lifetime=timedelta(days=30)))


def test_password_hash_is_salted_and_verifiable():
    first = get_password_hash("hunter2")
    second = get_password_hash("hunter2")
    assert first != second
    assert "hunter2" not in first
    assert verify_password("hunter2", first)
    assert not verify_password("hunter3", first)


def test_verify_password_rejects_blank_and_garbage_hashes():
    assert not verify_password("hunter2", None)
    assert not verify_password("", get_password_hash("x"))
    assert not verify_password("hunter2", "not-a-hash")


def test_token_round_trip_returns_user_id(tokens):
    user_id = uuid4()
    assert tokens.verify(tokens.issue(user_id)) == str(user_id)


def test_expired_token_is_invalid(tokens):
    issued = datetime.now(timezone.utc) - timedelta(days=31)
    token = tokens.issue(uuid4(), now=issued)
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_tampered_token_is_invalid(tokens):
    token = tokens.issue(uuid4())
    header, payload, signature = token.split(".")
    forged = ".".join([header, payload, signature[::-1]])
    with pytest.raises(InvalidTokenError):
        tokens.verify(forged)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_is_invalid(tokens, token):
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_rotating_secret_invalidates_outstanding_tokens(tokens):
    token = tokens.issue(uuid4())
    rotated = TokenService(TokenConfig(secret="another-secret"))
    with pytest.raises(InvalidTokenError):
        rotated.verify(token)


def test_token_config_is_immutable_and_built_from_settings():
    settings = Settings(JWT_SECRET_KEY="from-env", JWT_ACCESS_TOKEN_EXPIRE_MINUTES=60)
    config = TokenConfig.from_settings(settings)
    assert config.secret == "from-env"
    assert config.lifetime == timedelta(minutes=60)
    with pytest.raises(AttributeError):
        config.secret = "changed"


def test_blank_secret_is_refused():
    with pytest.raises(ValueError):
        TokenService(TokenConfig(secret=""))
