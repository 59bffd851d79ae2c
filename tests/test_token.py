"""Tests for bearer token decoding."""

import base64
import json
from datetime import UTC, datetime, timedelta

import jwt
import pytest

from thetvdb.client import BearerToken, TVDBAuthError, decode_token


def _b64(data: dict) -> str:
    return base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()


def make_jwt(claims: dict) -> str:
    """Sign with a key the client never sees."""
    return jwt.encode(claims, "server-side-secret-the-client-never-sees", algorithm="HS256")


class TestDecodeToken:
    """Tests for decode_token."""

    def test_decode(self):
        raw = make_jwt({"exp": 1577923200, "orig_iat": 1577836800, "id": "user"})
        token = decode_token(raw)

        assert token.value == raw
        assert token.expires_at == datetime(2020, 1, 2, tzinfo=UTC)
        assert token.issued_at == datetime(2020, 1, 1, tzinfo=UTC)

    def test_iat_fallback(self):
        token = decode_token(make_jwt({"exp": 1577923200, "iat": 1577836800}))
        assert token.issued_at == datetime(2020, 1, 1, tzinfo=UTC)

    def test_no_issued_at(self):
        token = decode_token(make_jwt({"exp": 1577923200}))
        assert token.issued_at is None

    def test_missing_exp(self):
        with pytest.raises(TVDBAuthError, match="Could not decode"):
            decode_token(make_jwt({"orig_iat": 1577836800}))

    def test_not_a_jwt(self):
        with pytest.raises(TVDBAuthError, match="Could not decode"):
            decode_token("not-a-token")

    def test_garbage_payload(self):
        with pytest.raises(TVDBAuthError):
            decode_token("aGVhZGVy.!!!.c2ln")

    def test_payload_not_object(self):
        header = _b64({"alg": "HS256", "typ": "JWT"})
        payload = base64.urlsafe_b64encode(b"[1, 2]").rstrip(b"=").decode()
        with pytest.raises(TVDBAuthError):
            decode_token(f"{header}.{payload}.c2ln")

    def test_expired_token_still_decodes(self):
        token = decode_token(make_jwt({"exp": 946684800, "orig_iat": 946598400}))
        assert token.expires_at == datetime(2000, 1, 1, tzinfo=UTC)
        assert token.is_expired()

    def test_unverified_signature(self):
        header = _b64({"alg": "RS256", "typ": "JWT"})
        raw = f"{header}.{_b64({'exp': 1577923200})}.c2lnbmF0dXJl"
        assert decode_token(raw).expires_at == datetime(2020, 1, 2, tzinfo=UTC)


class TestBearerToken:
    """Tests for token expiry checks."""

    def test_expiry(self):
        now = datetime(2020, 1, 1, tzinfo=UTC)
        token = BearerToken(value="t", expires_at=now + timedelta(minutes=5))

        assert not token.is_expired(now)
        assert not token.expires_within(60, now)
        assert token.expires_within(300, now)
        assert token.is_expired(now + timedelta(minutes=5))

    def test_value_hidden_from_repr(self):
        token = BearerToken(value="secret-jwt", expires_at=datetime(2020, 1, 1, tzinfo=UTC))
        assert "secret-jwt" not in repr(token)
