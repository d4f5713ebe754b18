"""
Tests for session token issue/validate.
"""

import base64
import json
from datetime import timedelta

import jwt
import pytest

from taskmanager.auth.jwt import TokenIssuer
from taskmanager.core.errors import TokenExpiredError, TokenInvalidError
from taskmanager.core.models import Role
from taskmanager.core.utils import utc_now

from .conftest import TEST_SECRET


def _clock(offset: timedelta):
    return lambda: utc_now() + offset


def _b64(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


class TestRoundTrip:
    def test_user_token(self, issuer):
        token = issuer.issue("alice", Role.USER)
        payload = issuer.validate(token)
        
        assert (payload.identifier, payload.role) == ("alice", Role.USER)
        assert payload.type == "access"
        assert payload.jti.startswith("tok_")

    def test_admin_token(self, issuer):
        payload = issuer.validate(issuer.issue("root", Role.ADMIN))
        assert payload.role == Role.ADMIN

    def test_default_lifetime_is_24_hours(self, issuer):
        payload = issuer.validate(issuer.issue("alice", Role.USER))
        
        assert payload.exp - payload.iat == timedelta(hours=24)
        assert issuer.expires_in == 24 * 60 * 60


class TestExpiry:
    def test_valid_just_before_expiry(self):
        issuer = TokenIssuer(TEST_SECRET, clock=_clock(-timedelta(hours=23, minutes=59)))
        payload = issuer.validate(issuer.issue("alice", Role.USER))
        assert payload.identifier == "alice"

    def test_expired_after_expiry(self):
        issuer = TokenIssuer(TEST_SECRET, clock=_clock(-timedelta(hours=25)))
        token = issuer.issue("alice", Role.USER)
        
        with pytest.raises(TokenExpiredError):
            issuer.validate(token)


class TestInvalid:
    def test_wrong_signing_key(self, issuer):
        other = TokenIssuer("another-secret-that-is-also-long-enough!!")
        token = other.issue("alice", Role.USER)
        
        with pytest.raises(TokenInvalidError):
            issuer.validate(token)

    def test_tampered_role(self, issuer):
        header, payload, signature = issuer.issue("alice", Role.USER).split(".")
        claims = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
        claims["role"] = "ADMIN"
        forged = ".".join([header, _b64(claims), signature])
        
        with pytest.raises(TokenInvalidError):
            issuer.validate(forged)

    @pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
    def test_malformed(self, issuer, token):
        with pytest.raises(TokenInvalidError):
            issuer.validate(token)

    def test_missing_role_claim(self, issuer):
        now = utc_now()
        token = jwt.encode(
            {"sub": "alice", "exp": now + timedelta(hours=1), "iat": now, "type": "access"},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(TokenInvalidError):
            issuer.validate(token)

    def test_unknown_role(self, issuer):
        now = utc_now()
        token = jwt.encode(
            {"sub": "alice", "role": "ROOT", "exp": now + timedelta(hours=1),
             "iat": now, "type": "access"},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(TokenInvalidError):
            issuer.validate(token)

    def test_wrong_token_type(self, issuer):
        now = utc_now()
        token = jwt.encode(
            {"sub": "alice", "role": "USER", "exp": now + timedelta(hours=1),
             "iat": now, "type": "refresh"},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(TokenInvalidError):
            issuer.validate(token)

    def test_alg_none_rejected(self, issuer):
        header = _b64({"alg": "none", "typ": "JWT"})
        now = int(utc_now().timestamp())
        body = _b64({"sub": "alice", "role": "ADMIN", "exp": now + 3600,
                     "iat": now, "type": "access"})
        
        with pytest.raises(TokenInvalidError):
            issuer.validate(f"{header}.{body}.")
