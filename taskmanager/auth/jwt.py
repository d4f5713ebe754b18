# =============================================================================
# JWT Session Tokens
# =============================================================================
#
# Stateless bearer tokens:
#   - issue(identifier, role) signs a token with a fixed lifetime
#   - validate(token) checks signature + expiry and returns the claims
#
# Validation never touches the credential store, so a user whose role
# changes keeps the old role until the token expires.
#
# =============================================================================

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable
import logging

from pydantic import BaseModel
import jwt

from taskmanager.core.errors import TokenExpiredError, TokenInvalidError
from taskmanager.core.models import Role
from taskmanager.core.utils import generate_id, utc_now

logger = logging.getLogger(__name__)

TOKEN_TYPE = "access"
REQUIRED_CLAIMS = ["sub", "role", "exp", "iat", "type"]


# =============================================================================
# Models
# =============================================================================

class TokenPayload(BaseModel):
    """Validated JWT claims."""
    sub: str  # user identifier
    role: Role
    exp: datetime
    iat: datetime
    type: str
    jti: str = ""

    @property
    def identifier(self) -> str:
        return self.sub


# =============================================================================
# Issuer / Validator
# =============================================================================

class TokenIssuer:
    """
    Mints and validates signed, time-bound session tokens.

    `clock` only affects issuance; expiry is checked against wall time.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 24 * 60,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self._clock = clock

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return self.expire_minutes * 60

    def issue(self, identifier: str, role: Role) -> str:
        """Create a signed access token for this identity."""
        now = self._clock()
        expire = now + timedelta(minutes=self.expire_minutes)

        payload = {
            "sub": identifier,
            "role": Role(role).value,
            "exp": expire,
            "iat": now,
            "type": TOKEN_TYPE,
            "jti": generate_id("tok"),
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def validate(self, token: str) -> TokenPayload:
        """
        Decode and validate a token.

        Raises:
            TokenExpiredError: Token has expired
            TokenInvalidError: Bad signature, malformed, or wrong claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected token: %s", e)
            raise TokenInvalidError(f"Invalid token: {e}")

        if payload.get("type") != TOKEN_TYPE:
            raise TokenInvalidError(f"Expected {TOKEN_TYPE} token, got {payload.get('type')}")

        try:
            role = Role(payload["role"])
        except ValueError:
            raise TokenInvalidError("Invalid token: unknown role")

        return TokenPayload(
            sub=payload["sub"],
            role=role,
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            type=payload["type"],
            jti=payload.get("jti", ""),
        )
