"""JWT access token issuance and verification (stateless bearer auth)."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from functools import lru_cache
from typing import Any

import jwt

from taskmanager.core.config import get_settings
from taskmanager.models.enums import Role

# Claims every token must carry; anything missing is a malformed token.
REQUIRED_CLAIMS = ["sub", "uid", "role", "iat", "exp"]


def utc_now() -> datetime:
    return datetime.now(UTC)


class TokenErrorKind(str, Enum):
    EXPIRED = "expired"
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"


class TokenError(Exception):
    """Raised when a token cannot be trusted. The kind is for logs; callers see 401."""

    def __init__(self, kind: TokenErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class TokenClaims:
    """Verified identity carried by a token."""

    principal_id: int
    identifier: str
    role: Role
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """
    Signs and verifies access tokens with one process-wide secret.

    The same clock is used for iat/exp on issue and for the expiry check on
    verify, so tests can move time by passing a different clock.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if not secret or not secret.strip():
            raise ValueError("Token signing secret must be set and non-empty")
        if ttl <= timedelta(0):
            raise ValueError("Token TTL must be positive")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, identifier: str, role: Role, *, principal_id: int) -> str:
        """Create a signed token for the principal with its current role."""
        now = self._clock()
        payload: dict[str, Any] = {
            "sub": identifier,
            "uid": principal_id,
            "role": role.value,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Check the signature, then the claims, then expiry.

        Raises TokenError (EXPIRED, MALFORMED or BAD_SIGNATURE).
        """
        try:
            # PyJWT's own time checks use the wall clock; expiry is checked below instead.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except jwt.InvalidSignatureError as e:
            raise TokenError(TokenErrorKind.BAD_SIGNATURE, "Token signature is invalid") from e
        except jwt.InvalidTokenError as e:
            raise TokenError(TokenErrorKind.MALFORMED, f"Token is malformed: {e}") from e

        claims = _parse_claims(payload)
        if self._clock() >= claims.expires_at:
            raise TokenError(TokenErrorKind.EXPIRED, "Token has expired")
        return claims


def _parse_claims(payload: dict[str, Any]) -> TokenClaims:
    sub = payload.get("sub")
    uid = payload.get("uid")
    if not isinstance(sub, str) or not sub:
        raise TokenError(TokenErrorKind.MALFORMED, "Token subject is missing")
    if not isinstance(uid, int) or isinstance(uid, bool):
        raise TokenError(TokenErrorKind.MALFORMED, "Token principal id is invalid")
    try:
        role = Role(payload.get("role"))
        issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
        expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
    except (TypeError, ValueError, OverflowError) as e:
        raise TokenError(TokenErrorKind.MALFORMED, "Token claims are invalid") from e
    return TokenClaims(
        principal_id=uid,
        identifier=sub,
        role=role,
        issued_at=issued_at,
        expires_at=expires_at,
    )


@lru_cache
def get_token_service() -> TokenService:
    """Build the token service once from settings; the key is immutable afterwards."""
    settings = get_settings()
    return TokenService(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )
