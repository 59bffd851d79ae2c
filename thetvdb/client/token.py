"""Bearer token returned by TheTVDB login.

The token is a JWT. TheTVDB does not publish the key it is signed with, so
the payload is only decoded to learn when the token was issued and when it
expires; the signature is not verified.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import jwt

from thetvdb.client.errors import TVDBAuthError


@dataclass(frozen=True)
class BearerToken:
    """JWT with its issue and expiry times."""

    value: str = field(repr=False)
    expires_at: datetime
    issued_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at

    def expires_within(self, seconds: float, now: datetime | None = None) -> bool:
        """Check whether the token expires in less than ``seconds``."""
        return self.expires_at - timedelta(seconds=seconds) <= (now or datetime.now(UTC))


def decode_token(value: str) -> BearerToken:
    """Decode the claims of a JWT returned by ``/login`` or ``/refresh_token``.

    Args:
        value: Encoded JWT

    Returns:
        BearerToken with expiry from the ``exp`` claim and issue time from
        ``orig_iat`` (``iat`` when absent)

    Raises:
        TVDBAuthError: The token is not a decodable JWT or has no expiry
    """
    try:
        claims = jwt.decode(value, options={"verify_signature": False})
        expires_at = datetime.fromtimestamp(int(claims["exp"]), tz=UTC)
        issued = claims.get("orig_iat", claims.get("iat"))
        issued_at = datetime.fromtimestamp(int(issued), tz=UTC) if issued is not None else None
    except (jwt.PyJWTError, KeyError, TypeError, ValueError) as e:
        raise TVDBAuthError(f"Could not decode authentication token: {e}") from e

    return BearerToken(value=value, expires_at=expires_at, issued_at=issued_at)
