from datetime import datetime, timezone
from typing import Optional
from jose import jwt, JWTError
from pydantic import BaseModel

from netlayer.core.decoding import CustomDate


'''Bearer credential model (Pydantic)'''


class AuthenticationJWTDTO(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[CustomDate] = None

    def expiry(self) -> Optional[datetime]:
        """
        Get the expiry of the access token.

        Uses ``expires_at`` when the server sent one, otherwise reads the
        ``exp`` claim of the access token without verifying its signature.

        Returns:
            Expiry as UTC datetime, or None if it cannot be determined
        """
        if self.expires_at is not None:
            return self.expires_at

        try:
            claims = jwt.get_unverified_claims(self.access_token)
        except JWTError:
            return None

        exp = claims.get("exp")
        if not isinstance(exp, (int, float)):
            return None
        return datetime.fromtimestamp(exp, tz=timezone.utc)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check whether the token is past its expiry. Unknown expiry counts as valid."""
        expiry = self.expiry()
        if expiry is None:
            return False
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        now = now or datetime.now(timezone.utc)
        return now >= expiry

    def __repr__(self) -> str:
        # Keep credentials out of logs and tracebacks
        return f"AuthenticationJWTDTO(expires_at={self.expires_at!r})"

    __str__ = __repr__
