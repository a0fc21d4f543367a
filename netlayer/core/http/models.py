from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


AUTHORIZATION_HEADER = "Authorization"


'''Request / response value objects (Pydantic)'''


class HTTPRequest(BaseModel):
    """
    A prepared HTTP request.

    Instances are immutable. Every header helper returns a new request so that
    decorating layers never touch the caller's original.
    """

    model_config = ConfigDict(frozen=True)

    method: str = "GET"
    url: str
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[bytes] = None

    @field_validator('method')
    @classmethod
    def normalize_method(cls, v: str) -> str:
        return v.upper()

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return None

    def without_header(self, name: str) -> "HTTPRequest":
        """Return a copy with every header named ``name`` removed (any casing)."""
        headers = {k: v for k, v in self.headers.items() if k.lower() != name.lower()}
        return self.model_copy(update={"headers": headers})

    def with_header(self, name: str, value: str) -> "HTTPRequest":
        """Return a copy where ``name`` is set to exactly one ``value``."""
        headers = dict(self.without_header(name).headers)
        headers[name] = value
        return self.model_copy(update={"headers": headers})

    def with_bearer_token(self, token: str) -> "HTTPRequest":
        return self.with_header(AUTHORIZATION_HEADER, f"Bearer {token}")


class RawResponse(BaseModel):
    """Body, status code and headers of one completed exchange."""

    model_config = ConfigDict(frozen=True)

    body: bytes = b""
    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    url: Optional[str] = None
