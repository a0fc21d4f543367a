from enum import Enum
from typing import Optional

from netlayer.core import config
from netlayer.core.http.models import HTTPRequest


class Endpoint(Enum):
    """Backend endpoints as (method, path) pairs."""

    GET_COUNTRIES = ("GET", "/countries")

    @property
    def method(self) -> str:
        return self.value[0]

    @property
    def path(self) -> str:
        return self.value[1]

    def make_request(self, base_url: Optional[str] = None) -> HTTPRequest:
        base_url = (base_url or config.API_BASE_URL).rstrip('/')
        return HTTPRequest(
            method=self.method,
            url=f"{base_url}{self.path}",
            headers={"Accept": "application/json"}
        )
