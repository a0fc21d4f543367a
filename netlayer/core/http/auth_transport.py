from typing import Callable, Optional

from netlayer.core.http.exceptions import TokenExpiredError
from netlayer.core.http.models import HTTPRequest, RawResponse
from netlayer.core.http.transport import HTTPTransport
from netlayer.core.logging import get_logger
from netlayer.providers.token.base import TokenProvider

logger = get_logger(__name__)


class AuthenticatedHTTPTransport(HTTPTransport):
    """
    Transport decorator that signs requests with the current bearer token.

    The wrapped transport does the actual exchange. This layer fetches a token,
    replaces any Authorization header with ``Bearer <token>``, and watches the
    outcome for an expired token. When it sees one (a 401 answer, or a
    TokenExpiredError raised by the wrapped transport) it calls
    ``needs_reauthentication`` so the host application can refresh the token
    or log the user out. The outcome itself is passed up unchanged.

    Args:
        client: The transport to wrap
        token_provider: Source of the current token
        needs_reauthentication: Listener called once per expired-token outcome
    """

    def __init__(
        self,
        client: HTTPTransport,
        token_provider: TokenProvider,
        needs_reauthentication: Optional[Callable[[], None]] = None
    ):
        self.client = client
        self.token_provider = token_provider
        self.needs_reauthentication = needs_reauthentication

    async def exchange(self, request: HTTPRequest) -> RawResponse:
        # Provider failures propagate as-is; nothing is sent without a token
        token = await self.token_provider.current_token()
        signed_request = request.with_bearer_token(token.access_token)

        try:
            response = await self.client.exchange(signed_request)
        except TokenExpiredError:
            self._notify_needs_reauthentication(request)
            raise

        if response.status_code == 401:
            self._notify_needs_reauthentication(request)

        return response

    def _notify_needs_reauthentication(self, request: HTTPRequest) -> None:
        logger.warning(f"Token expired for {request.method} {request.url}, reauthentication required")
        if self.needs_reauthentication is not None:
            self.needs_reauthentication()
