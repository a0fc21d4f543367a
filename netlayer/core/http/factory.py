from typing import Callable, Optional
import httpx

from netlayer.core import config
from netlayer.core.http.auth_transport import AuthenticatedHTTPTransport
from netlayer.core.http.session import HTTPNetworkSession
from netlayer.core.http.transport import HTTPTransport, HttpxTransport
from netlayer.core.logging import get_logger
from netlayer.providers.token.base import TokenProvider

logger = get_logger(__name__)


class NetworkSessionFactory:
    """
    Factory class for assembling the network layers.

    Builds the httpx transport, wraps it in the authenticating decorator when a
    token provider is given, and puts the typed session on top.
    """

    @staticmethod
    def create_transport(
        token_provider: Optional[TokenProvider] = None,
        needs_reauthentication: Optional[Callable[[], None]] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ) -> HTTPTransport:
        """
        Create a transport, authenticated if a token provider is supplied.

        Args:
            token_provider: Source of bearer tokens (optional)
            needs_reauthentication: Listener for expired tokens (requires token_provider)
            timeout: Exchange timeout in seconds (default: NETWORK_TIMEOUT)
            client: Shared httpx.AsyncClient (optional)

        Returns:
            Configured transport

        Raises:
            ValueError: If a reauthentication listener is given without a token provider
        """
        transport: HTTPTransport = HttpxTransport(
            default_timeout=timeout if timeout is not None else config.NETWORK_TIMEOUT,
            client=client
        )

        if token_provider is None:
            if needs_reauthentication is not None:
                raise ValueError(
                    "needs_reauthentication requires a token_provider. "
                    "Without a provider no token is attached and no expiry can be observed."
                )
            logger.info("Creating unauthenticated transport")
            return transport

        logger.info(f"Creating authenticated transport with {type(token_provider).__name__}")
        return AuthenticatedHTTPTransport(
            client=transport,
            token_provider=token_provider,
            needs_reauthentication=needs_reauthentication
        )

    @staticmethod
    def create_session(
        token_provider: Optional[TokenProvider] = None,
        needs_reauthentication: Optional[Callable[[], None]] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ) -> HTTPNetworkSession:
        """Create a typed session on top of ``create_transport``."""
        transport = NetworkSessionFactory.create_transport(
            token_provider=token_provider,
            needs_reauthentication=needs_reauthentication,
            timeout=timeout,
            client=client
        )
        return HTTPNetworkSession(transport)
