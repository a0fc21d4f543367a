"""
Raw HTTP transport.

A transport performs exactly one HTTP exchange and hands back the body, the
status code and the headers. It never retries and never looks at the status
code; classifying the answer is the mapper's job.
"""

from abc import ABC, abstractmethod
from typing import Optional
import httpx

from netlayer.core import config
from netlayer.core.http.exceptions import (
    HTTPConnectionError,
    HTTPTimeoutError,
    InvalidResponseError
)
from netlayer.core.http.models import HTTPRequest, RawResponse
from netlayer.core.logging import get_logger

logger = get_logger(__name__)


class HTTPTransport(ABC):
    """
    Abstract base class for anything able to perform a raw HTTP exchange.

    Concrete transports (httpx, test fakes) and decorators wrapping another
    transport all implement this single method, so they can be stacked and
    swapped freely.
    """

    @abstractmethod
    async def exchange(self, request: HTTPRequest) -> RawResponse:
        """
        Perform one HTTP exchange.

        Args:
            request: The prepared request to send

        Returns:
            RawResponse with body bytes, status code and headers

        Raises:
            TransportError: If no HTTP answer could be obtained
        """
        pass


class HttpxTransport(HTTPTransport):
    """
    Transport built on top of httpx.

    By default a fresh ``httpx.AsyncClient`` is opened for every exchange, which
    keeps concurrent exchanges fully independent. A shared client can be passed
    in to reuse connections; the transport never closes a client it was given.

    Example:
        ```python
        transport = HttpxTransport(default_timeout=10.0)
        raw = await transport.exchange(HTTPRequest(url="https://api.example.com/countries"))
        ```
    """

    def __init__(
        self,
        default_timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize httpx transport.

        Args:
            default_timeout: Timeout in seconds for each exchange (default: NETWORK_TIMEOUT)
            client: Shared httpx.AsyncClient to use instead of one client per exchange
        """
        self.default_timeout = default_timeout if default_timeout is not None else config.NETWORK_TIMEOUT
        self._client = client

    async def exchange(self, request: HTTPRequest) -> RawResponse:
        logger.debug(f"{request.method} {request.url}")

        try:
            if self._client is not None:
                response = await self._send(self._client, request)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._send(client, request)

        except httpx.TimeoutException as e:
            logger.warning(f"{request.method} {request.url} timed out after {self.default_timeout}s")
            raise HTTPTimeoutError(
                message=f"Request to {request.url} timed out after {self.default_timeout}s",
                url=request.url,
                original_error=e
            )

        # httpx raises RemoteProtocolError for a missing or malformed status line
        except (httpx.RemoteProtocolError, httpx.DecodingError) as e:
            logger.warning(f"Invalid response for {request.method} {request.url}: {e}")
            raise InvalidResponseError(
                message=f"Invalid HTTP response for {request.method} {request.url}: {str(e)}",
                url=request.url,
                original_error=e
            )

        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.warning(f"Connection failed for {request.method} {request.url}: {e}")
            raise HTTPConnectionError(
                message=f"Connection failed for {request.method} {request.url}: {str(e)}",
                url=request.url,
                original_error=e
            )

        logger.debug(f"{request.method} {request.url} -> {response.status_code}")

        return RawResponse(
            body=response.content,
            status_code=response.status_code,
            headers=dict(response.headers),
            url=request.url
        )

    async def _send(self, client: httpx.AsyncClient, request: HTTPRequest) -> httpx.Response:
        return await client.request(
            request.method,
            request.url,
            headers=request.headers,
            content=request.body,
            timeout=self.default_timeout
        )
