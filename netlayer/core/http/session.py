"""
Typed session facade.

The session is the entry point per-domain services use: it signs the request
with an optional token, runs the exchange through a transport, maps the status
code, decodes the body and guarantees that only NetworkError subclasses reach
the caller.
"""

from abc import ABC, abstractmethod
from typing import Optional, Type, TypeVar

from netlayer.core.http.exceptions import NetworkError, NormalError
from netlayer.core.http.mapper import GenericAPIMapper, ResponseMapper
from netlayer.core.http.models import AUTHORIZATION_HEADER, HTTPRequest
from netlayer.core.http.transport import HTTPTransport
from netlayer.core.logging import get_logger
from netlayer.pydantic_models.auth.authentication_jwt_model import AuthenticationJWTDTO

T = TypeVar("T")

logger = get_logger(__name__)


class NetworkSession(ABC):
    """Abstract base class for typed request sessions."""

    @abstractmethod
    async def request(
        self,
        request: HTTPRequest,
        decoding_type: Type[T],
        token: Optional[AuthenticationJWTDTO] = None,
        mapper: Optional[ResponseMapper[T]] = None
    ) -> T:
        """
        Perform a request and decode the answer.

        Args:
            request: The prepared request
            decoding_type: Type the successful body is decoded into
            token: Bearer token to sign the request with (optional)
            mapper: Endpoint-specific mapper replacing the generic one (optional)

        Returns:
            Instance of decoding_type

        Raises:
            NetworkError: Any failure, classified by ErrorKind
        """
        pass


class HTTPNetworkSession(NetworkSession):
    """
    Session running requests through an HTTPTransport.

    The transport may be a plain HttpxTransport or a decorated one such as
    AuthenticatedHTTPTransport.

    Example:
        ```python
        session = HTTPNetworkSession(HttpxTransport())
        countries = await session.request(request, list[CountryDTO], token=token)
        ```
    """

    def __init__(self, transport: HTTPTransport):
        self.transport = transport

    async def request(
        self,
        request: HTTPRequest,
        decoding_type: Type[T],
        token: Optional[AuthenticationJWTDTO] = None,
        mapper: Optional[ResponseMapper[T]] = None
    ) -> T:
        signed_request = request.without_header(AUTHORIZATION_HEADER)
        if token is not None:
            signed_request = signed_request.with_bearer_token(token.access_token)

        mapper = mapper or GenericAPIMapper(decoding_type)

        try:
            response = await self.transport.exchange(signed_request)
            return mapper.map_response(response)

        except NetworkError as e:
            logger.info(f"{request.method} {request.url} failed ({e.kind.value}): {e}")
            raise

        except Exception as e:
            logger.error(f"Unexpected error during {request.method} {request.url}: {e}")
            raise NormalError(e, url=request.url)
