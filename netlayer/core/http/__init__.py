"""
HTTP client abstraction layer.

Layers, leaf first: a raw transport (httpx), an optional authenticating
decorator, and a typed session that maps status codes and decodes bodies into
models. All failures are reported with the exceptions in ``exceptions``.
"""

from netlayer.core.http.auth_transport import AuthenticatedHTTPTransport
from netlayer.core.decoding import CustomDate, CustomDateJSONDecoder, date_from_string
from netlayer.core.http.exceptions import (
    APIError,
    DecodeFailedError,
    EmptyErrorWithStatusCode,
    ErrorKind,
    HTTPConnectionError,
    HTTPTimeoutError,
    InvalidResponseError,
    NetworkError,
    NormalError,
    TokenExpiredError,
    TransportError
)
from netlayer.core.http.factory import NetworkSessionFactory
from netlayer.core.http.mapper import GenericAPIMapper, ResponseMapper, classify
from netlayer.core.http.models import HTTPRequest, RawResponse
from netlayer.core.http.session import HTTPNetworkSession, NetworkSession
from netlayer.core.http.transport import HTTPTransport, HttpxTransport

__all__ = [
    "AuthenticatedHTTPTransport",
    "CustomDate",
    "CustomDateJSONDecoder",
    "date_from_string",
    "APIError",
    "DecodeFailedError",
    "EmptyErrorWithStatusCode",
    "ErrorKind",
    "HTTPConnectionError",
    "HTTPTimeoutError",
    "InvalidResponseError",
    "NetworkError",
    "NormalError",
    "TokenExpiredError",
    "TransportError",
    "NetworkSessionFactory",
    "GenericAPIMapper",
    "ResponseMapper",
    "classify",
    "HTTPRequest",
    "RawResponse",
    "HTTPNetworkSession",
    "NetworkSession",
    "HTTPTransport",
    "HttpxTransport",
]
