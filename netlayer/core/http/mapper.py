"""
Status-code driven response mapping.

Mapping logic may change depending on the status code, so it lives here and not
in the transport. The policy is always evaluated in the same order:

1. 2xx: decode the body into the requested type
2. 401: token expired, whatever the body says
3. anything else: structured API error if the body parses, otherwise an
   empty error carrying the status code

Endpoints that share the uniform wire contract use ``GenericAPIMapper``.
Endpoints with a divergent response shape subclass ``ResponseMapper`` and
override ``decode`` only; the status policy stays identical.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, Type, TypeVar
from pydantic import ValidationError

from netlayer.core.decoding import CustomDateJSONDecoder, custom_date_json_decoder
from netlayer.core.http.exceptions import (
    APIError,
    DecodeFailedError,
    EmptyErrorWithStatusCode,
    TokenExpiredError
)
from netlayer.core.http.models import RawResponse
from netlayer.core.logging import get_logger
from netlayer.pydantic_models.errors.api_error_model import ApiErrorDTO

T = TypeVar("T")

logger = get_logger(__name__)


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def parse_api_error(data: bytes) -> Optional[ApiErrorDTO]:
    """Parse an error payload, returning None when the body has another shape."""
    try:
        return ApiErrorDTO.model_validate_json(data)
    except ValidationError:
        return None


def raise_for_error_status(status_code: int, data: bytes, url: Optional[str] = None) -> None:
    """
    Raise the classified error for a non-2xx status code.

    Raises:
        TokenExpiredError: If status is 401
        APIError: If the body parses as ApiErrorDTO
        EmptyErrorWithStatusCode: Otherwise
    """
    if status_code == 401:
        raise TokenExpiredError(url=url)

    payload = parse_api_error(data)
    if payload is not None:
        raise APIError(payload, status_code=status_code, url=url)
    raise EmptyErrorWithStatusCode(status_code, url=url)


def classify(data: bytes, status_code: int, url: Optional[str] = None) -> bytes:
    """
    Generic classification without decoding.

    Returns:
        The body unchanged when the status is 2xx
    """
    if is_success(status_code):
        return data
    raise_for_error_status(status_code, data, url=url)


class ResponseMapper(ABC, Generic[T]):
    """
    Base class for status-code driven mappers.

    Subclasses decide what a successful body decodes into by implementing
    ``decode``. Decode failures are reported as DecodeFailedError.
    """

    def __init__(self, decoder: Optional[CustomDateJSONDecoder] = None):
        self.decoder = decoder or custom_date_json_decoder

    @abstractmethod
    def decode(self, data: bytes) -> T:
        """
        Decode a successful response body.

        Raises:
            Exception: Any decoding problem, wrapped by ``map`` into DecodeFailedError
        """
        pass

    def map(self, data: bytes, status_code: int, url: Optional[str] = None) -> T:
        """
        Classify the status code and decode the body in one step.

        Args:
            data: Raw response body
            status_code: HTTP status code of the response
            url: URL of the request, attached to raised errors

        Returns:
            The decoded value

        Raises:
            DecodeFailedError: If a 2xx body does not match the target type
            TokenExpiredError: If status is 401
            APIError: If a non-2xx body parses as ApiErrorDTO
            EmptyErrorWithStatusCode: If a non-2xx body is not a known payload
        """
        if is_success(status_code):
            try:
                return self.decode(data)
            except (ValidationError, ValueError, TypeError) as e:
                logger.warning(f"Failed to decode {status_code} response from {url}: {e}")
                raise DecodeFailedError(e, status_code=status_code, url=url)

        raise_for_error_status(status_code, data, url=url)

    def map_response(self, response: RawResponse) -> T:
        return self.map(response.body, response.status_code, url=response.url)


class GenericAPIMapper(ResponseMapper[T]):
    """Mapper for endpoints following the uniform wire contract."""

    def __init__(self, decoding_type: Type[T], decoder: Optional[CustomDateJSONDecoder] = None):
        super().__init__(decoder)
        self.decoding_type = decoding_type

    def decode(self, data: bytes) -> T:
        return self.decoder.decode(self.decoding_type, data)
