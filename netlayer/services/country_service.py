from typing import List, Optional, Union

from netlayer.core.http.mapper import ResponseMapper
from netlayer.core.http.session import NetworkSession
from netlayer.core.logging import get_logger
from netlayer.pydantic_models.countries.country_list_model import CountryListEnvelope
from netlayer.pydantic_models.countries.country_model import CountryDTO
from netlayer.services.endpoints import Endpoint

logger = get_logger(__name__)

_CountryPayload = Union[List[CountryDTO], CountryListEnvelope]


class CountryListMapper(ResponseMapper[List[CountryDTO]]):
    """
    Mapper for the country list endpoint.

    The endpoint answers with either a bare JSON array or an envelope
    ``{"countries": [...]}``; both decode to a list of CountryDTO.
    """

    def decode(self, data: bytes) -> List[CountryDTO]:
        payload = self.decoder.decode(_CountryPayload, data)
        if isinstance(payload, list):
            return payload
        return payload.countries


class CountryService:
    """
    Service for loading the country list.

    Requests go through a NetworkSession, so every failure reaches the caller
    as a NetworkError. A session over an AuthenticatedHTTPTransport signs the
    calls without changing this class.

    Args:
        session: Typed session used for the request.
        base_url: Backend base URL (defaults to API_BASE_URL).
    """
    def __init__(self, session: NetworkSession, base_url: Optional[str] = None):
        self.session = session
        self.base_url = base_url
        self.mapper = CountryListMapper()

    async def load_countries(self) -> List[CountryDTO]:
        """
        Load all countries.

        Raises:
            NetworkError: If the request fails, including token provider failures
                wrapped in NormalError
        """
        request = Endpoint.GET_COUNTRIES.make_request(self.base_url)
        countries = await self.session.request(request, List[CountryDTO], mapper=self.mapper)
        logger.info(f"Loaded {len(countries)} countries")
        return countries
