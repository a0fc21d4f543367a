import asyncio
import sys
from typing import List, Optional

from netlayer.core import config
from netlayer.core.http.exceptions import ErrorKind, NetworkError, NormalError
from netlayer.core.http.factory import NetworkSessionFactory
from netlayer.core.logging import setup_logging
from netlayer.providers.token.base import TokenProviderError
from netlayer.providers.token.static_provider import StaticTokenProvider
from netlayer.services.country_service import CountryService


async def load_countries(base_url: Optional[str] = None) -> int:
    """Load and print the country list. Returns a process exit code."""
    logger = setup_logging(log_level=config.LOG_LEVEL, log_file=config.LOG_FILE)

    # Startup validation - fail fast with clear errors
    config.validate_config()

    token_provider = StaticTokenProvider(config.API_TOKEN) if config.API_TOKEN else None
    session = NetworkSessionFactory.create_session(
        token_provider=token_provider,
        needs_reauthentication=(
            (lambda: logger.warning("API_TOKEN was rejected by the server, please provide a new one"))
            if token_provider else None
        )
    )
    service = CountryService(session=session, base_url=base_url)

    try:
        countries = await service.load_countries()
    except NetworkError as e:
        logger.error(f"Loading countries failed ({e.kind.value}): {e}")
        return 2 if _is_auth_failure(e) else 1

    for country in countries:
        print(f"{country.code}\t{country.name}")
    return 0


def _is_auth_failure(error: NetworkError) -> bool:
    """Check whether the user has to provide a new token."""
    if error.kind is ErrorKind.TOKEN_EXPIRED:
        return True
    return isinstance(error, NormalError) and isinstance(error.original_error, TokenProviderError)


def run(argv: Optional[List[str]] = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    base_url = argv[0] if argv else None
    sys.exit(asyncio.run(load_countries(base_url)))


if __name__ == "__main__":
    run()
