from abc import ABC, abstractmethod

from netlayer.pydantic_models.auth.authentication_jwt_model import AuthenticationJWTDTO


class TokenProvider(ABC):
    """
    Abstract base class for bearer token providers.

    The network layer only reads the current token. Storing, refreshing and
    coordinating concurrent refreshes is entirely the provider's business, and
    ``current_token`` may be awaited by many requests at the same time.
    """

    @abstractmethod
    async def current_token(self) -> AuthenticationJWTDTO:
        """
        Get the token to sign the next request with.

        Returns:
            The current bearer credential

        Raises:
            TokenProviderError: If no token can be produced
        """
        pass


class TokenProviderError(Exception):
    """Exception raised by token providers."""

    def __init__(self, message: str, provider: str = None, original_error: Exception = None):
        self.provider = provider
        self.original_error = original_error
        super().__init__(message)
