from typing import Optional, Union

from netlayer.providers.token.base import TokenProvider, TokenProviderError
from netlayer.pydantic_models.auth.authentication_jwt_model import AuthenticationJWTDTO


class StaticTokenProvider(TokenProvider):
    """
    Token provider for a fixed credential (API keys, long-lived service tokens).

    ``update`` swaps the credential atomically, so a host application can push
    a refreshed token without coordinating with in-flight requests.
    """

    def __init__(self, token: Optional[Union[AuthenticationJWTDTO, str]] = None):
        self._token: Optional[AuthenticationJWTDTO] = None
        if token is not None:
            self.update(token)

    def update(self, token: Union[AuthenticationJWTDTO, str]) -> None:
        if isinstance(token, str):
            token = AuthenticationJWTDTO(access_token=token)
        self._token = token

    def clear(self) -> None:
        self._token = None

    async def current_token(self) -> AuthenticationJWTDTO:
        token = self._token
        if token is None:
            raise TokenProviderError("No token available", provider="static")
        if token.is_expired():
            raise TokenProviderError("Stored token has expired", provider="static")
        return token
