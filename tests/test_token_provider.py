"""Test module for bearer tokens and the static token provider."""
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from netlayer.providers.token.base import TokenProviderError
from netlayer.providers.token.static_provider import StaticTokenProvider
from netlayer.pydantic_models.auth.authentication_jwt_model import AuthenticationJWTDTO


def make_jwt(expires_at: datetime) -> str:
    return jwt.encode({"sub": "user-1", "exp": int(expires_at.timestamp())}, "test-secret", algorithm="HS256")


def test_expiry_from_explicit_field():
    """Test that expires_at wins over the token claims"""
    token = AuthenticationJWTDTO.model_validate_json(
        b'{"access_token": "opaque", "expires_at": "2030-01-01T00:00:00Z"}'
    )
    assert token.expiry() == datetime(2030, 1, 1, tzinfo=timezone.utc)
    assert not token.is_expired(now=datetime(2029, 12, 31, tzinfo=timezone.utc))
    assert token.is_expired(now=datetime(2030, 1, 1, tzinfo=timezone.utc))


def test_expiry_from_jwt_claim():
    """Test that the exp claim is read when no explicit expiry is known"""
    expires_at = datetime(2031, 5, 4, 3, 2, 1, tzinfo=timezone.utc)
    token = AuthenticationJWTDTO(access_token=make_jwt(expires_at))
    assert token.expiry() == expires_at


def test_expired_jwt():
    """Test expiry detection on a JWT in the past"""
    token = AuthenticationJWTDTO(access_token=make_jwt(datetime.now(timezone.utc) - timedelta(minutes=5)))
    assert token.is_expired()


def test_opaque_token_has_unknown_expiry():
    """Test that non-JWT tokens count as valid"""
    token = AuthenticationJWTDTO(access_token="not-a-jwt")
    assert token.expiry() is None
    assert not token.is_expired()


def test_repr_hides_credentials():
    """Test that tokens do not leak into logs"""
    token = AuthenticationJWTDTO(access_token="super-secret", refresh_token="also-secret")
    assert "super-secret" not in repr(token)
    assert "also-secret" not in str(token)


@pytest.mark.asyncio
async def test_static_provider_returns_token():
    """Test the fixed token provider"""
    provider = StaticTokenProvider("abc")
    token = await provider.current_token()
    assert token.access_token == "abc"


@pytest.mark.asyncio
async def test_static_provider_update_and_clear():
    """Test rotating and clearing the stored token"""
    provider = StaticTokenProvider()

    with pytest.raises(TokenProviderError):
        await provider.current_token()

    provider.update(AuthenticationJWTDTO(access_token="rotated"))
    assert (await provider.current_token()).access_token == "rotated"

    provider.clear()
    with pytest.raises(TokenProviderError) as exc_info:
        await provider.current_token()
    assert exc_info.value.provider == "static"


@pytest.mark.asyncio
async def test_static_provider_rejects_expired_token():
    """Test that an expired stored token is not handed out"""
    provider = StaticTokenProvider(make_jwt(datetime.now(timezone.utc) - timedelta(hours=1)))

    with pytest.raises(TokenProviderError):
        await provider.current_token()
