"""
Tests for admin access tokens.
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import jwt

from fieldfeed.config.settings import Settings
from fieldfeed.core.domain import AuthenticationException
from fieldfeed.services.token_service import TokenService


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(Settings(_env_file=None, JWT_SECRET_KEY="unit-secret"))


class TestTokenService:
    def test_round_trip_returns_admin_id(self, token_service):
        admin_id = uuid4()

        token = token_service.create_access_token(admin_id)

        assert token_service.admin_id_from_token(token) == admin_id

    def test_claims_include_id_and_expiry(self, token_service):
        admin_id = uuid4()

        payload = token_service.decode_token(token_service.create_access_token(admin_id, extra_claims={"role": "admin"}))

        assert payload["id"] == str(admin_id)
        assert payload["role"] == "admin"
        assert payload["exp"] > payload["iat"]

    def test_expired_token(self, token_service):
        token = token_service.create_access_token(uuid4(), expires_delta=timedelta(seconds=-5))

        with pytest.raises(AuthenticationException) as exc_info:
            token_service.decode_token(token)
        assert exc_info.value.message == "Token has expired."

    def test_token_signed_with_another_secret(self, token_service):
        forged = jwt.encode({"id": str(uuid4())}, "other-secret", algorithm="HS256")

        with pytest.raises(AuthenticationException) as exc_info:
            token_service.admin_id_from_token(forged)
        assert exc_info.value.message == "Invalid token."

    @pytest.mark.parametrize("claims", [{}, {"id": "not-a-uuid"}])
    def test_token_without_usable_id(self, token_service, claims):
        token = jwt.encode(claims, "unit-secret", algorithm="HS256")

        with pytest.raises(AuthenticationException):
            token_service.admin_id_from_token(token)

    def test_garbage_token(self, token_service):
        with pytest.raises(AuthenticationException):
            token_service.decode_token("not.a.jwt")
