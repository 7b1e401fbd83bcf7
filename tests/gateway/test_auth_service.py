"""密码摘要与访问令牌测试"""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from taskcoin.core.exceptions import AuthenticationError, UsernameExistsError
from taskcoin.gateway.services.auth_service import (
    AuthService,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHash:
    def test_hash_format(self):
        stored = hash_password("secret123")
        digest, _, salt = stored.partition(":")
        assert len(digest) == 64
        assert salt

    def test_salted(self):
        assert hash_password("secret123") != hash_password("secret123")

    def test_verify(self):
        stored = hash_password("secret123")
        assert verify_password("secret123", stored)
        assert not verify_password("secret124", stored)

    def test_malformed_hash(self):
        assert not verify_password("secret123", "no-salt-here")


class TestAccessToken:
    def test_round_trip(self, monkeypatch):
        monkeypatch.setenv("TASKCOIN_JWT_SECRET", "unit-secret")
        token = create_access_token(7, "alice")
        assert decode_access_token(token) == 7

    def test_wrong_secret(self, monkeypatch):
        monkeypatch.setenv("TASKCOIN_JWT_SECRET", "unit-secret")
        token = create_access_token(7, "alice")
        monkeypatch.setenv("TASKCOIN_JWT_SECRET", "other-secret")
        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_expired(self, monkeypatch):
        monkeypatch.setenv("TASKCOIN_JWT_SECRET", "unit-secret")
        past = datetime.now(UTC) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": "7", "iat": past, "exp": past + timedelta(hours=1)},
            "unit-secret",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError, match="expired"):
            decode_access_token(token)

    def test_missing_subject(self, monkeypatch):
        monkeypatch.setenv("TASKCOIN_JWT_SECRET", "unit-secret")
        token = jwt.encode({"username": "alice"}, "unit-secret", algorithm="HS256")
        with pytest.raises(AuthenticationError):
            decode_access_token(token)


class TestAuthService:
    async def test_register_and_login(self, store_group):
        service = AuthService(store_group)
        user = await service.register("alice", "secret123")

        result = await service.login("alice", "secret123")

        assert result.user.user_id == user.user_id
        assert decode_access_token(result.token) == user.user_id

    async def test_duplicate_register(self, store_group):
        service = AuthService(store_group)
        await service.register("alice", "secret123")
        with pytest.raises(UsernameExistsError):
            await service.register("alice", "another1")

    async def test_login_failures(self, store_group):
        service = AuthService(store_group)
        await service.register("alice", "secret123")
        with pytest.raises(AuthenticationError):
            await service.login("alice", "wrong-pass")
        with pytest.raises(AuthenticationError):
            await service.login("ghost", "secret123")
