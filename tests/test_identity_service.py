from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import jwt
import pytest

from quizgraph.core.errors import InvalidTokenError
from quizgraph.services.identity_service import IdentityService

SECRET = "unit-test-secret-key-of-32-bytes!"


@pytest.fixture
def identity():
    return IdentityService(secret_key=SECRET, token_ttl_minutes=5)


class TestPasswords:
    async def test_hash_is_not_plaintext_and_verifies(self, identity):
        hashed = await identity.hash("hunter2")

        assert hashed != "hunter2"
        assert await identity.verify("hunter2", hashed)
        assert not await identity.verify("hunter3", hashed)

    async def test_missing_hash_still_compares(self, identity):
        with patch.object(identity.pwd_context, "dummy_verify") as dummy:
            assert await identity.verify("anything", None) is False
            assert await identity.verify("anything", "") is False

        assert dummy.call_count == 2

    async def test_unrecognized_hash_is_a_mismatch(self, identity):
        assert await identity.verify("pw", "not-a-hash") is False


class TestTokens:
    def test_token_round_trip(self, identity):
        token = identity.issue_token({"id": "u1", "username": "ann", "email": "a@example.com"})

        assert token
        assert identity.read_token(token) == "u1"

    def test_token_claims(self, identity):
        token = identity.issue_token({"id": "u1", "username": "ann", "email": "a@example.com"})
        claims = jwt.decode(token, SECRET, algorithms=["HS256"], issuer="quizgraph")

        assert claims["sub"] == "u1"
        assert claims["username"] == "ann"
        assert claims["exp"] > claims["iat"]

    def test_wrong_secret_rejected(self, identity):
        other = IdentityService(secret_key="another-secret-that-is-32-bytes-long")
        token = other.issue_token({"id": "u1"})

        with pytest.raises(InvalidTokenError):
            identity.read_token(token)

    def test_expired_token_rejected(self, identity):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": "u1", "iss": "quizgraph", "iat": past, "exp": past + timedelta(minutes=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            identity.read_token(token)

    def test_garbage_rejected(self, identity):
        with pytest.raises(InvalidTokenError):
            identity.read_token("not.a.token")
