from datetime import timedelta

import pytest

from laundry.core.exceptions import TokenError
from laundry.core.security import JWTManager, PasswordHasher


@pytest.fixture
def jwt_manager():
    return JWTManager("test-secret-key", access_token_expire_minutes=5)


class TestJWTManager:

    def test_roundtrip(self, jwt_manager):
        token = jwt_manager.create_access_token("alice")

        assert jwt_manager.get_username(token) == "alice"
        assert jwt_manager.verify_token(token)["token_type"] == "access"

    def test_expired_token(self, jwt_manager):
        token = jwt_manager.create_access_token("alice", expires_delta=timedelta(seconds=-1))

        with pytest.raises(TokenError) as exc_info:
            jwt_manager.verify_token(token)
        assert exc_info.value.error_code.value == "TOKEN_EXPIRED"

    def test_foreign_signature(self, jwt_manager):
        token = JWTManager("another-secret").create_access_token("alice")

        with pytest.raises(TokenError):
            jwt_manager.get_username(token)

    def test_wrong_token_type(self, jwt_manager):
        token = jwt_manager.create_access_token("alice", additional_claims={"token_type": "refresh"})

        with pytest.raises(TokenError):
            jwt_manager.verify_token(token)

    def test_empty_secret(self):
        with pytest.raises(ValueError):
            JWTManager("")


class TestPasswordHasher:

    def test_hash_and_verify(self):
        hasher = PasswordHasher(4)
        hashed = hasher.hash("password123")

        assert hashed != "password123"
        assert hasher.verify("password123", hashed)
        assert not hasher.verify("password124", hashed)

    def test_unusable_input(self):
        hasher = PasswordHasher(4)

        assert not hasher.verify("", "whatever")
        assert not hasher.verify("password123", "not-a-bcrypt-hash")
        with pytest.raises(ValueError):
            hasher.hash("")

    def test_rounds_bounds(self):
        with pytest.raises(ValueError):
            PasswordHasher(3)
