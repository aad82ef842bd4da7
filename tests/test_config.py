import pytest
from pydantic import ValidationError

from quizgraph.core.config import Settings


class TestJwtSecret:
    def test_required(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        monkeypatch.delenv("jwt_secret", raising=False)

        with pytest.raises(ValidationError, match="JWT_SECRET"):
            Settings(_env_file=None)

    def test_short_key_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, JWT_SECRET="change-me")

    def test_long_key_accepted(self):
        settings = Settings(_env_file=None, JWT_SECRET="x" * 32)

        assert settings.JWT_SECRET == "x" * 32


class TestStoreBackend:
    def test_supabase_needs_credentials(self):
        with pytest.raises(ValidationError, match="SUPABASE_URL"):
            Settings(_env_file=None, JWT_SECRET="x" * 32, STORE_BACKEND="supabase")

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, JWT_SECRET="x" * 32, STORE_BACKEND="mongo")
