"""Unit tests for token decoding and request payload validation."""

import pytest
from jose import JWTError, jwt
from pydantic import ValidationError

from papermark.config import settings
from papermark.schemas.folder import FolderCreate
from papermark.services.auth import create_access_token, decode_token


class TestTokens:
    def test_round_trip_subject(self):
        assert decode_token(create_access_token("user_123")).user_id == "user_123"

    def test_missing_subject(self):
        token = jwt.encode({"foo": "bar"}, settings.secret_key, algorithm=settings.access_token_algorithm)
        with pytest.raises(JWTError):
            decode_token(token)

    def test_wrong_secret(self):
        token = jwt.encode({"sub": "user_123"}, "other-secret", algorithm=settings.access_token_algorithm)
        with pytest.raises(JWTError):
            decode_token(token)


class TestFolderCreate:
    def test_trims_name(self):
        assert FolderCreate(name="  Reports ").name == "Reports"

    def test_blank_name(self):
        with pytest.raises(ValidationError):
            FolderCreate(name="   ")

    def test_path_slashes_stripped(self):
        assert FolderCreate(name="x", path="/finance/audit/").path == "finance/audit"
        assert FolderCreate(name="x", path="/").path is None
