"""Tests for Supabase client initialization."""

from unittest.mock import patch, MagicMock

import pytest

from unimaz.config import Settings, get_settings
from unimaz.db.storage import create_storage
from unimaz.db.supabase_client import get_supabase_client, reset_supabase_client
from unimaz.db.supabase_storage import SupabaseStorage


@pytest.fixture(autouse=True)
def setup_env(monkeypatch):
    """Set up test environment variables."""
    # Clear settings cache and client singleton before each test
    get_settings.cache_clear()
    reset_supabase_client()

    monkeypatch.setenv("UNIMAZ_SUPABASE_URL", "https://test-project.supabase.co")
    monkeypatch.setenv("UNIMAZ_SUPABASE_KEY", "test-supabase-key")

    yield

    get_settings.cache_clear()
    reset_supabase_client()


class TestGetSupabaseClient:
    """Tests for get_supabase_client function."""

    @patch("unimaz.db.supabase_client.create_client")
    def test_successful_client_creation(self, mock_create_client):
        """Test successful Supabase client creation with valid credentials."""
        # Arrange
        mock_client = MagicMock()
        mock_create_client.return_value = mock_client

        # Act
        client = get_supabase_client()

        # Assert
        assert client is mock_client
        mock_create_client.assert_called_once_with(
            "https://test-project.supabase.co",
            "test-supabase-key"
        )

    @patch("unimaz.db.supabase_client.create_client")
    def test_client_is_singleton(self, mock_create_client):
        """Test that the client is created only once."""
        mock_create_client.return_value = MagicMock()

        first = get_supabase_client()
        second = get_supabase_client()

        assert first is second
        mock_create_client.assert_called_once()

    @patch("unimaz.db.supabase_client.create_client")
    def test_reset_creates_new_client(self, mock_create_client):
        mock_create_client.side_effect = [MagicMock(), MagicMock()]

        first = get_supabase_client()
        reset_supabase_client()
        second = get_supabase_client()

        assert first is not second

    def test_missing_supabase_key(self, monkeypatch):
        """Test that missing credentials raise ValueError."""
        monkeypatch.delenv("UNIMAZ_SUPABASE_KEY")
        get_settings.cache_clear()

        with pytest.raises(ValueError) as exc_info:
            get_supabase_client()

        assert "UNIMAZ_SUPABASE_KEY" in str(exc_info.value)

    @patch("unimaz.db.supabase_client.create_client")
    def test_client_creation_failure(self, mock_create_client):
        """Test that client creation errors are wrapped."""
        mock_create_client.side_effect = Exception("Invalid API key")

        with pytest.raises(ValueError) as exc_info:
            get_supabase_client()

        assert "Failed to create Supabase client" in str(exc_info.value)
        assert "Invalid API key" in str(exc_info.value)


class TestSupabaseBackendSelection:
    """Tests for building the supabase backend from settings."""

    @patch("unimaz.db.supabase_client.create_client")
    def test_create_storage_supabase(self, mock_create_client):
        mock_client = MagicMock()
        mock_create_client.return_value = mock_client
        settings = Settings(
            storage_backend="supabase",
            supabase_table="attendance_blobs",
            supabase_user_id="student-1",
        )

        storage = create_storage(settings)

        assert isinstance(storage, SupabaseStorage)
        assert storage.client is mock_client
        assert storage.table == "attendance_blobs"
        assert storage.user_id == "student-1"
