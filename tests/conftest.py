# tests/conftest.py
import pytest
from typing import Dict, List, Tuple

from drive2blob.config import Settings, get_settings
from drive2blob.exceptions import NotFoundError
from drive2blob.storage.base import DestinationStorageClient, SourceStorageClient
from drive2blob.storage.dto import ObjectDescriptor, ProviderKind


@pytest.fixture
def mock_settings():
    """
    Provides application settings for testing without reading the environment
    or a .env file.
    """
    return Settings(
        _env_file=None,
        AZURE_STORAGE_CONNECTION_STRING="DefaultEndpointsProtocol=https;AccountName=test;AccountKey=dGVzdA==;EndpointSuffix=core.windows.net",
        AZURE_CONTAINER_NAME="migrated",
        GOOGLE_SERVICE_ACCOUNT_CREDENTIALS='{"client_email": "svc@test.iam.gserviceaccount.com", "private_key": "key"}',
        GOOGLE_FOLDER_ID="folder123",
        REQUEST_TIMEOUT_SECONDS=5,
    )


@pytest.fixture(autouse=True)
def patch_settings_class(monkeypatch, mock_settings):
    """
    Replaces the `Settings` constructor so that any code calling `get_settings()`
    during a test receives `mock_settings` instead of loading a real configuration.
    """
    get_settings.cache_clear()
    monkeypatch.setattr("drive2blob.config.Settings", lambda *args, **kwargs: mock_settings)
    yield
    get_settings.cache_clear()


class FakeDrive(SourceStorageClient):
    """In-memory stand-in for the Google Drive folder."""

    provider_kind = ProviderKind.HIERARCHICAL
    provider_name = "Google Drive"

    def __init__(self, files: Dict[str, Tuple[str, bytes]] = None):
        self.files = files or {}
        self.fetched: List[str] = []

    def list_objects(self):
        return [
            ObjectDescriptor(name=name, size_bytes=len(data), provider_object_id=file_id)
            for file_id, (name, data) in self.files.items()
        ]

    def fetch_content(self, object_id):
        self.fetched.append(object_id)
        if object_id not in self.files:
            raise NotFoundError(self.provider_name, f"file '{object_id}' not found")
        return self.files[object_id][1]


class FakeContainer(DestinationStorageClient):
    """In-memory stand-in for the Azure Blob container."""

    provider_kind = ProviderKind.FLAT
    provider_name = "Azure Blob Storage"
    container_name = "migrated"

    def __init__(self):
        self.blobs: Dict[str, bytes] = {}
        self.exists = False
        self.ensure_calls = 0
        self.uploads: List[str] = []

    def ensure_container(self):
        self.ensure_calls += 1
        self.exists = True

    def list_objects(self):
        return [ObjectDescriptor(name=name, size_bytes=len(data)) for name, data in self.blobs.items()]

    def upload_object(self, name, data):
        self.uploads.append(name)
        self.blobs[name] = data


class FakeSessions:
    def __init__(self, source, destination):
        self.source = source
        self.destination = destination


@pytest.fixture
def fake_drive():
    return FakeDrive({"abc": ("report.pdf", b"x" * 1536)})


@pytest.fixture
def fake_container():
    return FakeContainer()


@pytest.fixture
def fake_sessions(fake_drive, fake_container):
    return FakeSessions(fake_drive, fake_container)
