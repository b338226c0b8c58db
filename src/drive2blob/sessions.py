# sessions.py
import logging
from typing import Optional

from .azure_blob import AzureBlobClient
from .config import Settings
from .gdrive import GoogleDriveClient


def create_source_client(settings: Settings) -> GoogleDriveClient:
    """
    Builds the Google Drive client from the configured service account.
    Raises ConfigurationError before any network call if the credentials are unusable.
    """
    return GoogleDriveClient(
        credentials_json=settings.GOOGLE_SERVICE_ACCOUNT_CREDENTIALS,
        folder_id=settings.GOOGLE_FOLDER_ID,
        page_size=settings.DRIVE_PAGE_SIZE,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
    )


def create_destination_client(settings: Settings) -> AzureBlobClient:
    """Builds the Azure Blob client for the configured container."""
    return AzureBlobClient(
        connection_string=settings.AZURE_STORAGE_CONNECTION_STRING,
        container_name=settings.AZURE_CONTAINER_NAME,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
    )


class ProviderSessions:
    """
    Holds the authenticated provider clients for the lifetime of the process.

    Each client is built on first use and reused afterwards. A failed build is
    not remembered, so a missing setting keeps raising ConfigurationError on
    every call instead of crashing the process at startup.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._source: Optional[GoogleDriveClient] = None
        self._destination: Optional[AzureBlobClient] = None

    @property
    def source(self) -> GoogleDriveClient:
        if self._source is None:
            logging.info("Initializing Google Drive client...")
            self._source = create_source_client(self.settings)
        return self._source

    @property
    def destination(self) -> AzureBlobClient:
        if self._destination is None:
            logging.info("Initializing Azure Blob client...")
            self._destination = create_destination_client(self.settings)
        return self._destination
