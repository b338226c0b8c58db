# azure_blob.py
import logging
from typing import List, Optional

from azure.core.exceptions import AzureError, ResourceExistsError
from azure.storage.blob import BlobServiceClient

from .exceptions import ConfigurationError, ProviderUnavailable
from .storage.base import DestinationStorageClient
from .storage.dto import ObjectDescriptor, ProviderKind
from .utils import format_size, is_timeout

PROVIDER_NAME = "Azure Blob Storage"


def _provider_error(e: Exception, action: str) -> ProviderUnavailable:
    return ProviderUnavailable(PROVIDER_NAME, f"{action}: {e}", timeout=is_timeout(e))


class AzureBlobClient(DestinationStorageClient):
    """
    Client for one Azure Blob Storage container.
    Implements the destination side of a migration.
    """

    provider_kind = ProviderKind.FLAT
    provider_name = PROVIDER_NAME

    def __init__(
        self,
        connection_string: Optional[str],
        container_name: Optional[str],
        timeout: Optional[float] = None,
    ):
        if not connection_string:
            raise ConfigurationError(
                "Azure connection string is missing. Set AZURE_STORAGE_CONNECTION_STRING."
            )
        if not container_name:
            raise ConfigurationError(
                "Azure container is not configured. Set AZURE_CONTAINER_NAME."
            )
        transport_options = {}
        if timeout:
            transport_options = {"connection_timeout": timeout, "read_timeout": timeout}
        try:
            # Parsing the connection string is local; no request is sent here.
            self.service = BlobServiceClient.from_connection_string(
                connection_string, **transport_options
            )
        except ValueError as e:
            logging.error(f"Failed to parse Azure connection string: {e}")
            raise ConfigurationError(
                f"Azure connection string is malformed: {e}"
            ) from e
        self.container_name = container_name
        self.container = self.service.get_container_client(container_name)
        logging.info(
            f"Azure Blob client initialized for container '{container_name}'."
        )

    def ensure_container(self):
        """
        Creates the configured container if it does not exist yet.
        An already existing container is treated exactly like a created one.
        """
        try:
            self.container.create_container()
            logging.info(f"[Azure] Container '{self.container_name}' created.")
        except ResourceExistsError:
            logging.info(f"[Azure] Container '{self.container_name}' already exists.")
        except AzureError as e:
            logging.error(
                f"[Azure] Failed to create/verify container '{self.container_name}': {e}"
            )
            raise _provider_error(
                e, f"ensuring container '{self.container_name}'"
            ) from e

    def list_objects(self) -> List[ObjectDescriptor]:
        """Lists every blob of the container in the order the service returns them."""
        try:
            logging.info(f"Listing blobs in Azure container '{self.container_name}'")
            return [
                ObjectDescriptor(
                    name=blob.name,
                    size_bytes=blob.size or 0,
                    created_at=blob.creation_time.date() if blob.creation_time else None,
                )
                for blob in self.container.list_blobs()
            ]
        except AzureError as e:
            logging.error(
                f"Failed to list blobs in Azure container '{self.container_name}': {e}"
            )
            raise _provider_error(
                e, f"listing container '{self.container_name}'"
            ) from e

    def upload_object(self, name: str, data: bytes):
        """Uploads data as a single block blob, overwriting any blob with that name."""
        try:
            logging.info(
                f"Uploading {format_size(len(data))} to blob '{name}' in container '{self.container_name}'..."
            )
            self.container.get_blob_client(name).upload_blob(
                data, length=len(data), overwrite=True
            )
            logging.info(f"Successfully uploaded blob '{name}'.")
        except AzureError as e:
            logging.error(f"Failed to upload blob '{name}': {e}")
            raise _provider_error(e, f"uploading blob '{name}'") from e
