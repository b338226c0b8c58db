# storage/base.py
from abc import ABC, abstractmethod
from typing import List
from .dto import ObjectDescriptor, ProviderKind


class StorageClient(ABC):
    """
    Abstract base class for a cloud storage client.
    Every adapter is tagged with its provider kind and can list its objects
    as standardized ObjectDescriptor DTOs.
    """

    provider_kind: ProviderKind
    provider_name: str

    @abstractmethod
    def list_objects(self) -> List[ObjectDescriptor]:
        """
        Lists the objects in the client's configured scope.

        :return: A fully materialized list of ObjectDescriptor DTOs.
        :raises ProviderUnavailable: On any network or authentication failure.
        """
        pass


class SourceStorageClient(StorageClient):
    """A storage client that objects can be migrated from."""

    @abstractmethod
    def fetch_content(self, object_id: str) -> bytes:
        """
        Downloads an object's whole content into memory.

        :param object_id: The provider-specific id of the object.
        :return: The object's bytes.
        :raises NotFoundError: If the id does not resolve to an object.
        :raises ProviderUnavailable: On any other provider failure.
        """
        pass


class DestinationStorageClient(StorageClient):
    """A storage client that objects can be migrated into."""

    @abstractmethod
    def ensure_container(self):
        """
        Creates the destination container unless it already exists.
        Must be idempotent: an existing container is a success.
        """
        pass

    @abstractmethod
    def upload_object(self, name: str, data: bytes):
        """
        Writes data under the given name, replacing any existing object.

        :param name: The object name inside the container.
        :param data: The full content to upload.
        """
        pass
