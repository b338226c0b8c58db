# listing.py
import logging
from typing import List

from .sessions import ProviderSessions
from .storage.dto import ObjectDescriptor


def list_source(sessions: ProviderSessions) -> List[ObjectDescriptor]:
    """Returns the first page of the source folder, in the order Drive returns it."""
    objects = sessions.source.list_objects()
    logging.info(
        f"Found {len(objects)} entries in Google Drive, "
        f"{sum(1 for o in objects if o.is_transferable)} transferable."
    )
    return objects


def list_destination(sessions: ProviderSessions) -> List[ObjectDescriptor]:
    """
    Returns every blob of the destination container.
    The container is created first so an empty setup lists as empty instead of failing.
    """
    destination = sessions.destination
    destination.ensure_container()
    objects = destination.list_objects()
    logging.info(f"Found {len(objects)} blobs in container '{destination.container_name}'.")
    return objects
