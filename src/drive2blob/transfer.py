# transfer.py
import logging
import time

from .exceptions import MigrationError, ValidationError
from .sessions import ProviderSessions
from .storage.base import DestinationStorageClient, SourceStorageClient
from .storage.dto import TransferOutcome, TransferRequest
from .utils import format_size

REQUIRED_FIELDS_MESSAGE = "File ID and file name are required."


def _validate(request: TransferRequest) -> TransferRequest:
    """Rejects requests without a source id or target name."""
    source_object_id = (request.source_object_id or "").strip()
    target_name = (request.target_name or "").strip()
    if not source_object_id or not target_name:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)
    return TransferRequest(source_object_id=source_object_id, target_name=target_name)


def _download(source: SourceStorageClient, object_id: str) -> bytes:
    logging.info(f"[TRANSFER] Downloading '{object_id}' from {source.provider_name}...")
    data = source.fetch_content(object_id)
    logging.info(f"[TRANSFER] Downloaded {format_size(len(data))} from '{object_id}'.")
    return data


def _upload(destination: DestinationStorageClient, target_name: str, data: bytes):
    logging.info(
        f"[TRANSFER] Uploading {format_size(len(data))} to {destination.provider_name} as '{target_name}'..."
    )
    destination.upload_object(target_name, data)


def transfer_file(sessions: ProviderSessions, request: TransferRequest) -> TransferOutcome:
    """
    Migrates one file from the source folder to the destination container.

    Runs bootstrap, download and upload strictly in that order. The whole file
    is held in memory between download and upload. Nothing is retried: any
    failure ends the transfer and is returned as an error outcome naming the
    stage that failed. Concurrent transfers to the same target name are not
    serialized; the last upload to finish wins.
    """
    stage = "validation"
    target_name = request.target_name
    start_time = time.monotonic()
    try:
        request = _validate(request)
        target_name = request.target_name

        stage = "bootstrap"
        destination = sessions.destination
        destination.ensure_container()

        stage = "download"
        data = _download(sessions.source, request.source_object_id)

        stage = "upload"
        _upload(destination, target_name, data)
    except MigrationError as e:
        duration = time.monotonic() - start_time
        log = logging.warning if stage == "validation" else logging.error
        log(
            f"[TRANSFER] Transfer of '{request.source_object_id}' -> '{target_name}' "
            f"failed during {stage} after {duration:.2f} seconds. Error: {e}"
        )
        return TransferOutcome.failure(target_name, e, stage)

    duration = time.monotonic() - start_time
    logging.info(
        f"[TRANSFER] Completed '{request.source_object_id}' -> '{target_name}' "
        f"({format_size(len(data))}) in {duration:.2f} seconds."
    )
    return TransferOutcome.success(target_name, len(data))
