"""
HTTP API over the migration core.

Routes are plain ``def`` functions: the provider SDKs block, so FastAPI runs
each request in its worker thread pool.
"""

import logging
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import get_settings
from .exceptions import MigrationError
from .listing import list_destination, list_source
from .sessions import ProviderSessions
from .storage.dto import ObjectDescriptor, TransferRequest
from .transfer import REQUIRED_FIELDS_MESSAGE, transfer_file

TRANSFER_PATH = "/api/transfer"


def source_entry(obj: ObjectDescriptor) -> dict[str, Any]:
    return {
        "id": obj.provider_object_id,
        "name": obj.name,
        "humanSize": obj.human_size,
        "sizeBytes": obj.size_bytes,
        "kind": obj.kind,
    }


def destination_entry(obj: ObjectDescriptor) -> dict[str, Any]:
    return {
        "name": obj.name,
        "humanSize": obj.human_size,
        "sizeBytes": obj.size_bytes,
        "createdAt": obj.created_at.isoformat() if obj.created_at else None,
    }


def listing_error(error: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": error, "detail": detail})


def get_sessions(request: Request) -> ProviderSessions:
    return request.app.state.sessions


def create_app(sessions: Optional[ProviderSessions] = None) -> FastAPI:
    """Builds the application; the provider sessions are created once and shared by all requests."""
    app = FastAPI(title="drive2blob", version=__version__)
    app.state.sessions = sessions or ProviderSessions(get_settings())
    app.add_middleware(
        CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"]
    )

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        # A transfer body that is not a {fileId, fileName} object is a client error.
        if request.url.path == TRANSFER_PATH:
            logging.warning(f"Rejected malformed transfer request: {exc.errors()}")
            return JSONResponse(
                status_code=400,
                content={"status": "error", "message": REQUIRED_FIELDS_MESSAGE},
            )
        return await request_validation_exception_handler(request, exc)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/api/google-drive")
    def google_drive_files(sessions: ProviderSessions = Depends(get_sessions)):
        error = "Google Drive connection or authentication failed."
        try:
            return [source_entry(obj) for obj in list_source(sessions)]
        except MigrationError as e:
            logging.error(f"Failed to list Google Drive: {e}")
            return listing_error(error, str(e))
        except Exception as e:
            logging.critical(f"Unexpected error listing Google Drive: {e}", exc_info=True)
            return listing_error(error, str(e))

    @app.get("/api/azure-blob")
    def azure_blob_files(sessions: ProviderSessions = Depends(get_sessions)):
        error = "Azure Blob Storage connection or authentication failed."
        try:
            return [destination_entry(obj) for obj in list_destination(sessions)]
        except MigrationError as e:
            logging.error(f"Failed to list Azure Blob: {e}")
            return listing_error(
                error, f"Check the connection string and container name. Detail: {e}"
            )
        except Exception as e:
            logging.critical(f"Unexpected error listing Azure Blob: {e}", exc_info=True)
            return listing_error(error, str(e))

    @app.post(TRANSFER_PATH)
    def transfer(
        body: Optional[TransferRequest] = None,
        sessions: ProviderSessions = Depends(get_sessions),
    ):
        body = body or TransferRequest()
        try:
            outcome = transfer_file(sessions, body)
        except Exception as e:
            logging.critical(
                f"Unexpected error transferring '{body.source_object_id}': {e}",
                exc_info=True,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "status": "error",
                    "message": f"Failed to migrate {body.target_name or 'file'}.",
                    "detail": str(e),
                },
            )
        if outcome.ok:
            return {"status": "success", "message": outcome.message}
        if outcome.kind == "validation":
            return JSONResponse(
                status_code=400,
                content={"status": "error", "message": outcome.detail},
            )
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": outcome.message,
                "detail": outcome.detail,
            },
        )

    return app
