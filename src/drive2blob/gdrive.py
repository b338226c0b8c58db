# gdrive.py
import io
import json
import logging
from datetime import date
from typing import List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import HttpRequest, MediaIoBaseDownload

from .exceptions import ConfigurationError, NotFoundError, ProviderUnavailable
from .storage.base import SourceStorageClient
from .storage.dto import ObjectDescriptor, ProviderKind
from .utils import is_timeout

# The scope for Google Drive API
SCOPES = ["https://www.googleapis.com/auth/drive"]
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"
LIST_FIELDS = "files(id, name, size, mimeType, createdTime)"

PROVIDER_NAME = "Google Drive"


def load_service_account_info(credentials_json: Optional[str]) -> dict:
    """
    Parses the service-account key JSON and checks it has the fields needed to
    sign the token assertion locally.

    Raises:
        ConfigurationError: If the JSON is missing, malformed, or incomplete.
    """
    if not credentials_json:
        raise ConfigurationError(
            "Google Drive credentials are missing. Set GOOGLE_SERVICE_ACCOUNT_CREDENTIALS."
        )
    try:
        info = json.loads(credentials_json)
    except ValueError as e:
        raise ConfigurationError(
            f"Google Drive credentials are not valid JSON: {e}"
        ) from e
    if not isinstance(info, dict):
        raise ConfigurationError("Google Drive credentials must be a JSON object.")

    missing = [key for key in ("client_email", "private_key") if not info.get(key)]
    if missing:
        raise ConfigurationError(
            f"Google Drive credentials are missing fields: {', '.join(missing)}"
        )
    info.setdefault("token_uri", DEFAULT_TOKEN_URI)
    return info


def _provider_error(e: Exception, action: str) -> ProviderUnavailable:
    if isinstance(e, HttpError) and e.resp.status == 404:
        return NotFoundError(PROVIDER_NAME, f"{action}: not found ({e})")
    return ProviderUnavailable(PROVIDER_NAME, f"{action}: {e}", timeout=is_timeout(e))


# Errors the Drive SDK and its transport raise for remote failures.
DRIVE_ERRORS = (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError)


class GoogleDriveClient(SourceStorageClient):
    """
    Client for one Google Drive folder, authenticated with a service account.
    Implements the source side of a migration.
    """

    provider_kind = ProviderKind.HIERARCHICAL
    provider_name = PROVIDER_NAME

    def __init__(
        self,
        credentials_json: Optional[str],
        folder_id: Optional[str],
        page_size: int = 10,
        timeout: Optional[float] = None,
    ):
        info = load_service_account_info(credentials_json)
        if not folder_id:
            raise ConfigurationError(
                "Google Drive folder is not configured. Set GOOGLE_FOLDER_ID."
            )
        try:
            # Signing happens locally; the first API call performs the token exchange.
            creds = service_account.Credentials.from_service_account_info(
                info, scopes=SCOPES
            )
        except ValueError as e:
            logging.error(f"Failed to load Google service account credentials: {e}")
            raise ConfigurationError(
                f"Google Drive credentials are invalid: {e}"
            ) from e

        self.credentials = creds
        self.timeout = timeout
        # httplib2 is not thread-safe: every request gets its own connection.
        self.service = build(
            "drive",
            "v3",
            http=self._new_http(),
            requestBuilder=self._build_request,
            cache_discovery=False,
        )
        self.folder_id = folder_id
        self.page_size = page_size
        logging.info(
            f"Google Drive client initialized for service account {info['client_email']}."
        )

    def _new_http(self) -> AuthorizedHttp:
        return AuthorizedHttp(self.credentials, http=httplib2.Http(timeout=self.timeout))

    def _build_request(self, http, *args, **kwargs) -> HttpRequest:
        return HttpRequest(self._new_http(), *args, **kwargs)

    def list_objects(self) -> List[ObjectDescriptor]:
        """
        Lists the non-trashed entries of the configured folder.

        Only the first page (at most page_size entries) is returned; further
        pages are never requested.
        """
        try:
            logging.info(f"Listing files in Google Drive folder ID: '{self.folder_id}'")
            response = (
                self.service.files()
                .list(
                    q=f"'{self.folder_id}' in parents and trashed=false",
                    fields=LIST_FIELDS,
                    pageSize=self.page_size,
                )
                .execute()
            )
        except DRIVE_ERRORS as e:
            logging.error(
                f"Failed to list files in Google Drive folder ID '{self.folder_id}': {e}"
            )
            raise _provider_error(e, "listing folder") from e

        return [self._to_descriptor(item) for item in response.get("files", [])]

    @staticmethod
    def _to_descriptor(item: dict) -> ObjectDescriptor:
        created = item.get("createdTime")
        return ObjectDescriptor(
            name=item["name"],
            # Folders, shortcuts and Google-native documents carry no size.
            size_bytes=int(item.get("size") or 0),
            kind=item.get("mimeType"),
            created_at=date.fromisoformat(created[:10]) if created else None,
            provider_object_id=item["id"],
        )

    def fetch_content(self, object_id: str) -> bytes:
        """
        Downloads a file's full content into memory and returns it.
        The download is drained to completion before returning.
        """
        buffer = io.BytesIO()
        try:
            logging.info(f"Downloading file with ID '{object_id}' into memory...")
            request = self.service.files().get_media(fileId=object_id)
            downloader = MediaIoBaseDownload(buffer, request)
            done = False
            while not done:
                status, done = downloader.next_chunk()
                if status:
                    logging.debug(f"Download {int(status.progress() * 100)}% of '{object_id}'.")
        except DRIVE_ERRORS as e:
            logging.error(f"Failed to download file with ID '{object_id}': {e}")
            raise _provider_error(e, f"downloading file '{object_id}'") from e
        return buffer.getvalue()
