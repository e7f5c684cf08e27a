"""Google Drive client for publishing documents."""

import logging
from pathlib import Path
from typing import Any

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload

from ..models.config import DriveSettings

logger = logging.getLogger(__name__)


class DriveAPIError(Exception):
    """Exception raised for Drive API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AmbiguousDocumentError(Exception):
    """Raised when more than one remote document shares the target name."""

    def __init__(self, name: str, file_ids: list[str]) -> None:
        super().__init__(f"more than one version of document exists: {name}")
        self.name = name
        self.file_ids = file_ids


class DriveClient:
    """Finds, creates and replaces Google Docs by title."""

    API_VERSION = "v3"

    def __init__(
        self,
        credentials: Credentials | None = None,
        service: Any = None,
        settings: DriveSettings | None = None,
    ) -> None:
        """Initialize client.

        Args:
            credentials: Authorized OAuth credentials
            service: Prebuilt Drive service (built from credentials if not provided)
            settings: Drive settings (page size, MIME types)
        """
        self.settings = settings or DriveSettings()
        self.service = service or build(
            "drive", self.API_VERSION, credentials=credentials, cache_discovery=False
        )

    def _execute(self, request: Any) -> dict[str, Any]:
        """Execute a prepared API request.

        Raises:
            DriveAPIError: On API, auth or transport errors
        """
        try:
            return request.execute()  # type: ignore[no-any-return]
        except HttpError as e:
            raise DriveAPIError(f"The API returned an error: {e}", e.resp.status) from e
        except (GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
            raise DriveAPIError(f"Request failed: {e}") from e

    @staticmethod
    def build_name_query(name: str) -> str:
        """Build a Drive search query matching files named exactly ``name``."""
        escaped = name.replace("\\", "\\\\").replace("'", "\\'")
        return f"name = '{escaped}'"

    def _document_metadata(self, name: str) -> dict[str, str]:
        return {
            "name": name,
            "mimeType": self.settings.document_mime_type,
        }

    def _media(self, path: Path) -> MediaFileUpload:
        return MediaFileUpload(str(path), mimetype=self.settings.upload_mime_type, resumable=True)

    def get_file_ids(self, name: str) -> list[str]:
        """List ids of documents whose name equals ``name``.

        Only the first page of results is read.

        Args:
            name: Exact, case-sensitive document name

        Returns:
            Matching file ids
        """
        request = self.service.files().list(
            pageSize=self.settings.page_size,
            fields="nextPageToken, files(id, name)",
            q=self.build_name_query(name),
        )
        response = self._execute(request)

        # The search is not guaranteed to be exact, so filter again here
        return [f["id"] for f in response.get("files", []) if f.get("name") == name]

    def upload_document(self, name: str, path: Path) -> str:
        """Create a new Google Doc from a local file.

        Args:
            name: Document title
            path: Local file to upload

        Returns:
            New file id
        """
        request = self.service.files().create(
            body=self._document_metadata(name),
            media_body=self._media(path),
            fields="id",
        )
        response = self._execute(request)
        logger.info("Created document %s (%s)", name, response.get("id"))
        return response["id"]

    def replace_document(self, file_id: str, name: str, path: Path) -> str:
        """Replace the content of an existing Google Doc.

        Returns:
            The unchanged file id
        """
        request = self.service.files().update(
            fileId=file_id,
            body=self._document_metadata(name),
            media_body=self._media(path),
        )
        self._execute(request)
        logger.info("Replaced document %s (%s)", name, file_id)
        return file_id

    def update_document(self, name: str, path: Path) -> str:
        """Create or replace the single document called ``name``.

        Args:
            name: Document title
            path: Local file to upload

        Returns:
            Id of the created or replaced document

        Raises:
            AmbiguousDocumentError: If more than one document has this name
            DriveAPIError: On API errors
        """
        file_ids = self.get_file_ids(name)
        if len(file_ids) > 1:
            raise AmbiguousDocumentError(name, file_ids)
        if not file_ids:
            return self.upload_document(name, path)
        return self.replace_document(file_ids[0], name, path)

    def verify_connection(self) -> bool:
        """Verify API connectivity and authorization.

        Raises:
            DriveAPIError: On connection or auth failure
        """
        response = self._execute(self.service.about().get(fields="user"))
        return "user" in response
