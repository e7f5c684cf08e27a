"""The convert -> authorize -> publish pipeline."""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from google.oauth2.credentials import Credentials

from ..models.config import DocSyncConfig
from .auth import CredentialManager
from .client import DriveClient
from .converter import DocumentConverter

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Result of a sync operation."""

    success: bool
    document_name: str
    source_path: str
    message: str
    file_id: str | None = None


class SyncOperations:
    """Publishes a local document to Google Docs."""

    def __init__(
        self,
        config: DocSyncConfig,
        converter: DocumentConverter | None = None,
        credentials: CredentialManager | None = None,
        client_factory: Callable[[Credentials], Any] | None = None,
    ) -> None:
        """Initialize sync operations.

        Args:
            config: Sync configuration
            converter: DocumentConverter (created from config if not provided)
            credentials: CredentialManager (created from config if not provided)
            client_factory: Builds a DriveClient from authorized credentials
        """
        self.config = config
        self.converter = converter or DocumentConverter(config.converter)
        self.credentials = credentials or CredentialManager(
            config.credentials_file,
            config.token_file,
            config.scopes,
        )
        self._client_factory = client_factory or self._default_client

    def _default_client(self, creds: Credentials) -> DriveClient:
        return DriveClient(credentials=creds, settings=self.config.drive)

    def sync(self, source_path: str, document_name: str) -> SyncResult:
        """Convert ``source_path`` and publish it as ``document_name``.

        Failures are logged and reported in the result, never raised.
        """
        logger.info("updating %s from %s", document_name, source_path)

        try:
            output_path = self.converter.convert(source_path)
            creds = self.credentials.load_credentials()
            client = self._client_factory(creds)
            file_id = client.update_document(document_name, output_path)
        except Exception as e:
            logger.error("Failed to update %s: %s", document_name, e)
            return SyncResult(
                success=False,
                document_name=document_name,
                source_path=source_path,
                message=f"Failed: {e}",
            )

        return SyncResult(
            success=True,
            document_name=document_name,
            source_path=source_path,
            message=f"Updated {document_name}",
            file_id=file_id,
        )
