"""Core sync functionality."""

from .auth import CredentialManager, CredentialsError
from .client import AmbiguousDocumentError, DriveAPIError, DriveClient
from .converter import ConversionError, DocumentConverter
from .operations import SyncOperations, SyncResult
from .paths import resolve_home
from .watcher import FileSubscription, WatchLoop

__all__ = [
    "AmbiguousDocumentError",
    "ConversionError",
    "CredentialManager",
    "CredentialsError",
    "DocumentConverter",
    "DriveAPIError",
    "DriveClient",
    "FileSubscription",
    "SyncOperations",
    "SyncResult",
    "WatchLoop",
    "resolve_home",
]
