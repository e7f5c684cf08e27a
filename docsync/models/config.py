"""Configuration models for the document sync tool."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

DRIVE_SCOPE = "https://www.googleapis.com/auth/drive"


@dataclass
class ConverterSettings:
    """Settings for the external org -> ODT conversion."""

    editor: str = "emacs"
    export_function: str = "org-odt-export-to-odt"
    output_extension: str = ".odt"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConverterSettings":
        """Create from dictionary, falling back to env and defaults."""
        return cls(
            editor=data.get("editor") or os.getenv("DOCSYNC_EDITOR", "emacs"),
            export_function=data.get("export_function", "org-odt-export-to-odt"),
            output_extension=data.get("output_extension", ".odt"),
        )


@dataclass
class DriveSettings:
    """Settings for the Google Drive document store."""

    page_size: int = 30
    document_mime_type: str = "application/vnd.google-apps.document"
    upload_mime_type: str = "application/vnd.oasis.opendocument.text"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DriveSettings":
        """Create from dictionary."""
        return cls(
            page_size=int(data.get("page_size", 30)),
            document_mime_type=data.get("document_mime_type", "application/vnd.google-apps.document"),
            upload_mime_type=data.get("upload_mime_type", "application/vnd.oasis.opendocument.text"),
        )


@dataclass
class DocSyncConfig:
    """Main configuration for the sync tool.

    Every value resolves in order: YAML settings file, DOCSYNC_* environment
    variable (a .env file is honoured), built-in default.
    """

    credentials_file: Path = Path("credentials.json")
    token_file: Path = Path("token.json")
    scopes: list[str] = field(default_factory=lambda: [DRIVE_SCOPE])
    debounce_seconds: float = 0.5
    log_level: str = "INFO"
    converter: ConverterSettings = field(default_factory=ConverterSettings)
    drive: DriveSettings = field(default_factory=DriveSettings)

    @classmethod
    def load(cls, config_path: Path | None = None) -> "DocSyncConfig":
        """Load configuration from an optional YAML file and the environment."""
        load_dotenv()

        data: dict[str, Any] = {}
        if config_path is not None:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"{config_path} must contain a mapping of settings")

        credentials_file = data.get("credentials_file") or os.getenv(
            "DOCSYNC_CREDENTIALS_FILE", "credentials.json"
        )
        token_file = data.get("token_file") or os.getenv("DOCSYNC_TOKEN_FILE", "token.json")
        debounce = data.get("debounce_seconds")
        if debounce is None:
            debounce = os.getenv("DOCSYNC_DEBOUNCE_SECONDS", "0.5")

        return cls(
            credentials_file=Path(credentials_file),
            token_file=Path(token_file),
            scopes=list(data.get("scopes") or [DRIVE_SCOPE]),
            debounce_seconds=float(debounce),
            log_level=(data.get("log_level") or os.getenv("DOCSYNC_LOG_LEVEL", "INFO")).upper(),
            converter=ConverterSettings.from_dict(data.get("converter") or {}),
            drive=DriveSettings.from_dict(data.get("drive") or {}),
        )
