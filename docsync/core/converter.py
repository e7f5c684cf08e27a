"""Org -> ODT conversion through Emacs in batch mode."""

import logging
import os
import subprocess
from pathlib import Path

from ..models.config import ConverterSettings
from .paths import resolve_home

logger = logging.getLogger(__name__)


class ConversionError(Exception):
    """Raised when the external converter fails."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class DocumentConverter:
    """Runs the configured editor to export a document to ODT."""

    def __init__(self, settings: ConverterSettings | None = None) -> None:
        self.settings = settings or ConverterSettings()

    def output_path(self, source: Path) -> Path:
        """Path of the file the export produces next to ``source``."""
        return source.parent / f"{source.stem}{self.settings.output_extension}"

    def build_command(self, source: Path) -> list[str]:
        """Build the batch-mode export command for ``source``."""
        return [
            self.settings.editor,
            str(source),
            "--batch",
            "-f",
            self.settings.export_function,
            "--kill",
        ]

    def convert(self, source_path: str) -> Path:
        """Convert a document and return the path of the exported file.

        Args:
            source_path: Document path, ``~`` allowed

        Returns:
            Absolute path of the exported file

        Raises:
            ConversionError: If the editor cannot be started or exits nonzero
        """
        source = Path(os.path.abspath(resolve_home(source_path)))
        cmd = self.build_command(source)
        logger.debug("Running %s", " ".join(cmd))

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise ConversionError(f"Failed to run {cmd[0]}: {e}") from e

        if result.returncode != 0:
            raise ConversionError(
                f"{cmd[0]} exited with status {result.returncode}: {result.stderr.strip()}",
                result.returncode,
                result.stderr,
            )

        # Emacs reports progress on stderr even when the export succeeds
        if result.stderr:
            logger.warning("%s", result.stderr.strip())

        return self.output_path(source)
