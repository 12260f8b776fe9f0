"""
Result document persistence.

Create-or-append Markdown files for finished test results.
"""

import logging
from datetime import datetime
from pathlib import Path

from backend.settings import ProfilerSettings
from backend.utils.helpers import build_result_filename

logger = logging.getLogger(__name__)


class ResultPersistence:
    """
    Writes rendered result documents under a results root.

    Layout:
        outputs/results/                  (base_dir)
            <defaultSaveLocation>/
                PERMA-Results-2024-12-08.md

    Design:
    - New file: written as-is
    - Existing file: prior content kept verbatim, new content appended
      after exactly one blank line
    - Failures (OSError) propagate to the caller; the document stays
      with the caller, so the write can be retried
    """

    def __init__(self, base_dir: str = "outputs/results"):
        """
        Initialize persistence layer.

        Args:
            base_dir: Root directory for all result documents
        """
        self.base_dir = Path(base_dir)
        logger.info(f"ResultPersistence initialized: {self.base_dir}")

    def resolve_path(self, save_location: str, filename: str) -> Path:
        """
        Path for a result file under the results root.

        Args:
            save_location: Folder relative to the root ('/' is the root)
            filename: File name from the naming convention

        Returns:
            Path: Target file path

        Raises:
            ValueError: If the location escapes the results root
        """
        root = self.base_dir.resolve()
        folder = (root / save_location.strip().lstrip("/\\")).resolve()

        if folder != root and root not in folder.parents:
            raise ValueError(f"Save location escapes results directory: {save_location!r}")

        return folder / filename

    def create_or_append(self, path, content: str) -> Path:
        """
        Write content to path, appending if the file already exists.

        Args:
            path: Target file
            content: Rendered document

        Returns:
            Path: Absolute path written

        Raises:
            OSError: If the file cannot be read or written
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        if target.exists():
            with open(target, 'r', encoding='utf-8') as f:
                existing = f.read()

            with open(target, 'a', encoding='utf-8') as f:
                f.write(_separator(existing) + content)

            logger.info(f"Appended result to {target}")
        else:
            with open(target, 'w', encoding='utf-8') as f:
                f.write(content)

            logger.info(f"Created result file {target}")

        return target.absolute()

    def save_result(self, document: str, settings: ProfilerSettings, moment: datetime) -> Path:
        """
        Save a rendered document according to user settings.

        Args:
            document: Rendered result document
            settings: Naming convention and save location
            moment: Date used in the file name

        Returns:
            Path: Absolute path written

        Raises:
            ValueError: If the naming convention or location is invalid
            OSError: If the file cannot be written
        """
        filename = build_result_filename(settings.file_naming_convention, moment)
        path = self.resolve_path(settings.default_save_location, filename)
        return self.create_or_append(path, document)


def _separator(existing: str) -> str:
    """Newlines needed so exactly one blank line precedes appended content"""
    if not existing:
        return ""
    if existing.endswith("\n\n"):
        return ""
    if existing.endswith("\n"):
        return "\n"
    return "\n\n"
