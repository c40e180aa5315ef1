"""Ingester for local folders."""

import logging
import os
from pathlib import Path
from typing import Iterator

from mdprompt.errors import TraversalError
from mdprompt.models import Record
from mdprompt.utils.paths import MARKDOWN_EXTENSION, has_extension, split_extension

logger = logging.getLogger(__name__)


class FolderIngester:
    """Ingester for local filesystem folders."""

    source_type = "folder"

    def __init__(self, extension: str = MARKDOWN_EXTENSION):
        self.extension = extension

    def can_handle(self, source: Path) -> bool:
        """Check if this is an existing directory."""
        return source.is_dir()

    def ingest(self, source: Path) -> Iterator[Record]:
        """Yield records from a folder recursively.

        Args:
            source: Path to the folder

        Yields:
            One Record per file whose extension matches, depth-first

        Raises:
            TraversalError: If the folder is missing or cannot be listed
        """
        source = Path(source)
        if not source.is_dir():
            raise TraversalError(str(source), "not a directory")

        def on_walk_error(err: OSError) -> None:
            if Path(err.filename) == source:
                raise TraversalError(str(source), err.strerror or str(err)) from err
            logger.warning(f"Skipping {err.filename}: {err.strerror or err}")

        for root, dirs, files in os.walk(source, onerror=on_walk_error):
            dirs.sort()
            for filename in sorted(files):
                if not has_extension(filename, self.extension):
                    continue

                full_path = Path(root) / filename
                try:
                    raw_content = full_path.read_bytes()
                except OSError as e:
                    logger.warning(f"Skipping {full_path}: {e.strerror or e}")
                    continue

                yield Record(
                    name=split_extension(filename)[0],
                    content=raw_content.decode("utf-8", errors="replace"),
                    source=str(full_path),
                )
