"""Ingester for ZIP archive files."""

import logging
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import Iterator

from mdprompt.errors import TraversalError
from mdprompt.models import Record
from mdprompt.utils.paths import MARKDOWN_EXTENSION, has_extension, split_extension

logger = logging.getLogger(__name__)


class ZipIngester:
    """Ingester for ZIP archives of Markdown files."""

    source_type = "zip"

    def __init__(self, extension: str = MARKDOWN_EXTENSION):
        self.extension = extension

    def can_handle(self, source: Path) -> bool:
        """Check if this is a zip file."""
        return source.suffix.lower() == ".zip" and source.is_file()

    def ingest(self, source: Path) -> Iterator[Record]:
        """Yield records from a ZIP archive.

        Args:
            source: Path to the ZIP file

        Yields:
            One Record per archive member whose extension matches
        """
        try:
            zf = zipfile.ZipFile(source, "r")
        except (OSError, zipfile.BadZipFile) as e:
            raise TraversalError(str(source), str(e)) from e

        with zf:
            for info in zf.infolist():
                if info.is_dir():
                    continue

                member_name = PurePosixPath(info.filename).name
                if not has_extension(member_name, self.extension):
                    continue

                try:
                    raw_content = zf.read(info.filename)
                except (
                    OSError,
                    EOFError,
                    zipfile.BadZipFile,
                    zlib.error,
                    NotImplementedError,
                    RuntimeError,
                ) as e:
                    # damaged data, unknown compression, encrypted members
                    logger.warning(f"Skipping {source}:{info.filename}: {e}")
                    continue

                yield Record(
                    name=split_extension(member_name)[0],
                    content=raw_content.decode("utf-8", errors="replace"),
                    source=f"{source}:{info.filename}",
                )
