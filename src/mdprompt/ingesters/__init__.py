"""Ingesters: turn an input source into a stream of records."""

from pathlib import Path
from typing import Callable, Optional

from mdprompt.ingesters.folder_ingester import FolderIngester
from mdprompt.ingesters.zip_ingester import ZipIngester
from mdprompt.protocols import Ingester
from mdprompt.utils.paths import MARKDOWN_EXTENSION

IngesterFactory = Callable[[str], Ingester]

# Checked in order; archives before folders
_FACTORIES: list[IngesterFactory] = [
    ZipIngester,
    FolderIngester,
]


def get_ingester(source: Path | str, extension: str = MARKDOWN_EXTENSION) -> Optional[Ingester]:
    """Build the first ingester that accepts the source.

    Args:
        source: Folder or archive to read
        extension: File extension to pick up (case-sensitive)

    Returns:
        A ready ingester, or None if the source does not exist or no
        ingester understands it
    """
    source_path = Path(source)
    for factory in _FACTORIES:
        ingester = factory(extension)
        if ingester.can_handle(source_path):
            return ingester
    return None


def register_ingester(factory: IngesterFactory) -> None:
    """Add an ingester factory, tried after the built-in ones.

    Args:
        factory: Callable taking the extension and returning an Ingester
    """
    _FACTORIES.append(factory)


__all__ = ["get_ingester", "register_ingester", "FolderIngester", "ZipIngester"]
