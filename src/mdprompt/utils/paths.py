"""File name helpers."""

from pathlib import Path

MARKDOWN_EXTENSION = ".md"


def split_extension(filename: str) -> tuple[str, str]:
    """Split a file name into (stem, extension).

    The extension runs from the last dot of the name, so a bare ".md" has
    an empty stem and "notes.tar.md" has stem "notes.tar". Unlike
    ``Path.suffix`` a leading dot is not treated as part of the stem.
    """
    stem, dot, ext = filename.rpartition(".")
    if not dot:
        return filename, ""
    return stem, dot + ext


def has_extension(filename: str, extension: str = MARKDOWN_EXTENSION) -> bool:
    """Case-sensitive extension check."""
    return split_extension(filename)[1] == extension


def output_path(output_root: Path | str, name: str, suffix: str = ".json") -> Path:
    """Path of the output document for a record name."""
    return Path(output_root) / f"{name}{suffix}"
