"""Protocol for payload sinks."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from mdprompt.models import Record


@runtime_checkable
class Writer(Protocol):
    """Persists one payload per record."""

    def write(self, record: Record, payload: str) -> Path:
        """Store the payload and return where it went. Raises WriteError."""
        ...
