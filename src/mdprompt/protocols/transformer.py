"""Protocol for record-to-payload transformers."""

from typing import Protocol, runtime_checkable

from mdprompt.models import Record


@runtime_checkable
class Transformer(Protocol):
    """Turns a record into a serialized payload."""

    def transform(self, record: Record) -> str:
        """Return the serialized payload. Raises TransformError on failure."""
        ...
