"""
Exceptions raised by the mdprompt pipeline.

Only per-file read failures are recovered where they happen; every error
defined here is fatal to the run and ends up at the CLI.
"""

from typing import Any, Optional


class MdPromptError(Exception):
    """Base exception for all mdprompt errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class TraversalError(MdPromptError):
    """The input root cannot be traversed at all."""

    def __init__(self, root: str, reason: str) -> None:
        super().__init__(f"Cannot traverse {root}: {reason}", {"root": root})


class TransformError(MdPromptError):
    """A record could not be turned into a payload."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Cannot build payload for {name!r}: {reason}", {"record": name})


class WriteError(MdPromptError):
    """A payload could not be written to the output directory."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot write {path}: {reason}", {"path": path})


class ProducerFault(MdPromptError):
    """An unexpected exception escaped the producer thread."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(
            f"Producer failed: {cause}",
            {"type": type(cause).__name__},
        )
        self.cause = cause
