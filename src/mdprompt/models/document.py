"""Core data models for source documents."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Record:
    """One Markdown document read from an input source.

    Records are handed from the producer thread to the consumer by value
    and are never mutated after creation.
    """

    name: str  # file name without extension
    content: str
    source: str = ""  # where it was read from, for log lines only
