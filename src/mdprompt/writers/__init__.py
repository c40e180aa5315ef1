"""Payload writers."""

from mdprompt.writers.json_writer import JsonFileWriter

__all__ = ["JsonFileWriter"]
