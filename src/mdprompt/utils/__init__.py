"""Utility functions for mdprompt."""

from mdprompt.utils.paths import MARKDOWN_EXTENSION, has_extension, output_path, split_extension

__all__ = ["MARKDOWN_EXTENSION", "has_extension", "output_path", "split_extension"]
