"""
Run configuration for mdprompt.
"""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_INPUT_DIR = Path("./IN")
DEFAULT_OUTPUT_DIR = Path("./OUT")


@dataclass(frozen=True)
class PipelineConfig:
    """Where to read documents from and where to write payloads."""

    input_dir: Path = DEFAULT_INPUT_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR
    # Off by default: the output directory is expected to exist.
    create_output: bool = False
