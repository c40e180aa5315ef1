"""CLI entry point for mdprompt."""

import argparse
import logging
import sys
from pathlib import Path

from mdprompt.config import DEFAULT_INPUT_DIR, DEFAULT_OUTPUT_DIR, PipelineConfig
from mdprompt.errors import MdPromptError
from mdprompt.models import Record
from mdprompt.pipeline import run_pipeline
from mdprompt.transformers import ChatRequestTransformer
from mdprompt.utils.paths import split_extension

logger = logging.getLogger(__name__)


def convert(input_dir: str, output_dir: str, create_output: bool = False) -> None:
    """Convert a folder (or zip) of Markdown files into request payloads.

    Args:
        input_dir: Folder or zip file to read
        output_dir: Folder to write <name>.json files into
        create_output: Create the output folder if it is missing
    """
    config = PipelineConfig(
        input_dir=Path(input_dir),
        output_dir=Path(output_dir),
        create_output=create_output,
    )
    try:
        run_pipeline(config)
    except MdPromptError as e:
        logger.error(f"Fatal: {e}")
        sys.exit(1)


def preview(path: str) -> None:
    """Print the payload that would be written for a single file.

    Args:
        path: Path to a Markdown file
    """
    file_path = Path(path)
    try:
        content = file_path.read_bytes().decode("utf-8", errors="replace")
    except OSError as e:
        logger.error(f"Cannot read {path}: {e.strerror or e}")
        sys.exit(1)

    record = Record(
        name=split_extension(file_path.name)[0],
        content=content,
        source=str(file_path),
    )
    try:
        print(ChatRequestTransformer().transform(record))
    except MdPromptError as e:
        logger.error(f"Fatal: {e}")
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="mdprompt",
        description="mdprompt - wrap Markdown documents into chat request payloads",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug output",
    )
    # -v is also accepted after the subcommand
    verbose_parent = argparse.ArgumentParser(add_help=False)
    verbose_parent.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Show debug output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # convert command
    convert_parser = subparsers.add_parser(
        "convert",
        parents=[verbose_parent],
        help="Convert every .md file under a folder into a .json payload",
    )
    convert_parser.add_argument(
        "-i",
        "--input",
        default=str(DEFAULT_INPUT_DIR),
        help=f"Input folder or zip file (default: {DEFAULT_INPUT_DIR})",
    )
    convert_parser.add_argument(
        "-o",
        "--output",
        default=str(DEFAULT_OUTPUT_DIR),
        help=f"Output folder (default: {DEFAULT_OUTPUT_DIR})",
    )
    convert_parser.add_argument(
        "--create-output",
        action="store_true",
        help="Create the output folder if it does not exist",
    )

    # preview command
    preview_parser = subparsers.add_parser(
        "preview",
        parents=[verbose_parent],
        help="Print the payload for a single Markdown file",
    )
    preview_parser.add_argument("path", help="Path to a .md file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    if args.command == "convert":
        convert(args.input, args.output, args.create_output)
    elif args.command == "preview":
        preview(args.path)


if __name__ == "__main__":
    main()
