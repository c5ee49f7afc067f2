from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import markdown_parser
from .config import ConverterConfig, load_config
from .outline import format_document
from .utils import configure_logging, read_markdown, write_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marktree",
        description="Convert Markdown into a document tree and print its outline.",
    )
    parser.add_argument("input", type=str, help="Path to Markdown file")
    parser.add_argument("-c", "--config", type=str, help="YAML converter configuration")
    parser.add_argument("-o", "--output", type=str, help="Write the outline to this file instead of stdout")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    config = ConverterConfig()
    if args.config:
        logging.info("Loading configuration from %s", args.config)
        config = load_config(Path(args.config).expanduser())

    logging.info("Reading %s", input_path)
    markdown_text = read_markdown(input_path)
    logging.debug("Markdown length: %d chars", len(markdown_text))

    logging.info("Parsing markdown...")
    document = markdown_parser.parse_markdown(markdown_text, config)
    logging.debug("Built %d blocks", len(document.blocks))

    outline = format_document(document)
    if args.output:
        output_path = Path(args.output).expanduser()
        write_text(output_path, outline + "\n")
        logging.info("Done. Saved to %s", output_path)
    else:
        sys.stdout.write(outline + "\n")


if __name__ == "__main__":
    main()
