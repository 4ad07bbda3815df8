# ABOUTME: CLI entry point for opml-tree.
# ABOUTME: Supports 'urls' and 'format' commands over OPML files.

import argparse
import logging
import sys
from pathlib import Path

import structlog

from opml_tree.codec import get_xml_urls, parse, serialize
from opml_tree.config import get_settings
from opml_tree.errors import OpmlError

log = structlog.get_logger()


def _configure_logging(level: str) -> None:
    """Send structlog output to stderr, filtered at the configured level."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level.upper())),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def _read(path: Path) -> str:
    return path.read_text(encoding=get_settings().encoding)


def cmd_urls(args: argparse.Namespace) -> None:
    """Print the feed URL of every rss outline, one per line."""
    doc = parse(_read(args.file))
    urls = get_xml_urls(doc)
    for url in urls:
        print(url)
    log.info("urls_extracted", file=str(args.file), count=len(urls))


def cmd_format(args: argparse.Namespace) -> None:
    """Parse a file and write it back in canonical form."""
    text = serialize(parse(_read(args.file)))
    if args.output is None:
        print(text)
    else:
        args.output.write_text(text, encoding=get_settings().encoding)
        log.info("opml_written", path=str(args.output))


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(prog="opml-tree", description="Read and rewrite OPML files")
    subparsers = parser.add_subparsers(dest="command")

    # urls
    urls_parser = subparsers.add_parser("urls", help="List rss feed URLs")
    urls_parser.add_argument("file", type=Path)

    # format
    format_parser = subparsers.add_parser("format", help="Re-serialize an OPML file")
    format_parser.add_argument("file", type=Path)
    format_parser.add_argument("-o", "--output", type=Path, default=None)

    args = parser.parse_args(argv)
    _configure_logging(get_settings().log_level)

    commands = {"urls": cmd_urls, "format": cmd_format}
    if args.command not in commands:
        parser.print_help()
        sys.exit(1)

    try:
        commands[args.command](args)
    except OpmlError as e:
        log.error("opml_error", command=args.command, error=str(e))
        print(f"opml-tree: {e}", file=sys.stderr)
        sys.exit(2)
    except OSError as e:
        log.error("file_error", command=args.command, error=str(e))
        print(f"opml-tree: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
