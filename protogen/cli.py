"""CLI entrypoints for protogen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .adder import add_prototypes, compose_prototype_section
from .config import ConfigError, ProtogenConfig, load_config
from .logging import configure_logging, get_logger
from .parser import CTagsParser


def _add_tags_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "tags",
        help="File holding the ctags output, or '-' to read it from stdin.",
    )
    parser.add_argument(
        "--main-file",
        required=True,
        help="Path of the main sketch file exactly as ctags reports it.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="protogen",
        description="Generate forward declarations for sketch functions from ctags output.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to .protogen.yml or the directory holding it (defaults to current directory).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records, with timestamps, to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Print the prototype section for the main file.",
    )
    _add_tags_arguments(generate_parser)

    insert_parser = subparsers.add_parser(
        "insert",
        help="Insert the prototype section into the preprocessed source.",
    )
    _add_tags_arguments(insert_parser)
    insert_parser.add_argument("source", help="Preprocessed source to rewrite.")
    insert_parser.add_argument(
        "--line-offset",
        type=int,
        default=0,
        help="Lines preceding the main file inside the preprocessed source.",
    )
    insert_parser.add_argument(
        "--output",
        default=None,
        help="Write the rewritten source here instead of stdout.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for protogen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
        config = _load_config(args.config)
        ctags_output = _read_tags(args.tags)
    except ConfigError as exc:
        parser.exit(1, f"protogen: invalid configuration: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"protogen: {exc}\n")

    logger = get_logger("cli")
    result = CTagsParser(config=config).generate(ctags_output, args.main_file)
    logger.debug("Insertion line %d", result.insertion_line)
    settings = config.prototypes

    if args.command == "generate":
        section = compose_prototype_section(
            result.insertion_line,
            result.prototypes,
            skip_default_arguments=settings.skip_default_arguments,
            line_directives=settings.line_directives,
        )
        sys.stdout.write(section)
    elif args.command == "insert":
        try:
            source = Path(args.source).read_text(encoding="utf-8")
        except OSError as exc:
            parser.exit(1, f"protogen: {exc}\n")
        rewritten = add_prototypes(
            source,
            result.prototypes,
            result.insertion_line,
            line_offset=args.line_offset,
            skip_default_arguments=settings.skip_default_arguments,
            line_directives=settings.line_directives,
        )
        if args.output:
            Path(args.output).write_text(rewritten, encoding="utf-8")
            print(f"Source rewritten at {args.output}")
        else:
            sys.stdout.write(rewritten)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _load_config(path: str | None) -> ProtogenConfig:
    if path is None:
        return load_config(Path.cwd())
    return load_config(Path(path))


def _read_tags(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


if __name__ == "__main__":
    main(sys.argv[1:])
