"""CLI entrypoint, normally invoked from a //go:generate directive."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .errors import OptsGenError
from .loader import SOURCE_ENV
from .logging import configure_logging, get_logger
from .orchestrator import Generator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="optsgen",
        description=(
            "Generate With/Get accessors, Changed and ToParams for a Go options struct. "
            "The source file and package default to $GOFILE and $GOPACKAGE."
        ),
    )
    parser.add_argument("type_name", help="Name of the struct type to generate accessors for.")
    parser.add_argument(
        "--source",
        default=None,
        help="Go file to read (defaults to $GOFILE).",
    )
    parser.add_argument(
        "--package",
        default=None,
        help="Package clause for the generated file (defaults to $GOPACKAGE).",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the generated file (defaults to the source directory).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to an .optsgen.yml file (defaults to the source directory).",
    )
    parser.add_argument(
        "--no-format",
        action="store_true",
        help="Skip the go fmt and goimports passes.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated source instead of writing it.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a timestamped DEBUG trace of the run to this file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for optsgen."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        source=args.source or os.environ.get(SOURCE_ENV),
        log_file=args.log_file,
    )

    generator = Generator()
    try:
        result = generator.generate(
            args.type_name,
            source=args.source,
            package=args.package,
            output_dir=args.output_dir,
            config_path=args.config,
            format_output=not args.no_format,
            dry_run=bool(args.dry_run),
        )
    except OptsGenError as exc:
        get_logger().error("%s", exc)
        parser.exit(1)

    if args.dry_run:
        sys.stdout.write(result.content)


if __name__ == "__main__":
    main(sys.argv[1:])
