"""CLI entrypoint for yamlenums.

Typically invoked from a ``//go:generate yamlenums -type=Pill`` directive in
the package that declares ``Pill``.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Sequence

from .config import load_config
from .errors import GeneratorError, UsageError
from .generator import Generator
from .logging import configure_logging
from .models import GenerationResult
from .postproc import GoFormatter


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yamlenums",
        description=(
            "Generate MarshalYAML/UnmarshalYAML methods for integer enum types "
            "declared in a Go package."
        ),
        allow_abbrev=False,
    )
    parser.add_argument(
        "-type",
        "--type",
        dest="type_names",
        default="",
        help="comma-separated list of type names; must be set",
    )
    parser.add_argument(
        "-prefix",
        "--prefix",
        default=None,
        help="prefix to be added to the output file",
    )
    parser.add_argument(
        "-suffix",
        "--suffix",
        default=None,
        help="suffix to be added to the output file (default: _yamlenums)",
    )
    parser.add_argument(
        "--no-format",
        dest="format",
        action="store_false",
        default=None,
        help="Write generated source without running gofmt.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "directories",
        nargs="*",
        metavar="dir",
        help="Directory holding the Go package (defaults to current directory).",
    )
    return parser


def parse_type_names(raw: str) -> List[str]:
    """Split the -type flag value, dropping blank items."""
    names = [name.strip() for name in raw.split(",")]
    names = [name for name in names if name]
    if not names:
        raise UsageError("the flag -type must be set")
    return names


def resolve_directory(directories: Sequence[str]) -> Path:
    if len(directories) > 1:
        raise UsageError("only one directory at a time")
    directory = directories[0] if directories else "."
    return Path(directory).expanduser().resolve()


def run(args: argparse.Namespace, *, command: str) -> List[GenerationResult]:
    """Execute a generation run for parsed command-line arguments."""
    type_names = parse_type_names(args.type_names)
    directory = resolve_directory(args.directories)
    config = load_config(directory).merged(
        prefix=args.prefix,
        suffix=args.suffix,
        format=args.format,
    )
    formatter = GoFormatter(config.gofmt) if config.format else None
    generator = Generator(formatter=formatter)
    return generator.run(
        directory,
        type_names,
        prefix=config.prefix,
        suffix=config.suffix,
        command=command,
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for yamlenums."""
    arguments = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    args = parser.parse_args(arguments)

    logger = configure_logging(verbose=bool(args.verbose))

    try:
        run(args, command=" ".join(arguments))
    except GeneratorError as exc:
        logger.error("%s", exc)
        parser.exit(1)


if __name__ == "__main__":
    main(sys.argv[1:])
