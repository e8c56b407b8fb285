"""Command line entry point exposing the build tasks by name."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Sequence

from intlcatalog.backend.config import validator
from intlcatalog.backend.config.schema import ConfigurationError
from intlcatalog.backend.errors import CatalogDirectoryError, CatalogError
from intlcatalog.backend.services.catalog_compiler import run_compile_messages
from intlcatalog.backend.services.message_compiler import compile_file
from intlcatalog.backend.version import get_project_version

logger = logging.getLogger("intlcatalog")

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _compile_messages(args: argparse.Namespace) -> int:
    try:
        return run_compile_messages()
    except CatalogDirectoryError:
        # Already logged where the listing failed.
        return 1


def _compile_single(args: argparse.Namespace) -> int:
    try:
        compile_file(args.input, args.out_file, ast=args.ast)
    except (CatalogError, OSError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intlcatalog",
        description="Compile and validate message catalogues.",
    )
    parser.add_argument("--version", action="version", version=get_project_version())
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subcommands = parser.add_subparsers(dest="task", required=True)

    compile_messages = subcommands.add_parser(
        "compile-messages",
        help="Compile every source catalogue into the compiled catalogue directory",
    )
    compile_messages.set_defaults(handler=_compile_messages)

    compile_one = subcommands.add_parser(
        "compile",
        help="Compile one source catalogue (formatjs compatible options)",
    )
    compile_one.add_argument("input", type=Path, help="Source catalogue file")
    compile_one.add_argument(
        "--ast", action="store_true", help="Emit pre-parsed message nodes instead of strings"
    )
    compile_one.add_argument(
        "--out-file", type=Path, required=True, help="Destination for the compiled catalogue"
    )
    compile_one.set_defaults(handler=_compile_single)

    validate = subcommands.add_parser("validate", help="Validate source catalogues")
    validator.build_argument_parser(validate)
    validate.set_defaults(handler=validator.run)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    handler: Callable[[argparse.Namespace], int] = args.handler
    try:
        return handler(args)
    except (ConfigurationError, FileNotFoundError) as error:
        logger.error("%s", error)
        return 1


__all__ = ["build_parser", "main"]
