#!/usr/bin/env python3
"""Command-line interface for the StringTree accessor generator.

Reads a localization table and writes typed Swift or Objective-C accessors
for every key. Meant to run from an Xcode build phase or a CI job.

Usage:
    python -m stringtree.cli -i Base.lproj/Localizable.strings -o Strings.swift
    python -m stringtree.cli -i Localizable.strings -o Strings.m -l objc -b Texts
    python -m stringtree.cli -i Localizable.strings -c -t Onboarding > Strings.swift
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from stringtree.core.core_types import OutputLanguage
from stringtree.core.generator import GenerationRequest, GenerationResult, generate
from stringtree.emitters.emitter_types import (
    DEFAULT_BASE_CLASS_NAME,
    EmitterOptions,
    GenerationError,
)
from stringtree.utils.errors import EX_OK, EX_USAGE, StringTreeError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def print_result(result: GenerationResult) -> None:
    """Print a generation summary to stderr.

    Stdout is reserved for generated code, so the summary never mixes with
    it.

    Args:
        result: The generation result to display.
    """
    print(f"[{result.name.upper()}] SUCCESS", file=sys.stderr)
    for log in result.logs:
        print(f" {log}", file=sys.stderr)


def print_error(error: StringTreeError) -> None:
    """Print an error, one line per failing entry for aggregate errors.

    Args:
        error: The error to display.
    """
    print(f"Error: {error}", file=sys.stderr)
    if isinstance(error, GenerationError):
        for failure in error.failures:
            print(f"Error: {failure}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="stringtree",
        description="Generate typed localization accessors from a strings table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -i Localizable.strings -o Strings.swift
  %(prog)s -i Localizable.strings -o Strings.m -l objc     Also writes Strings.h
  %(prog)s -i Localizable.strings -d _ -c                  Split keys on '_', CamelCase names
        """,
    )

    parser.add_argument(
        "-i",
        "--input",
        required=True,
        type=Path,
        help="Path to the .strings, .plist or .json table to read",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Path to the .swift or .m file to write; the ObjC header is "
        "written next to it with a .h extension (default: stdout)",
    )
    parser.add_argument(
        "-l",
        "--language",
        default=OutputLanguage.SWIFT.value,
        choices=[language.value for language in OutputLanguage],
        help="Language of the generated code (default: %(default)s)",
    )
    parser.add_argument(
        "-d",
        "--delimiter",
        default=".",
        help="Separator that splits keys into nested groups (default: '%(default)s')",
    )
    parser.add_argument(
        "-c",
        "--capitalize",
        action="store_true",
        help="CamelCase generated identifiers",
    )
    parser.add_argument(
        "-b",
        "--baseClassName",
        dest="base_class_name",
        default=DEFAULT_BASE_CLASS_NAME,
        help="Name of the root struct or class (default: %(default)s)",
    )
    parser.add_argument(
        "-t",
        "--stringsTableName",
        dest="table_name",
        help="Strings table to look keys up in (default: Localizable)",
    )
    parser.add_argument(
        "-s",
        "--customSuperclass",
        dest="custom_superclass",
        help="Superclass of generated ObjC classes (default: NSObject)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress and the parsed key tree to stderr",
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point.

    Args:
        argv: Command-line arguments; uses sys.argv if None.

    Returns:
        Exit code for the process (see ``utils.errors``).
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        # argparse exits 0 for --help and 2 for usage errors.
        return EX_OK if not exc.code else EX_USAGE

    configure_logging(args.verbose)

    if not args.delimiter:
        print("Error: Delimiter must not be empty.", file=sys.stderr)
        return EX_USAGE

    options = EmitterOptions(
        language=OutputLanguage.from_name(args.language),
        base_class_name=args.base_class_name,
        table_name=args.table_name,
        custom_superclass=args.custom_superclass,
        autocapitalize=args.capitalize,
    )
    request = GenerationRequest(
        input_path=args.input,
        output_path=args.output,
        options=options,
        delimiter=args.delimiter,
    )

    try:
        result = generate(request)
    except StringTreeError as exc:
        print_error(exc)
        return exc.exit_code

    if args.verbose:
        print_result(result)
    return EX_OK


if __name__ == "__main__":
    sys.exit(main())
