#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser construction and exit codes for the md2bb CLI.

Markdown extension flags are generated from the field metadata of
:class:`~md2bb.options.MarkdownParserOptions`, so a new parser option only
needs a ``cli_name`` to appear on the command line.
"""

import argparse
from dataclasses import fields

from md2bb.cli.actions import EnvironmentAwareAction, EnvironmentAwareBooleanAction
from md2bb.constants import DIALECTS
from md2bb.exceptions import (
    DependencyError,
    FileError,
    ParsingError,
    TranslationError,
    ValidationError,
)
from md2bb.options import MarkdownParserOptions, TranslatorOptions
from md2bb.utils.packages import get_package_version

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_TRANSLATION_ERROR = 7

# Single-letter forms kept from the original command line
_SHORT_FLAGS = {
    "parse_tables": "-t",
    "parse_footnotes": "-f",
    "parse_strikethrough": "-s",
}


def _field_help(options_class: type, name: str) -> str:
    for f in fields(options_class):
        if f.name == name:
            return f.metadata.get("help", "")
    return ""


def create_parser() -> argparse.ArgumentParser:
    """Build the ``md2bb`` argument parser.

    Every option defaults to ``None`` unless an ``MD2BB_*`` environment
    variable supplies a value; :func:`~md2bb.cli.config.apply_config_defaults`
    then fills the remaining gaps from a config file.
    """
    parser = argparse.ArgumentParser(
        prog="md2bb",
        description="Convert Markdown to forum BBCode.",
        epilog="Options can also be set with MD2BB_<OPTION> environment variables or a .md2bb.toml file.",
    )

    parser.add_argument(
        "-d",
        "--dialect",
        action=EnvironmentAwareAction,
        choices=list(DIALECTS),
        default=None,
        help=_field_help(TranslatorOptions, "dialect"),
    )
    parser.add_argument(
        "-i",
        "--input",
        action=EnvironmentAwareAction,
        default=None,
        metavar="PATH",
        help="The Markdown file to read (default: stdin)",
    )
    parser.add_argument(
        "-o",
        "--output",
        action=EnvironmentAwareAction,
        default=None,
        metavar="PATH",
        help="The file to write BBCode to (default: stdout)",
    )

    markdown_group = parser.add_argument_group("Markdown extensions")
    for f in fields(MarkdownParserOptions):
        cli_name = f.metadata.get("cli_name", f.name.replace("_", "-"))
        flags = [f"--{cli_name}"]
        if f.name in _SHORT_FLAGS:
            flags.insert(0, _SHORT_FLAGS[f.name])
        markdown_group.add_argument(
            *flags,
            dest=f.name,
            action=EnvironmentAwareBooleanAction,
            help=f.metadata.get("help"),
        )

    parser.add_argument(
        "-e",
        "--encoding-warnings",
        action=EnvironmentAwareBooleanAction,
        help=_field_help(TranslatorOptions, "encoding_warnings"),
    )

    ambient_group = parser.add_argument_group("Configuration and logging")
    ambient_group.add_argument(
        "--config",
        metavar="PATH",
        help="Configuration file to load (default: MD2BB_CONFIG, then discovery)",
    )
    ambient_group.add_argument(
        "--log-level",
        action=EnvironmentAwareAction,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging level (default: WARNING)",
    )
    ambient_group.add_argument(
        "--log-file",
        action=EnvironmentAwareAction,
        default=None,
        metavar="PATH",
        help="Also write log output to this file",
    )
    ambient_group.add_argument(
        "--trace",
        action=EnvironmentAwareBooleanAction,
        help="Log with timestamps and logger names",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_package_version('md2bb') or 'unknown'}")

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, TranslationError):
        return EXIT_TRANSLATION_ERROR

    return EXIT_ERROR
