#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for md2bb.

Reads Markdown from a file or stdin and writes BBCode for one forum dialect
to a file or stdout. The output is trimmed and followed by a single newline.

Environment Variable Support
----------------------------
Every option can be given a default through ``MD2BB_<OPTION_NAME>``, where
the option's destination name is upper-cased (``MD2BB_DIALECT``,
``MD2BB_PARSE_TABLES``, ``MD2BB_ENCODING_WARNINGS``). Command-line arguments
override environment variables, which override configuration files.

Examples
--------
Convert a file for XenForo::

    $ md2bb -d xenforo -i post.md -o post.bbcode

Pipe through with GFM tables and footnotes::

    $ cat post.md | md2bb --dialect proboards --tables --footnotes

Use environment variables for defaults::

    $ export MD2BB_DIALECT=xenforo
    $ export MD2BB_PARSE_STRIKETHROUGH=true
    $ md2bb -i post.md

"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from md2bb.api import markdown_to_bbcode
from md2bb.cli.builder import (
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
)
from md2bb.cli.config import CONFIG_ENV_VAR, apply_config_defaults, load_config_with_priority
from md2bb.exceptions import Md2BBError
from md2bb.logging_utils import configure_logging
from md2bb.options import MarkdownParserOptions
from md2bb.utils.io_utils import read_text_file, write_text_output

logger = logging.getLogger(__name__)


def _parser_options_from_args(parsed_args: argparse.Namespace) -> MarkdownParserOptions:
    values = {}
    for name in MarkdownParserOptions.field_names():
        value = getattr(parsed_args, name, None)
        if value is not None:
            values[name] = bool(value)
    return MarkdownParserOptions(**values)


def _read_input(input_path: Optional[str]) -> str:
    if input_path is None or input_path == "-":
        return sys.stdin.read()
    return read_text_file(Path(input_path))


def _write_output(bbcode: str, output_path: Optional[str]) -> None:
    text = f"{bbcode}\n"
    if output_path is None or output_path == "-":
        sys.stdout.write(text)
        sys.stdout.flush()
    else:
        write_text_output(text, Path(output_path))


def convert(parsed_args: argparse.Namespace) -> int:
    """Run one conversion from fully resolved arguments.

    Returns
    -------
    int
        Exit code

    """
    if not parsed_args.dialect:
        print("Error: A dialect is required (--dialect, MD2BB_DIALECT or a config file)", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        markdown_content = _read_input(parsed_args.input)
        bbcode = markdown_to_bbcode(
            markdown_content,
            parsed_args.dialect,
            parser_options=_parser_options_from_args(parsed_args),
            encoding_warnings=bool(parsed_args.encoding_warnings),
        )
        _write_output(bbcode or "", parsed_args.output)
    except Md2BBError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print(f"Error: Unexpected error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the md2bb command line."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    try:
        config = load_config_with_priority(
            explicit_path=parsed_args.config,
            env_var_path=os.environ.get(CONFIG_ENV_VAR),
        )
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    apply_config_defaults(parsed_args, config)

    configure_logging(
        parsed_args.log_level,
        log_file=parsed_args.log_file,
        trace_mode=bool(parsed_args.trace),
    )

    return convert(parsed_args)


if __name__ == "__main__":
    sys.exit(main())
