#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2bb/api.py
"""High-level conversion API for md2bb.

This module provides :func:`markdown_to_bbcode`, which chains the Markdown
event source and the BBCode translator, trims the result, and optionally
writes it to a file or stream.

Examples
--------
Convert a Markdown string for a XenForo board:

    >>> from md2bb import markdown_to_bbcode
    >>> markdown_to_bbcode("# Hello", "xenforo")
    '[size="7"][b][u]Hello[/u][/b][/size]'

Enable GFM tables through keyword arguments:

    >>> bbcode = markdown_to_bbcode(text, "proboards", parse_tables=True)

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from md2bb.constants import Dialect
from md2bb.diagnostics import DiagnosticSink
from md2bb.dialects import validate_dialect
from md2bb.exceptions import InvalidOptionsError
from md2bb.options import MarkdownParserOptions, TranslatorOptions
from md2bb.parsers.markdown import MarkdownEventParser
from md2bb.translator import BBCodeTranslator
from md2bb.utils.decorators import debug_timer
from md2bb.utils.io_utils import TextDestination, TextSource, read_text_input, write_text_output

logger = logging.getLogger(__name__)


def _create_options_from_kwargs(
    parser_options: Optional[MarkdownParserOptions], kwargs: dict[str, Any]
) -> MarkdownParserOptions:
    """Merge keyword overrides into parser options.

    Keys that are not fields of :class:`MarkdownParserOptions` are logged
    and ignored.
    """
    if parser_options is not None and not isinstance(parser_options, MarkdownParserOptions):
        raise InvalidOptionsError(
            component_name="markdown",
            expected_type=MarkdownParserOptions,
            received_type=type(parser_options),
        )
    base = parser_options or MarkdownParserOptions()

    valid_fields = set(MarkdownParserOptions.field_names())
    overrides = {k: v for k, v in kwargs.items() if k in valid_fields}

    for key in kwargs.keys() - valid_fields:
        logger.debug("Ignoring unknown option: %s", key)

    if not overrides:
        return base
    return base.create_updated(**overrides)


def markdown_to_bbcode(
    source: TextSource,
    dialect: Dialect,
    output: Optional[TextDestination] = None,
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    encoding_warnings: bool = False,
    sink: Optional[DiagnosticSink] = None,
    **kwargs: Any,
) -> Optional[str]:
    """Convert Markdown to BBCode for one forum dialect.

    Parameters
    ----------
    source : str, Path, or file-like
        Markdown text, a path to a Markdown file, or a readable stream.
        A plain ``str`` is always treated as Markdown content.
    dialect : {"xenforo", "proboards"}
        Target BBCode dialect
    output : str, Path, file-like, or None, default = None
        Destination for the BBCode. When None, the BBCode is returned.
    parser_options : MarkdownParserOptions or None, default = None
        Markdown extension toggles
    encoding_warnings : bool, default False
        Report characters the dialect cannot store
    sink : DiagnosticSink or None, default = None
        Receiver of warnings; logs them when omitted
    **kwargs
        Individual :class:`MarkdownParserOptions` fields, overriding
        ``parser_options`` (e.g. ``parse_tables=True``)

    Returns
    -------
    str or None
        Trimmed BBCode when ``output`` is None, otherwise None

    Raises
    ------
    InvalidDialectError
        If ``dialect`` is not supported
    MalformedInlineMarkupError
        If a ``<summary>`` element spans more than one line
    FileError
        If ``source`` or ``output`` cannot be read or written
    DependencyError
        If mistune is not installed

    """
    validate_dialect(dialect)
    options = _create_options_from_kwargs(parser_options, kwargs)
    translator = BBCodeTranslator(TranslatorOptions(dialect=dialect, encoding_warnings=encoding_warnings), sink)

    markdown_content = read_text_input(source)

    with debug_timer(logger, f"Conversion ({dialect})"):
        events = MarkdownEventParser(options).parse(markdown_content)
        bbcode = translator.translate(events).strip()

    if output is None:
        return bbcode

    write_text_output(bbcode, output)
    return None
