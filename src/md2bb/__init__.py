"""md2bb - Markdown to forum BBCode.

md2bb converts Markdown into the BBCode dialects of two forum platforms,
XenForo and ProBoards. Markdown is parsed by mistune into a flat stream of
document events; :class:`BBCodeTranslator` walks that stream once and emits
the markup the target dialect understands.

Key Features
------------
- Per-dialect markup tables for every structural construct
- Optional GFM tables, footnotes, strikethrough and task lists
- A small whitelist of inline HTML (``<sup>``, ``<del>``, ``<details>`` ...)
- Optional warnings for characters a XenForo database cannot store
- Smart punctuation

Requirements
------------
- Python 3.10+
- mistune 3

Examples
--------
Convert a Markdown string:

    >>> from md2bb import markdown_to_bbcode
    >>> markdown_to_bbcode("- item", "xenforo")
    '[list]\\n[*]item\\n[/list]'

Translate an event stream directly and collect warnings:

    >>> from md2bb import CollectingDiagnosticSink, translate
    >>> from md2bb.events import RawInline
    >>> sink = CollectingDiagnosticSink()
    >>> translate([RawInline("<blink>")], "proboards", sink=sink)
    '<blink>'
    >>> sink.messages
    ['Unrecognised HTML tag: <blink>']

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from md2bb.api import markdown_to_bbcode
from md2bb.constants import DIALECTS, Dialect
from md2bb.diagnostics import CollectingDiagnosticSink, Diagnostic, DiagnosticSink, LoggingDiagnosticSink
from md2bb.exceptions import (
    DependencyError,
    FileError,
    InvalidDialectError,
    MalformedInlineMarkupError,
    Md2BBError,
    ParsingError,
    TranslationError,
    ValidationError,
)
from md2bb.options import MarkdownParserOptions, TranslatorOptions
from md2bb.parsers.markdown import MarkdownEventParser, markdown_to_events
from md2bb.translator import BBCodeTranslator, translate

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Conversion
    "markdown_to_bbcode",
    "markdown_to_events",
    "translate",
    "BBCodeTranslator",
    "MarkdownEventParser",
    # Options
    "TranslatorOptions",
    "MarkdownParserOptions",
    "Dialect",
    "DIALECTS",
    # Diagnostics
    "Diagnostic",
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "CollectingDiagnosticSink",
    # Exceptions
    "Md2BBError",
    "ValidationError",
    "InvalidDialectError",
    "FileError",
    "ParsingError",
    "TranslationError",
    "MalformedInlineMarkupError",
    "DependencyError",
]
