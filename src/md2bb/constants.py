#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the md2bb library.

This module centralizes the literal types, marker characters and default
configuration values used across md2bb.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Marker Characters - Glyphs emitted for footnotes, task lists and rules
3. Defaults - Default option values
4. Dependency Specifications - Packages checked by @requires_dependencies
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

# Supported BBCode dialects
Dialect = Literal["xenforo", "proboards"]

DIALECTS: tuple[Dialect, ...] = ("xenforo", "proboards")

# Structural constructs understood by the dialect policy
Construct = Literal[
    "paragraph",
    "heading",
    "block_quote",
    "code_block",
    "ordered_list",
    "unordered_list",
    "list_item",
    "footnote_definition",
    "table",
    "table_head",
    "table_row",
    "table_cell",
    "emphasis",
    "strong",
    "strikethrough",
    "superscript",
    "subscript",
    "link",
    "image",
    "inline_code",
    "footnote_reference",
    "thematic_break",
    "hard_break",
    "soft_break",
    "task_checked",
    "task_unchecked",
    "disclosure",
    "disclosure_label",
]

# Diagnostic categories reported through a DiagnosticSink
DiagnosticKind = Literal["unrecognized-construct", "encoding-range"]

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# =============================================================================
# Marker Characters
# =============================================================================

# Bracket pair wrapping footnote identifiers (TOP LEFT / TOP RIGHT CORNER)
FOOTNOTE_OPEN_MARK = "\u231c"
FOOTNOTE_CLOSE_MARK = "\u231d"

# Task list markers, each followed by a NO-BREAK SPACE
TASK_CHECKED_MARK = "\u2611"
TASK_UNCHECKED_MARK = "\u2610"
NO_BREAK_SPACE = "\u00a0"

# XenForo has no [hr]; a run of BOX DRAWINGS HEAVY HORIZONTAL stands in
XENFORO_RULE = "\u2501" * 32

# First code point that a UCS-2 runtime cannot hold as a character
UCS2_LIMIT = 0xFFFE

# Prefix of raw markup fragments treated as comments
COMMENT_PREFIX = "<!"

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_ENCODING_WARNINGS = False

DEFAULT_PARSE_TABLES = False
DEFAULT_PARSE_FOOTNOTES = False
DEFAULT_PARSE_STRIKETHROUGH = False
DEFAULT_PARSE_TASK_LISTS = False
DEFAULT_SMART_PUNCTUATION = False

DEFAULT_LOG_LEVEL: LogLevel = "WARNING"

# Environment variable prefix for CLI option defaults
ENV_PREFIX = "MD2BB_"

# =============================================================================
# Dependency Specifications for @requires_dependencies decorator
# =============================================================================
# Each spec is a list of tuples: (pip_package, import_name, version_constraint)

# mistune is a required dependency, but an environment can still hold a 2.x
# install, whose token tree this adapter cannot read. The version check turns
# that into a DependencyError (CLI exit code 2).
DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
