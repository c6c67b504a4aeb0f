#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2bb/options.py
"""Configuration options for Markdown parsing and BBCode translation.

Options are immutable dataclasses. Each field carries ``metadata["help"]``,
which the CLI reuses for its argument help, and ``create_updated`` returns a
modified copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from md2bb.constants import (
    DEFAULT_ENCODING_WARNINGS,
    DEFAULT_PARSE_FOOTNOTES,
    DEFAULT_PARSE_STRIKETHROUGH,
    DEFAULT_PARSE_TABLES,
    DEFAULT_PARSE_TASK_LISTS,
    DEFAULT_SMART_PUNCTUATION,
    DIALECTS,
    Dialect,
)
from md2bb.dialects import validate_dialect


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def field_names(cls) -> list[str]:
        """Names of the option fields, in declaration order."""
        return [f.name for f in fields(cls)]


@dataclass(frozen=True)
class TranslatorOptions(CloneFrozenMixin):
    """Configuration options for event-to-BBCode translation.

    Parameters
    ----------
    dialect : {"xenforo", "proboards"}
        BBCode dialect to emit
    encoding_warnings : bool, default False
        Report characters the dialect's forum software cannot store

    Examples
    --------
        >>> options = TranslatorOptions(dialect="proboards")
        >>> options.create_updated(encoding_warnings=True).encoding_warnings
        True

    """

    dialect: Dialect = field(
        metadata={"help": "The dialect/flavour of BBCode to emit", "choices": list(DIALECTS)},
    )
    encoding_warnings: bool = field(
        default=DEFAULT_ENCODING_WARNINGS,
        metadata={"help": "Warn about characters the target forum cannot encode"},
    )

    def __post_init__(self) -> None:
        """Validate the dialect name.

        Raises
        ------
        InvalidDialectError
            If ``dialect`` is not a supported dialect

        """
        validate_dialect(self.dialect)


@dataclass(frozen=True)
class MarkdownParserOptions(CloneFrozenMixin):
    """Configuration options for Markdown parsing.

    Every extension is off by default, which parses plain CommonMark.

    Parameters
    ----------
    parse_tables : bool, default False
        Enable GFM pipe tables
    parse_footnotes : bool, default False
        Enable ``[^label]`` footnotes
    parse_strikethrough : bool, default False
        Enable ``~~text~~`` strikethrough
    parse_task_lists : bool, default False
        Enable ``- [ ]`` / ``- [x]`` task list items
    smart_punctuation : bool, default False
        Convert straight quotes, ``--``, ``---`` and ``...`` to typographic
        punctuation

    """

    parse_tables: bool = field(
        default=DEFAULT_PARSE_TABLES,
        metadata={"help": "Enable non-CommonMark (GFM) table syntax", "cli_name": "tables"},
    )
    parse_footnotes: bool = field(
        default=DEFAULT_PARSE_FOOTNOTES,
        metadata={"help": "Enable non-CommonMark (GFM) footnote syntax", "cli_name": "footnotes"},
    )
    parse_strikethrough: bool = field(
        default=DEFAULT_PARSE_STRIKETHROUGH,
        metadata={"help": "Enable non-CommonMark (GFM) strikethrough syntax", "cli_name": "strikethrough"},
    )
    parse_task_lists: bool = field(
        default=DEFAULT_PARSE_TASK_LISTS,
        metadata={"help": "Allow non-CommonMark (GFM) tasklist syntax", "cli_name": "tasklists"},
    )
    smart_punctuation: bool = field(
        default=DEFAULT_SMART_PUNCTUATION,
        metadata={"help": "Enable “smart punctuation”", "cli_name": "smart-punctuation"},
    )
