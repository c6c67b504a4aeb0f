#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2bb/events.py
"""Document event vocabulary consumed by the BBCode translator.

A Markdown document reaches the translator as a flat, ordered stream of
events rather than as a tree. Block and inline containers are bracketed by
``StartTag``/``EndTag`` pairs carrying the same tag value; leaf content
arrives as standalone events.

Tag kinds
---------
Paragraph, Heading, BlockQuote, CodeBlock, List, ListItem,
FootnoteDefinition, Table, TableHead, TableRow, TableCell, Emphasis,
Strong, Strikethrough, Link, Image

Events
------
StartTag, EndTag, Text, InlineCode, RawInline, FootnoteReference,
SoftBreak, HardBreak, ThematicBreak, TaskListMarker

Every tag exposes a ``construct`` name, the key used to look up its markup in
:mod:`md2bb.dialects`. Some tags carry parser information (code block
language, list start number, table alignments, link titles) that no BBCode
dialect can represent; the translator ignores those fields.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union

from md2bb.constants import Construct

Alignment = Literal["left", "center", "right"]


@dataclass(frozen=True)
class Tag:
    """Base class for container tags."""

    @property
    def construct(self) -> Construct:
        """Dialect policy key for this tag."""
        raise NotImplementedError(f"{type(self).__name__} has no construct mapping")


@dataclass(frozen=True)
class Paragraph(Tag):
    """Paragraph of inline content."""

    @property
    def construct(self) -> Construct:
        return "paragraph"


@dataclass(frozen=True)
class Heading(Tag):
    """Heading node (h1-h6).

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)

    """

    level: int

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    @property
    def construct(self) -> Construct:
        return "heading"


@dataclass(frozen=True)
class BlockQuote(Tag):
    """Block quotation."""

    @property
    def construct(self) -> Construct:
        return "block_quote"


@dataclass(frozen=True)
class CodeBlock(Tag):
    """Fenced or indented code block.

    Parameters
    ----------
    language : str or None, default = None
        Info-string language; BBCode has nowhere to put it

    """

    language: Optional[str] = None

    @property
    def construct(self) -> Construct:
        return "code_block"


@dataclass(frozen=True)
class List(Tag):
    """Ordered or unordered list.

    Parameters
    ----------
    ordered : bool
        Whether the list is numbered
    start : int or None, default = None
        Starting number of an ordered list. Forum software does not honour a
        start offset reliably, so this is never rendered.

    """

    ordered: bool
    start: Optional[int] = None

    @property
    def construct(self) -> Construct:
        return "ordered_list" if self.ordered else "unordered_list"


@dataclass(frozen=True)
class ListItem(Tag):
    """Single item of a list."""

    @property
    def construct(self) -> Construct:
        return "list_item"


@dataclass(frozen=True)
class FootnoteDefinition(Tag):
    """Footnote body.

    Parameters
    ----------
    identifier : str
        Footnote label, as written in the source

    """

    identifier: str

    @property
    def construct(self) -> Construct:
        return "footnote_definition"


@dataclass(frozen=True)
class Table(Tag):
    """Table container.

    Parameters
    ----------
    alignments : tuple, default = ()
        Per-column alignment hints; ignored by every dialect

    """

    alignments: tuple[Optional[Alignment], ...] = ()

    @property
    def construct(self) -> Construct:
        return "table"


@dataclass(frozen=True)
class TableHead(Tag):
    """Header row of a table. Contains cells directly."""

    @property
    def construct(self) -> Construct:
        return "table_head"


@dataclass(frozen=True)
class TableRow(Tag):
    """Body row of a table."""

    @property
    def construct(self) -> Construct:
        return "table_row"


@dataclass(frozen=True)
class TableCell(Tag):
    """Table cell."""

    @property
    def construct(self) -> Construct:
        return "table_cell"


@dataclass(frozen=True)
class Emphasis(Tag):
    """Emphasized (italic) text."""

    @property
    def construct(self) -> Construct:
        return "emphasis"


@dataclass(frozen=True)
class Strong(Tag):
    """Strong (bold) text."""

    @property
    def construct(self) -> Construct:
        return "strong"


@dataclass(frozen=True)
class Strikethrough(Tag):
    """Struck-through text."""

    @property
    def construct(self) -> Construct:
        return "strikethrough"


@dataclass(frozen=True)
class Link(Tag):
    """Hyperlink.

    Parameters
    ----------
    url : str
        Link destination
    title : str or None, default = None
        Link title attribute; dialects have no representation for it

    """

    url: str
    title: Optional[str] = None

    @property
    def construct(self) -> Construct:
        return "link"


@dataclass(frozen=True)
class Image(Tag):
    """Image.

    The alt text travels on the tag itself, so no text events appear between
    an image's start and end.

    Parameters
    ----------
    url : str
        Image source
    alt_text : str, default = ""
        Alternative text, kept only by dialects with an attribute-style tag
    title : str or None, default = None
        Image title; never rendered

    """

    url: str
    alt_text: str = ""
    title: Optional[str] = None

    @property
    def construct(self) -> Construct:
        return "image"


@dataclass(frozen=True)
class StartTag:
    """Opening of a container tag."""

    tag: Tag


@dataclass(frozen=True)
class EndTag:
    """Closing of a container tag; carries the same tag as its StartTag."""

    tag: Tag


@dataclass(frozen=True)
class Text:
    """Run of literal text."""

    content: str


@dataclass(frozen=True)
class InlineCode:
    """Inline code span."""

    content: str


@dataclass(frozen=True)
class RawInline:
    """Fragment of raw HTML passed through by the parser.

    Block-level HTML arrives one line per fragment.
    """

    content: str


@dataclass(frozen=True)
class FootnoteReference:
    """Reference to a footnote definition."""

    identifier: str


@dataclass(frozen=True)
class SoftBreak:
    """Line ending inside a paragraph."""


@dataclass(frozen=True)
class HardBreak:
    """Explicit line break."""


@dataclass(frozen=True)
class ThematicBreak:
    """Horizontal rule."""


@dataclass(frozen=True)
class TaskListMarker:
    """Checkbox at the start of a task list item."""

    checked: bool


Event = Union[
    StartTag,
    EndTag,
    Text,
    InlineCode,
    RawInline,
    FootnoteReference,
    SoftBreak,
    HardBreak,
    ThematicBreak,
    TaskListMarker,
]

__all__ = [
    "Alignment",
    "Tag",
    "Paragraph",
    "Heading",
    "BlockQuote",
    "CodeBlock",
    "List",
    "ListItem",
    "FootnoteDefinition",
    "Table",
    "TableHead",
    "TableRow",
    "TableCell",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Link",
    "Image",
    "StartTag",
    "EndTag",
    "Text",
    "InlineCode",
    "RawInline",
    "FootnoteReference",
    "SoftBreak",
    "HardBreak",
    "ThematicBreak",
    "TaskListMarker",
    "Event",
]
