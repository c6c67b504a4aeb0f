#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2bb/parsers/markdown.py
"""Markdown to document events.

This module turns Markdown text into the flat event stream consumed by
:class:`~md2bb.translator.BBCodeTranslator`. Parsing is delegated to mistune;
this module only walks mistune's token tree depth-first and yields a
``StartTag``/``EndTag`` pair around every container.

Token mapping notes
-------------------
- Tight list items hold ``block_text`` tokens, which produce inline events
  without a surrounding paragraph.
- Block-level HTML is yielded one line at a time as ``RawInline`` events, so
  ``<details>`` and ``<summary>...</summary>`` lines reach the raw markup
  handler separately.
- Image alt text is carried on the ``Image`` tag instead of as text events.
- Entity and numeric character references in text, titles and alt text are
  decoded; code spans and code blocks keep them literally.
- Smart punctuation runs over the whole inline run of a block, so quotes
  next to emphasis or code spans are curled the right way.
- mistune only emits footnote definitions that are referenced, at the end of
  the document, with normalized (lower-cased) labels.

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Optional

from md2bb.constants import DEPS_MARKDOWN
from md2bb.events import (
    BlockQuote,
    CodeBlock,
    Emphasis,
    EndTag,
    Event,
    FootnoteDefinition,
    FootnoteReference,
    HardBreak,
    Heading,
    Image,
    InlineCode,
    Link,
    List,
    ListItem,
    Paragraph,
    RawInline,
    SoftBreak,
    StartTag,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableHead,
    TableRow,
    Tag,
    TaskListMarker,
    Text,
    ThematicBreak,
)
from md2bb.exceptions import InvalidOptionsError, ParsingError
from md2bb.options import MarkdownParserOptions
from md2bb.utils.decorators import requires_dependencies
from md2bb.utils.text import decode_entities, smarten_punctuation

logger = logging.getLogger(__name__)

Token = dict[str, Any]

# Tokens that carry no content
_SILENT_TOKENS = {"blank_line"}

_VALID_ALIGNMENTS = {"left", "center", "right"}

# Tags that do not interrupt a run of inline text
_INLINE_TAGS = (Emphasis, Strong, Strikethrough, Link)

# Quote context left by an image with no alt text
_INLINE_OBJECT = "\ufffc"


class MarkdownEventParser:
    r"""Convert Markdown text into document events.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration; plain CommonMark when omitted

    Examples
    --------
        >>> parser = MarkdownEventParser()
        >>> list(parser.parse("*hi*"))  # doctest: +NORMALIZE_WHITESPACE
        [StartTag(tag=Paragraph()), StartTag(tag=Emphasis()), Text(content='hi'),
         EndTag(tag=Emphasis()), EndTag(tag=Paragraph())]

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        if options is not None and not isinstance(options, MarkdownParserOptions):
            raise InvalidOptionsError(
                component_name="markdown",
                expected_type=MarkdownParserOptions,
                received_type=type(options),
            )
        self.options: MarkdownParserOptions = options or MarkdownParserOptions()

        self._block_handlers: dict[str, Callable[[Token], Iterator[Event]]] = {
            "heading": self._heading,
            "paragraph": self._paragraph,
            "block_text": self._block_text,
            "block_code": self._code_block,
            "block_quote": self._block_quote,
            "list": self._list,
            "list_item": self._list_item,
            "task_list_item": self._list_item,
            "thematic_break": self._thematic_break,
            "block_html": self._block_html,
            "table": self._table,
            "footnotes": self._footnotes,
        }
        self._inline_handlers: dict[str, Callable[[Token], Iterator[Event]]] = {
            "text": self._text,
            "emphasis": self._container(Emphasis()),
            "strong": self._container(Strong()),
            "strikethrough": self._container(Strikethrough()),
            "codespan": self._codespan,
            "link": self._link,
            "image": self._image,
            "linebreak": self._linebreak,
            "softbreak": self._softbreak,
            "inline_html": self._inline_html,
            "footnote_ref": self._footnote_ref,
        }

    def _plugins(self) -> list[str]:
        plugins = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append("table")
        if self.options.parse_footnotes:
            plugins.append("footnotes")
        if self.options.parse_task_lists:
            plugins.append("task_lists")
        return plugins

    # Rejects missing or pre-3.0 mistune before any token is read
    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, markdown_content: str) -> Iterator[Event]:
        """Parse Markdown text into a lazy stream of events.

        Parameters
        ----------
        markdown_content : str
            Markdown source text

        Returns
        -------
        iterator of Event
            Document events in order

        Raises
        ------
        DependencyError
            If mistune is not installed
        ParsingError
            If mistune returns something other than a token list

        """
        import mistune

        markdown = mistune.create_markdown(plugins=self._plugins(), renderer=None)
        tokens, _state = markdown.parse(markdown_content)

        if not isinstance(tokens, list):
            raise ParsingError(
                f"Unexpected mistune output of type {type(tokens).__name__}", parsing_stage="tokenize"
            )

        logger.debug("Parsed %d top-level Markdown tokens", len(tokens))
        events = self._blocks(tokens)
        if self.options.smart_punctuation:
            events = self._smarten(events)
        return events

    def _smarten(self, events: Iterator[Event]) -> Iterator[Event]:
        """Apply smart punctuation to text events.

        The character before each text run is carried across inline events
        (emphasis, links, code spans, breaks) so that a quote directly after
        ``*hi*`` or a code span closes instead of opening. Block boundaries
        reset it. Code block contents are left alone.
        """
        preceding = ""
        in_code_block = False
        for event in events:
            if isinstance(event, Text):
                if not in_code_block:
                    event = Text(smarten_punctuation(event.content, preceding))
                    preceding = event.content[-1:] or preceding
            elif isinstance(event, (StartTag, EndTag)):
                tag = event.tag
                if isinstance(tag, CodeBlock):
                    in_code_block = isinstance(event, StartTag)
                if isinstance(tag, Image):
                    preceding = tag.alt_text[-1:] or _INLINE_OBJECT
                elif not isinstance(tag, _INLINE_TAGS):
                    preceding = ""
            elif isinstance(event, InlineCode):
                preceding = event.content[-1:] or preceding
            elif isinstance(event, RawInline):
                preceding = event.content[-1:] or preceding
            elif isinstance(event, FootnoteReference):
                preceding = event.identifier[-1:] or preceding
            elif isinstance(event, HardBreak):
                preceding = "\n"
            elif isinstance(event, (SoftBreak, TaskListMarker)):
                preceding = " "
            yield event

    def _blocks(self, tokens: list[Token]) -> Iterator[Event]:
        for token in tokens:
            token_type = token.get("type", "")
            handler = self._block_handlers.get(token_type)
            if handler is not None:
                yield from handler(token)
            elif token_type not in _SILENT_TOKENS:
                logger.debug("Skipping unsupported block token: %s", token_type)

    def _inlines(self, tokens: list[Token]) -> Iterator[Event]:
        for token in tokens:
            token_type = token.get("type", "")
            handler = self._inline_handlers.get(token_type)
            if handler is not None:
                yield from handler(token)
            elif "raw" in token:
                logger.debug("Treating unsupported inline token %s as text", token_type)
                yield Text(token["raw"])
            else:
                logger.debug("Skipping unsupported inline token: %s", token_type)

    @staticmethod
    def _children(token: Token) -> list[Token]:
        children = token.get("children", [])
        return children if isinstance(children, list) else []

    @staticmethod
    def _attrs(token: Token) -> dict[str, Any]:
        attrs = token.get("attrs", {})
        return attrs if isinstance(attrs, dict) else {}

    def _wrap(self, tag: Tag, inner: Iterator[Event]) -> Iterator[Event]:
        yield StartTag(tag)
        yield from inner
        yield EndTag(tag)

    # Block tokens

    def _heading(self, token: Token) -> Iterator[Event]:
        level = self._attrs(token).get("level", 1)
        if not isinstance(level, int) or not 1 <= level <= 6:
            level = 1
        return self._wrap(Heading(level), self._inlines(self._children(token)))

    def _paragraph(self, token: Token) -> Iterator[Event]:
        return self._wrap(Paragraph(), self._inlines(self._children(token)))

    def _block_text(self, token: Token) -> Iterator[Event]:
        return self._inlines(self._children(token))

    def _code_block(self, token: Token) -> Iterator[Event]:
        info = self._attrs(token).get("info") or ""
        parts = info.strip().split(maxsplit=1)
        tag = CodeBlock(language=parts[0] if parts else None)

        yield StartTag(tag)
        code = token.get("raw", "")
        if code:
            yield Text(code)
        yield EndTag(tag)

    def _block_quote(self, token: Token) -> Iterator[Event]:
        return self._wrap(BlockQuote(), self._blocks(self._children(token)))

    def _list(self, token: Token) -> Iterator[Event]:
        attrs = self._attrs(token)
        ordered = bool(attrs.get("ordered", False))
        start: Optional[int] = attrs.get("start") if ordered else None
        return self._wrap(List(ordered=ordered, start=start), self._blocks(self._children(token)))

    def _list_item(self, token: Token) -> Iterator[Event]:
        tag = ListItem()
        yield StartTag(tag)
        attrs = self._attrs(token)
        if token.get("type") == "task_list_item" and "checked" in attrs:
            yield TaskListMarker(bool(attrs["checked"]))
        yield from self._blocks(self._children(token))
        yield EndTag(tag)

    def _thematic_break(self, token: Token) -> Iterator[Event]:
        yield ThematicBreak()

    def _block_html(self, token: Token) -> Iterator[Event]:
        for line in token.get("raw", "").splitlines(keepends=True):
            yield RawInline(line)

    def _table(self, token: Token) -> Iterator[Event]:
        sections = self._children(token)
        alignments: tuple = ()
        for section in sections:
            if section.get("type") == "table_head":
                alignments = tuple(self._alignment(cell) for cell in self._children(section))

        tag = Table(alignments=alignments)
        yield StartTag(tag)
        for section in sections:
            section_type = section.get("type")
            if section_type == "table_head":
                yield from self._wrap(TableHead(), self._cells(self._children(section)))
            elif section_type == "table_body":
                for row in self._children(section):
                    yield from self._wrap(TableRow(), self._cells(self._children(row)))
        yield EndTag(tag)

    def _alignment(self, cell: Token) -> Optional[str]:
        align = self._attrs(cell).get("align")
        return align if align in _VALID_ALIGNMENTS else None

    def _cells(self, cells: list[Token]) -> Iterator[Event]:
        for cell in cells:
            yield from self._wrap(TableCell(), self._inlines(self._children(cell)))

    def _footnotes(self, token: Token) -> Iterator[Event]:
        for item in self._children(token):
            attrs = self._attrs(item)
            identifier = str(attrs.get("key", attrs.get("index", "")))
            yield from self._wrap(FootnoteDefinition(identifier), self._blocks(self._children(item)))

    # Inline tokens

    def _text(self, token: Token) -> Iterator[Event]:
        # Backslash-escaped characters arrive as separate text tokens, so a
        # literal "\&amp;" is never decoded here
        yield Text(decode_entities(token.get("raw", "")))

    def _container(self, tag: Tag) -> Callable[[Token], Iterator[Event]]:
        def handle(token: Token) -> Iterator[Event]:
            return self._wrap(tag, self._inlines(self._children(token)))

        return handle

    def _codespan(self, token: Token) -> Iterator[Event]:
        yield InlineCode(token.get("raw", ""))

    @staticmethod
    def _title(attrs: dict[str, Any]) -> Optional[str]:
        title = attrs.get("title")
        return decode_entities(title) if isinstance(title, str) else None

    def _link(self, token: Token) -> Iterator[Event]:
        attrs = self._attrs(token)
        # mistune has already decoded entities in the url
        tag = Link(url=attrs.get("url", ""), title=self._title(attrs))
        return self._wrap(tag, self._inlines(self._children(token)))

    def _image(self, token: Token) -> Iterator[Event]:
        attrs = self._attrs(token)
        tag = Image(
            url=attrs.get("url", ""),
            alt_text=self._plain_text(self._children(token)),
            title=self._title(attrs),
        )
        yield StartTag(tag)
        yield EndTag(tag)

    def _plain_text(self, tokens: list[Token]) -> str:
        parts = []
        for token in tokens:
            if "raw" in token:
                raw = token["raw"]
                parts.append(decode_entities(raw) if token.get("type") == "text" else raw)
            parts.append(self._plain_text(self._children(token)))
        return "".join(parts)

    def _linebreak(self, token: Token) -> Iterator[Event]:
        yield HardBreak()

    def _softbreak(self, token: Token) -> Iterator[Event]:
        yield SoftBreak()

    def _inline_html(self, token: Token) -> Iterator[Event]:
        yield RawInline(token.get("raw", ""))

    def _footnote_ref(self, token: Token) -> Iterator[Event]:
        identifier = token.get("raw") or self._attrs(token).get("label", "")
        yield FootnoteReference(str(identifier))


def markdown_to_events(markdown_content: str, options: MarkdownParserOptions | None = None) -> Iterator[Event]:
    r"""Convert a Markdown string into document events.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    iterator of Event
        Document events

    Examples
    --------
    >>> from md2bb.parsers.markdown import markdown_to_events
    >>> events = list(markdown_to_events("# Hello"))
    >>> len(events)
    3

    """
    return MarkdownEventParser(options).parse(markdown_content)
