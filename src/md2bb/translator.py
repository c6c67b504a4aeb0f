#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2bb/translator.py
"""BBCode translation from document events.

This module provides the BBCodeTranslator class, which walks a stream of
:mod:`md2bb.events` exactly once and emits BBCode for the configured dialect.
Markup text comes from :mod:`md2bb.dialects`; raw HTML fragments go through
:mod:`md2bb.raw_markup`.

Whitespace handling
-------------------
Paragraphs are opened with a newline so that consecutive blocks stay apart.
When a paragraph is the first thing inside a list item or footnote
definition, that newline would separate the content from its bullet or
label, so it is skipped. Closing a list item trims trailing whitespace from
the output, which keeps item markers of loose lists on adjacent lines.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from md2bb.constants import Construct, Dialect
from md2bb.diagnostics import Diagnostic, DiagnosticSink, LoggingDiagnosticSink
from md2bb.dialects import OPEN_MARKUP, close_markup, heading_size, open_markup, supports
from md2bb.encoding import validate_encoding
from md2bb.events import (
    EndTag,
    Event,
    FootnoteDefinition,
    FootnoteReference,
    HardBreak,
    Heading,
    Image,
    InlineCode,
    Link,
    ListItem,
    Paragraph,
    RawInline,
    SoftBreak,
    StartTag,
    Tag,
    TaskListMarker,
    Text,
    ThematicBreak,
)
from md2bb.exceptions import InvalidOptionsError
from md2bb.options import TranslatorOptions
from md2bb.raw_markup import classify_raw_markup

logger = logging.getLogger(__name__)


@dataclass
class TranslatorState:
    """Transient state owned by a single translation call.

    Parameters
    ----------
    pending_item_open : bool
        A list item was just opened and has no content yet
    pending_footnote_open : bool
        A footnote definition was just opened and has no content yet
    output : list of str
        Output chunks in order

    """

    pending_item_open: bool = False
    pending_footnote_open: bool = False
    output: list[str] = field(default_factory=list)

    def append(self, text: Optional[str]) -> None:
        if text:
            self.output.append(text)

    def truncate_trailing_whitespace(self) -> None:
        """Drop whitespace at the end of the output."""
        while self.output:
            stripped = self.output[-1].rstrip()
            if stripped:
                self.output[-1] = stripped
                return
            self.output.pop()

    def getvalue(self) -> str:
        return "".join(self.output)


class BBCodeTranslator:
    """Translate a document event stream into BBCode.

    A translator holds only its configuration; every call to
    :meth:`translate` works on fresh state, so one instance may be reused
    and shared between threads.

    Parameters
    ----------
    options : TranslatorOptions
        Dialect and encoding-check settings
    sink : DiagnosticSink or None, default = None
        Receiver of warnings. Defaults to a :class:`LoggingDiagnosticSink`.

    Examples
    --------
        >>> from md2bb.events import StartTag, EndTag, Heading, Text
        >>> translator = BBCodeTranslator(TranslatorOptions(dialect="xenforo"))
        >>> translator.translate([StartTag(Heading(1)), Text("Hello"), EndTag(Heading(1))])
        '\\n[size="7"][b][u]Hello[/u][/b][/size]\\n'

    """

    def __init__(self, options: TranslatorOptions, sink: DiagnosticSink | None = None):
        """Initialize the translator with options and a diagnostic sink."""
        if not isinstance(options, TranslatorOptions):
            raise InvalidOptionsError(
                component_name="translator",
                expected_type=TranslatorOptions,
                received_type=type(options),
            )
        self.options = options
        self.sink: DiagnosticSink = sink if sink is not None else LoggingDiagnosticSink()

    @property
    def dialect(self) -> Dialect:
        return self.options.dialect

    def translate(self, events: Iterable[Event]) -> str:
        """Translate ``events`` into a BBCode string.

        Parameters
        ----------
        events : iterable of Event
            Document events; consumed once, lazily, in order

        Returns
        -------
        str
            BBCode text, untrimmed

        Raises
        ------
        MalformedInlineMarkupError
            If a ``<summary>`` element is split across raw markup fragments

        """
        state = TranslatorState()
        handlers = self._event_handlers()

        for event in events:
            handler = handlers.get(type(event))
            if handler is None:
                self._warn(f"Unrecognised event: {event!r}")
                continue
            handler(state, event)

        result = state.getvalue()

        if self.options.encoding_warnings:
            for diagnostic in validate_encoding(result, self.dialect):
                self.sink.warn(diagnostic)

        logger.debug("Translated %d characters of %s BBCode", len(result), self.dialect)
        return result

    def _event_handlers(self) -> dict[type, Callable[[TranslatorState, Any], None]]:
        return {
            StartTag: self._start_tag,
            EndTag: self._end_tag,
            Text: self._text,
            InlineCode: self._inline_code,
            RawInline: self._raw_inline,
            FootnoteReference: self._footnote_reference,
            SoftBreak: self._atom("soft_break"),
            HardBreak: self._atom("hard_break"),
            ThematicBreak: self._atom("thematic_break"),
            TaskListMarker: self._task_list_marker,
        }

    def _warn(self, message: str) -> None:
        self.sink.warn(Diagnostic("unrecognized-construct", message))

    def _construct_of(self, tag: Tag) -> Construct | None:
        try:
            construct = tag.construct
        except (AttributeError, NotImplementedError):
            construct = None
        if construct is None or (construct, self.dialect) not in OPEN_MARKUP:
            self._warn(f"Unrecognised tag: {tag!r}")
            return None
        return construct

    def _start_tag(self, state: TranslatorState, event: StartTag) -> None:
        tag = event.tag
        construct = self._construct_of(tag)
        if construct is None:
            return

        if isinstance(tag, Paragraph):
            if state.pending_item_open or state.pending_footnote_open:
                state.pending_item_open = False
                state.pending_footnote_open = False
                return
        elif isinstance(tag, ListItem):
            state.pending_item_open = True
            state.pending_footnote_open = False
        elif isinstance(tag, FootnoteDefinition):
            state.pending_footnote_open = True
            state.pending_item_open = False

        if not supports(construct, self.dialect):
            self._warn(f"{self.dialect} has no equivalent for {construct}")
            return
        state.append(self._open(construct, tag))

    def _end_tag(self, state: TranslatorState, event: EndTag) -> None:
        construct = self._construct_of(event.tag)
        if construct is None:
            return

        if isinstance(event.tag, ListItem):
            state.truncate_trailing_whitespace()

        state.append(close_markup(construct, self.dialect))

    def _open(self, construct: Construct, tag: Tag) -> Optional[str]:
        if isinstance(tag, Heading):
            return open_markup(construct, self.dialect, size=heading_size(tag.level, self.dialect))
        if isinstance(tag, Link):
            # Link titles have no BBCode representation
            return open_markup(construct, self.dialect, url=tag.url)
        if isinstance(tag, Image):
            return open_markup(construct, self.dialect, url=tag.url, alt=tag.alt_text)
        if isinstance(tag, FootnoteDefinition):
            return open_markup(construct, self.dialect, identifier=tag.identifier)
        return open_markup(construct, self.dialect)

    def _text(self, state: TranslatorState, event: Text) -> None:
        state.append(event.content)

    def _inline_code(self, state: TranslatorState, event: InlineCode) -> None:
        state.append(open_markup("inline_code", self.dialect))
        state.append(event.content)
        state.append(close_markup("inline_code", self.dialect))

    def _raw_inline(self, state: TranslatorState, event: RawInline) -> None:
        result = classify_raw_markup(event.content, self.dialect)
        if result.diagnostic is not None:
            self.sink.warn(result.diagnostic)
        if result.action != "suppress":
            state.append(result.text)

    def _footnote_reference(self, state: TranslatorState, event: FootnoteReference) -> None:
        state.append(open_markup("footnote_reference", self.dialect, identifier=event.identifier))

    def _task_list_marker(self, state: TranslatorState, event: TaskListMarker) -> None:
        state.append(open_markup("task_checked" if event.checked else "task_unchecked", self.dialect))

    def _atom(self, construct: Construct) -> Callable[[TranslatorState, Any], None]:
        def emit(state: TranslatorState, event: Event) -> None:
            state.append(open_markup(construct, self.dialect))

        return emit


def translate(
    events: Iterable[Event],
    dialect: Dialect,
    validate_encoding: bool = False,
    sink: DiagnosticSink | None = None,
) -> str:
    """Translate document events into BBCode.

    Convenience wrapper that builds a :class:`BBCodeTranslator` for a single
    call.

    Parameters
    ----------
    events : iterable of Event
        Document events
    dialect : {"xenforo", "proboards"}
        Target dialect
    validate_encoding : bool, default False
        Report characters the dialect cannot store
    sink : DiagnosticSink or None, default = None
        Receiver of warnings; logs them when omitted

    Returns
    -------
    str
        BBCode text, untrimmed

    Raises
    ------
    InvalidDialectError
        If ``dialect`` is not supported
    MalformedInlineMarkupError
        If a ``<summary>`` element is split across raw markup fragments

    """
    options = TranslatorOptions(dialect=dialect, encoding_warnings=validate_encoding)
    return BBCodeTranslator(options, sink).translate(events)
