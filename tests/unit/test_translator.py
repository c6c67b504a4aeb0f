"""Unit tests for the event-to-BBCode translator."""

import logging

import pytest

from md2bb.diagnostics import CollectingDiagnosticSink, LoggingDiagnosticSink
from md2bb.events import (
    BlockQuote,
    CodeBlock,
    Emphasis,
    EndTag,
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
from md2bb.exceptions import InvalidDialectError, InvalidOptionsError, MalformedInlineMarkupError
from md2bb.options import TranslatorOptions
from md2bb.translator import BBCodeTranslator, TranslatorState, translate


def wrap(tag, *inner):
    return [StartTag(tag), *inner, EndTag(tag)]


def paragraph(*inner):
    return wrap(Paragraph(), *inner)


def item(*inner):
    return wrap(ListItem(), *inner)


def bullet_list(*items):
    return wrap(List(ordered=False), *[event for i in items for event in i])


@pytest.mark.unit
class TestTranslatorConstruction:
    """Test translator configuration checks."""

    def test_rejects_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            BBCodeTranslator({"dialect": "xenforo"})

    def test_rejects_unknown_dialect(self):
        with pytest.raises(InvalidDialectError):
            translate([], "vbulletin")

    def test_default_sink_logs(self):
        translator = BBCodeTranslator(TranslatorOptions(dialect="xenforo"))

        assert isinstance(translator.sink, LoggingDiagnosticSink)
        assert translator.dialect == "xenforo"

    def test_empty_stream(self):
        assert translate([], "xenforo") == ""

    def test_instance_is_reusable(self, sink):
        translator = BBCodeTranslator(TranslatorOptions(dialect="xenforo"), sink)
        events = item(Text("a"))

        first = translator.translate(wrap(List(ordered=False), *events))
        second = translator.translate(wrap(List(ordered=False), *events))

        assert first == second == "[list]\n[*]a\n[/list]"


@pytest.mark.unit
class TestBlocks:
    """Test block-level constructs."""

    def test_heading_xenforo(self):
        result = translate(wrap(Heading(1), Text("Hello")), "xenforo")

        assert result == '\n[size="7"][b][u]Hello[/u][/b][/size]\n'
        assert result.strip() == '[size="7"][b][u]Hello[/u][/b][/size]'

    def test_heading_proboards(self):
        result = translate(wrap(Heading(2), Text("Hi")), "proboards")

        assert result == '\n\n[font size="6"][b][u]Hi[/u][/b][/font]\n\n'

    @pytest.mark.parametrize("level", [4, 5, 6])
    def test_deep_headings_share_size(self, level):
        result = translate(wrap(Heading(level), Text("x")), "xenforo")

        assert '[size="4"]' in result

    def test_paragraph(self):
        assert translate(paragraph(Text("Hi")), "xenforo") == "\nHi\n"

    def test_block_quote(self):
        events = wrap(BlockQuote(), *paragraph(Text("q")))

        assert translate(events, "xenforo") == "[quote]\nq\n[/quote]"
        assert translate(events, "proboards") == "[blockquote]\nq\n[/blockquote]"

    def test_code_block(self):
        events = wrap(CodeBlock("python"), Text("print(1)\n"))

        assert translate(events, "xenforo") == "[code]print(1)\n[/code]\n"
        assert translate(events, "proboards") == "\n[pre]print(1)\n[/pre]\n"

    def test_thematic_break(self):
        assert translate([ThematicBreak()], "proboards") == "\n[hr]\n"
        assert translate([ThematicBreak()], "xenforo") == "\n" + "━" * 32 + "\n"


@pytest.mark.unit
class TestLists:
    """Test list and list item handling."""

    def test_tight_list_xenforo(self):
        events = bullet_list(item(Text("item")))

        assert translate(events, "xenforo") == "[list]\n[*]item\n[/list]"

    def test_tight_list_proboards(self):
        events = bullet_list(item(Text("a")), item(Text("b")))

        assert translate(events, "proboards") == "\n[ul]\n[li]a[/li]\n[li]b[/li]\n[/ul]"

    def test_ordered_list_ignores_start(self):
        events = wrap(List(ordered=True, start=3), *item(Text("c")))

        assert translate(events, "xenforo") == "[list=1]\n[*]c\n[/list]"
        assert translate(events, "proboards") == "\n[ol]\n[li]c[/li]\n[/ol]"

    def test_loose_list_has_no_blank_line_after_marker(self):
        events = bullet_list(item(*paragraph(Text("a"))), item(*paragraph(Text("b"))))

        assert translate(events, "xenforo") == "[list]\n[*]a\n[*]b\n[/list]"

    def test_second_paragraph_in_item_keeps_its_newline(self):
        events = bullet_list(item(*paragraph(Text("a")), *paragraph(Text("b"))))

        assert translate(events, "xenforo") == "[list]\n[*]a\n\nb\n[/list]"

    def test_item_close_trims_trailing_whitespace(self):
        events = bullet_list(item(Text("a  \n\n")))

        assert translate(events, "proboards") == "\n[ul]\n[li]a[/li]\n[/ul]"

    def test_each_item_opens_and_closes_once(self):
        events = bullet_list(*[item(Text(str(n))) for n in range(5)])
        result = translate(events, "proboards")

        assert result.count("[li]") == 5
        assert result.count("[/li]") == 5

    def test_nested_list(self):
        inner = bullet_list(item(Text("inner")))
        events = bullet_list(item(Text("outer"), *inner))

        assert translate(events, "xenforo") == "[list]\n[*]outer[list]\n[*]inner\n[/list]\n[/list]"

    def test_pending_item_flag_persists_until_paragraph(self):
        # A tight item sets the flag; the next paragraph after the list is still suppressed
        events = [*bullet_list(item(Text("a"))), *paragraph(Text("after"))]

        assert translate(events, "xenforo") == "[list]\n[*]a\n[/list]after\n"

    def test_task_markers(self):
        events = bullet_list(
            item(TaskListMarker(True), Text("done")),
            item(TaskListMarker(False), Text("todo")),
        )

        assert translate(events, "xenforo") == "[list]\n[*]\u2611\u00a0done\n[*]\u2610\u00a0todo\n[/list]"


@pytest.mark.unit
class TestFootnotes:
    """Test footnote references and definitions."""

    def test_reference(self):
        assert translate([FootnoteReference("1")], "xenforo") == "⌜1⌝"
        assert translate([FootnoteReference("1")], "proboards") == "[sup]⌜1⌝[/sup]"

    def test_definition_suppresses_first_paragraph_newline(self):
        events = wrap(FootnoteDefinition("note"), *paragraph(Text("Body")))

        assert translate(events, "xenforo") == "\n⌜note⌝: Body\n\n"

    def test_definition_and_item_flags_are_exclusive(self):
        events = [
            StartTag(ListItem()),
            *wrap(FootnoteDefinition("n"), *paragraph(Text("x"))),
            EndTag(ListItem()),
        ]

        # Only the footnote flag is pending when the paragraph opens
        assert translate(events, "proboards") == "\n[li]\n⌜n⌝: x[/li]"


@pytest.mark.unit
class TestInline:
    """Test inline constructs."""

    def test_emphasis_strong_strikethrough(self):
        events = [
            *wrap(Emphasis(), Text("i")),
            *wrap(Strong(), Text("b")),
            *wrap(Strikethrough(), Text("s")),
        ]

        assert translate(events, "xenforo") == "[i]i[/i][b]b[/b][s]s[/s]"

    def test_link(self):
        events = wrap(Link("https://example.com", title="ignored"), Text("site"))

        assert translate(events, "xenforo") == "[url=https://example.com]site[/url]"
        assert translate(events, "proboards") == '[a href="https://example.com"]site[/a]'

    def test_image(self):
        events = wrap(Image("https://example.com/a.png", alt_text="A cat"))

        assert translate(events, "xenforo") == "[img]https://example.com/a.png[/img]"
        assert translate(events, "proboards") == '[img src="https://example.com/a.png" alt="A cat"]'

    def test_inline_code(self):
        assert translate([InlineCode("x = 1")], "xenforo") == "[font=Courier New]x = 1[/font]"
        assert translate([InlineCode("x = 1")], "proboards") == "[tt]x = 1[/tt]"

    def test_text_is_emitted_verbatim(self):
        assert translate([Text("[b]not markup[/b]")], "xenforo") == "[b]not markup[/b]"

    def test_breaks(self):
        events = [Text("a"), SoftBreak(), Text("b"), HardBreak(), Text("c")]

        assert translate(events, "xenforo") == "a b\nc"


@pytest.mark.unit
class TestTables:
    """Test table output."""

    def test_table_proboards(self):
        events = wrap(
            Table(alignments=(None, "right")),
            *wrap(TableHead(), *wrap(TableCell(), Text("h1")), *wrap(TableCell(), Text("h2"))),
            *wrap(TableRow(), *wrap(TableCell(), Text("a")), *wrap(TableCell(), Text("b"))),
        )

        assert translate(events, "proboards") == (
            "[table]\n  [thead][tr][td]h1[/td][td]h2[/td][/tr][/thead]\n  [tbody]"
            "[tr][td]a[/td][td]b[/td][/tr]\n  [/tbody]\n[/table]"
        )

    def test_table_xenforo(self):
        events = wrap(
            Table(),
            *wrap(TableHead(), *wrap(TableCell(), Text("h"))),
            *wrap(TableRow(), *wrap(TableCell(), Text("a"))),
        )

        assert translate(events, "xenforo") == "[table][tr][td]h[/td][/tr][tr][td]a[/td][/tr][/table]"


@pytest.mark.unit
class TestRawInline:
    """Test raw markup routing and diagnostics."""

    def test_whitelisted_fragment(self, sink):
        events = [Text("H"), RawInline("<sub>"), Text("2"), RawInline("</sub>"), Text("O")]

        assert translate(events, "xenforo", sink=sink) == "H[sub]2[/sub]O"
        assert sink.diagnostics == []

    def test_comment_is_silent(self, sink):
        assert translate([RawInline("<!-- hidden -->")], "xenforo", sink=sink) == ""
        assert sink.diagnostics == []

    def test_unknown_fragment_warns_once_and_passes_through(self, sink):
        assert translate([RawInline("<span>")], "xenforo", sink=sink) == "<span>"
        assert sink.messages == ["Unrecognised HTML tag: <span>"]

    def test_details_block_xenforo(self, sink):
        events = [
            RawInline("<details>\n"),
            RawInline("<summary>More</summary>\n"),
            *paragraph(Text("Hidden")),
            RawInline("</details>\n"),
        ]

        assert translate(events, "xenforo", sink=sink).strip() == "[spoiler=More]\nHidden\n[/spoiler]"
        assert sink.diagnostics == []

    def test_details_block_proboards_warns(self, sink):
        events = [RawInline("<details>"), RawInline("<summary>More</summary>"), *paragraph(Text("Hidden"))]

        assert translate(events, "proboards", sink=sink) == "\nHidden\n"
        assert sink.messages == ["proboards doesn't support `<details>`"]

    def test_split_summary_is_fatal(self):
        events = [RawInline("<summary>"), Text("Label"), RawInline("</summary>")]

        with pytest.raises(MalformedInlineMarkupError):
            translate(events, "xenforo")


@pytest.mark.unit
class TestUnrecognizedInput:
    """Test warnings for events and tags the translator does not know."""

    def test_unknown_tag_is_skipped_with_warning(self, sink):
        class Marquee(Tag):
            pass

        events = [StartTag(Marquee()), Text("x"), EndTag(Marquee())]

        assert translate(events, "xenforo", sink=sink) == "x"
        assert len(sink.diagnostics) == 2
        assert all(d.kind == "unrecognized-construct" for d in sink.diagnostics)

    def test_construct_without_dialect_equivalent_warns(self, sink):
        class Disclosure(Tag):
            @property
            def construct(self):
                return "disclosure"

        events = [StartTag(Disclosure()), Text("hidden"), EndTag(Disclosure())]

        assert translate(events, "proboards", sink=sink) == "hidden"
        assert sink.messages == ["proboards has no equivalent for disclosure"]

    def test_unknown_event_is_skipped_with_warning(self, sink):
        assert translate([object(), Text("ok")], "proboards", sink=sink) == "ok"
        assert len(sink.diagnostics) == 1
        assert sink.messages[0].startswith("Unrecognised event")

    def test_default_sink_writes_log_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="md2bb.diagnostics"):
            translate([RawInline("<span>")], "xenforo")

        assert "Unrecognised HTML tag: <span>" in caplog.text


@pytest.mark.unit
class TestEncodingWarnings:
    """Test the optional encoding post-pass."""

    def test_disabled_by_default(self, sink):
        translate([Text("\U0001f600")], "xenforo", sink=sink)

        assert sink.diagnostics == []

    def test_xenforo_flags_astral_characters(self, sink):
        result = translate([Text("hi \U0001f600")], "xenforo", validate_encoding=True, sink=sink)

        assert result == "hi \U0001f600"
        assert len(sink.of_kind("encoding-range")) == 1
        assert "U+1f600" in sink.messages[0]

    def test_proboards_has_no_limit(self, sink):
        translate([Text("\U0001f600")], "proboards", validate_encoding=True, sink=sink)

        assert sink.diagnostics == []


@pytest.mark.unit
class TestTranslatorState:
    """Test the per-call output buffer."""

    def test_append_skips_empty(self):
        state = TranslatorState()
        state.append("")
        state.append(None)

        assert state.output == []

    def test_truncate_spans_chunks(self):
        state = TranslatorState()
        for chunk in ["a", " b ", "\n", "  "]:
            state.append(chunk)

        state.truncate_trailing_whitespace()

        assert state.getvalue() == "a b"

    def test_truncate_empty_buffer(self):
        state = TranslatorState()
        state.truncate_trailing_whitespace()

        assert state.getvalue() == ""

    def test_collecting_sink_is_isolated_per_test(self):
        assert CollectingDiagnosticSink().diagnostics == []
