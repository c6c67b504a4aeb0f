"""Unit tests for the per-dialect markup tables."""

import pytest

from md2bb.constants import DIALECTS, XENFORO_RULE
from md2bb.dialects import (
    CLOSE_MARKUP,
    ENCODING_LIMITS,
    HEADING_SIZES,
    OPEN_MARKUP,
    close_markup,
    heading_size,
    open_markup,
    supports,
    validate_dialect,
)
from md2bb.exceptions import InvalidDialectError, ValidationError


@pytest.mark.unit
class TestMarkupTables:
    """Test the shape of the open and close tables."""

    def test_every_construct_defined_for_every_dialect(self):
        constructs = {construct for construct, _ in OPEN_MARKUP}
        for construct in constructs:
            for dialect in DIALECTS:
                assert (construct, dialect) in OPEN_MARKUP

    def test_closed_constructs_defined_for_every_dialect(self):
        constructs = {construct for construct, _ in CLOSE_MARKUP}
        for construct in constructs:
            for dialect in DIALECTS:
                assert (construct, dialect) in CLOSE_MARKUP

    def test_every_close_has_an_open(self):
        assert set(CLOSE_MARKUP) <= set(OPEN_MARKUP)

    def test_unsupported_close_matches_unsupported_open(self):
        for key, markup in CLOSE_MARKUP.items():
            if markup is None:
                assert OPEN_MARKUP[key] is None


@pytest.mark.unit
class TestOpenMarkup:
    """Test rendering of opening markup."""

    @pytest.mark.parametrize(
        "construct,dialect,expected",
        [
            ("block_quote", "xenforo", "[quote]"),
            ("block_quote", "proboards", "[blockquote]"),
            ("code_block", "xenforo", "[code]"),
            ("code_block", "proboards", "\n[pre]"),
            ("ordered_list", "xenforo", "[list=1]"),
            ("ordered_list", "proboards", "\n[ol]"),
            ("unordered_list", "xenforo", "[list]"),
            ("unordered_list", "proboards", "\n[ul]"),
            ("list_item", "xenforo", "\n[*]"),
            ("list_item", "proboards", "\n[li]"),
            ("table_head", "proboards", "\n  [thead][tr]"),
            ("inline_code", "xenforo", "[font=Courier New]"),
            ("inline_code", "proboards", "[tt]"),
            ("thematic_break", "proboards", "\n[hr]\n"),
            ("soft_break", "xenforo", " "),
            ("hard_break", "proboards", "\n"),
        ],
    )
    def test_fixed_markup(self, construct, dialect, expected):
        assert open_markup(construct, dialect) == expected

    def test_heading_substitutes_size(self):
        assert open_markup("heading", "xenforo", size="5") == '\n[size="5"][b][u]'
        assert open_markup("heading", "proboards", size="5") == '\n\n[font size="5"][b][u]'

    def test_link_substitutes_url(self):
        assert open_markup("link", "xenforo", url="https://example.com") == "[url=https://example.com]"
        assert open_markup("link", "proboards", url="https://example.com") == '[a href="https://example.com"]'

    def test_image_is_rendered_whole_by_open(self):
        assert open_markup("image", "xenforo", url="a.png", alt="A") == "[img]a.png[/img]"
        assert open_markup("image", "proboards", url="a.png", alt="A") == '[img src="a.png" alt="A"]'
        assert close_markup("image", "xenforo") == ""
        assert close_markup("image", "proboards") == ""

    def test_footnote_markers(self):
        assert open_markup("footnote_reference", "xenforo", identifier="1") == "⌜1⌝"
        assert open_markup("footnote_reference", "proboards", identifier="1") == "[sup]⌜1⌝[/sup]"
        assert open_markup("footnote_definition", "xenforo", identifier="n") == "\n⌜n⌝: "

    def test_task_markers_end_with_no_break_space(self):
        assert open_markup("task_checked", "xenforo") == "\u2611\u00a0"
        assert open_markup("task_unchecked", "proboards") == "\u2610\u00a0"

    def test_xenforo_rule(self):
        assert open_markup("thematic_break", "xenforo") == f"\n{XENFORO_RULE}\n"
        assert XENFORO_RULE == "━" * 32

    def test_field_values_are_not_reformatted(self):
        assert open_markup("link", "xenforo", url="https://x/{id}") == "[url=https://x/{id}]"

    def test_disclosure_only_on_xenforo(self):
        assert open_markup("disclosure", "xenforo") == "\n[spoiler="
        assert open_markup("disclosure_label", "xenforo", label="Title") == "Title]"
        assert close_markup("disclosure", "xenforo") == "[/spoiler]\n"
        assert open_markup("disclosure", "proboards") is None
        assert open_markup("disclosure_label", "proboards", label="Title") is None


@pytest.mark.unit
class TestCloseMarkup:
    """Test rendering of closing markup."""

    def test_xenforo_list_items_are_never_closed(self):
        assert close_markup("list_item", "xenforo") == ""
        assert close_markup("list_item", "proboards") == "[/li]"

    def test_heading_closers(self):
        assert close_markup("heading", "xenforo") == "[/u][/b][/size]\n"
        assert close_markup("heading", "proboards") == "[/u][/b][/font]\n\n"

    def test_table_closers(self):
        assert close_markup("table", "xenforo") == "[/table]"
        assert close_markup("table", "proboards") == "\n  [/tbody]\n[/table]"
        assert close_markup("table_head", "proboards") == "[/tr][/thead]\n  [tbody]"

    def test_missing_pair_raises_key_error(self):
        with pytest.raises(KeyError):
            close_markup("thematic_break", "xenforo")


@pytest.mark.unit
class TestHeadingSizes:
    """Test heading level to size mapping."""

    @pytest.mark.parametrize("dialect", DIALECTS)
    def test_sizes_are_non_increasing(self, dialect):
        sizes = [int(heading_size(level, dialect)) for level in range(1, 7)]
        assert sizes == sorted(sizes, reverse=True)

    @pytest.mark.parametrize("dialect", DIALECTS)
    def test_levels_four_to_six_share_a_size(self, dialect):
        assert heading_size(4, dialect) == heading_size(5, dialect) == heading_size(6, dialect)

    @pytest.mark.parametrize("level,expected", [(1, "7"), (2, "6"), (3, "5"), (4, "4")])
    def test_known_sizes(self, level, expected):
        assert heading_size(level, "xenforo") == expected
        assert heading_size(level, "proboards") == expected

    def test_table_has_six_entries(self):
        for sizes in HEADING_SIZES.values():
            assert len(sizes) == 6


@pytest.mark.unit
class TestDialectValidation:
    """Test dialect name validation and support queries."""

    @pytest.mark.parametrize("dialect", DIALECTS)
    def test_known_dialects_pass(self, dialect):
        assert validate_dialect(dialect) == dialect

    def test_unknown_dialect_raises(self):
        with pytest.raises(InvalidDialectError) as exc_info:
            validate_dialect("phpbb")

        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.parameter_name == "dialect"
        assert exc_info.value.parameter_value == "phpbb"
        assert "xenforo" in str(exc_info.value)

    def test_dialect_names_are_case_sensitive(self):
        with pytest.raises(InvalidDialectError):
            validate_dialect("XenForo")

    def test_supports(self):
        assert supports("disclosure", "xenforo")
        assert not supports("disclosure", "proboards")
        assert supports("strong", "proboards")

    def test_encoding_limits(self):
        assert ENCODING_LIMITS["xenforo"] == 0xFFFE
        assert ENCODING_LIMITS["proboards"] is None
