#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2bb/dialects.py
"""Per-dialect markup tables.

All dialect-specific output lives here. ``OPEN_MARKUP`` and ``CLOSE_MARKUP``
map ``(construct, dialect)`` to a ``str.format`` template; the translator and
the raw markup handler never branch on the dialect themselves.

A template of ``None`` means the dialect has no equivalent for the construct.
An empty string means the construct needs no markup at that position (for
example, XenForo list items are never closed).

Template fields
---------------
size : heading size token (see ``HEADING_SIZES``)
url : link or image destination
alt : image alternative text
identifier : footnote label
label : disclosure (spoiler) title

Adding a dialect means extending ``DIALECTS`` in :mod:`md2bb.constants` and
adding one row per construct to each table below.

"""

from __future__ import annotations

from typing import Optional

from md2bb.constants import (
    DIALECTS,
    FOOTNOTE_CLOSE_MARK,
    FOOTNOTE_OPEN_MARK,
    NO_BREAK_SPACE,
    TASK_CHECKED_MARK,
    TASK_UNCHECKED_MARK,
    UCS2_LIMIT,
    XENFORO_RULE,
    Construct,
    Dialect,
)
from md2bb.exceptions import InvalidDialectError

MarkupTable = dict[tuple[Construct, Dialect], Optional[str]]

_FOOTNOTE_LABEL = FOOTNOTE_OPEN_MARK + "{identifier}" + FOOTNOTE_CLOSE_MARK


def _same_for_all(construct: Construct, markup: Optional[str]) -> MarkupTable:
    return {(construct, dialect): markup for dialect in DIALECTS}


OPEN_MARKUP: MarkupTable = {
    **_same_for_all("paragraph", "\n"),
    ("heading", "xenforo"): '\n[size="{size}"][b][u]',
    ("heading", "proboards"): '\n\n[font size="{size}"][b][u]',
    ("block_quote", "xenforo"): "[quote]",
    ("block_quote", "proboards"): "[blockquote]",
    ("code_block", "xenforo"): "[code]",
    ("code_block", "proboards"): "\n[pre]",
    ("ordered_list", "xenforo"): "[list=1]",
    ("ordered_list", "proboards"): "\n[ol]",
    ("unordered_list", "xenforo"): "[list]",
    ("unordered_list", "proboards"): "\n[ul]",
    ("list_item", "xenforo"): "\n[*]",
    ("list_item", "proboards"): "\n[li]",
    **_same_for_all("footnote_definition", "\n" + _FOOTNOTE_LABEL + ": "),
    **_same_for_all("table", "[table]"),
    ("table_head", "xenforo"): "[tr]",
    ("table_head", "proboards"): "\n  [thead][tr]",
    **_same_for_all("table_row", "[tr]"),
    **_same_for_all("table_cell", "[td]"),
    **_same_for_all("emphasis", "[i]"),
    **_same_for_all("strong", "[b]"),
    **_same_for_all("strikethrough", "[s]"),
    **_same_for_all("superscript", "[sup]"),
    **_same_for_all("subscript", "[sub]"),
    ("link", "xenforo"): "[url={url}]",
    ("link", "proboards"): '[a href="{url}"]',
    ("image", "xenforo"): "[img]{url}[/img]",
    ("image", "proboards"): '[img src="{url}" alt="{alt}"]',
    ("inline_code", "xenforo"): "[font=Courier New]",
    ("inline_code", "proboards"): "[tt]",
    ("footnote_reference", "xenforo"): _FOOTNOTE_LABEL,
    ("footnote_reference", "proboards"): "[sup]" + _FOOTNOTE_LABEL + "[/sup]",
    ("thematic_break", "xenforo"): "\n" + XENFORO_RULE + "\n",
    ("thematic_break", "proboards"): "\n[hr]\n",
    **_same_for_all("hard_break", "\n"),
    **_same_for_all("soft_break", " "),
    **_same_for_all("task_checked", TASK_CHECKED_MARK + NO_BREAK_SPACE),
    **_same_for_all("task_unchecked", TASK_UNCHECKED_MARK + NO_BREAK_SPACE),
    # ProBoards has no spoiler/details element
    ("disclosure", "xenforo"): "\n[spoiler=",
    ("disclosure", "proboards"): None,
    ("disclosure_label", "xenforo"): "{label}]",
    ("disclosure_label", "proboards"): None,
}

CLOSE_MARKUP: MarkupTable = {
    **_same_for_all("paragraph", "\n"),
    ("heading", "xenforo"): "[/u][/b][/size]\n",
    ("heading", "proboards"): "[/u][/b][/font]\n\n",
    ("block_quote", "xenforo"): "[/quote]",
    ("block_quote", "proboards"): "[/blockquote]",
    ("code_block", "xenforo"): "[/code]\n",
    ("code_block", "proboards"): "[/pre]\n",
    ("ordered_list", "xenforo"): "\n[/list]",
    ("ordered_list", "proboards"): "\n[/ol]",
    ("unordered_list", "xenforo"): "\n[/list]",
    ("unordered_list", "proboards"): "\n[/ul]",
    ("list_item", "xenforo"): "",
    ("list_item", "proboards"): "[/li]",
    **_same_for_all("footnote_definition", "\n"),
    ("table", "xenforo"): "[/table]",
    ("table", "proboards"): "\n  [/tbody]\n[/table]",
    ("table_head", "xenforo"): "[/tr]",
    ("table_head", "proboards"): "[/tr][/thead]\n  [tbody]",
    **_same_for_all("table_row", "[/tr]"),
    **_same_for_all("table_cell", "[/td]"),
    **_same_for_all("emphasis", "[/i]"),
    **_same_for_all("strong", "[/b]"),
    **_same_for_all("strikethrough", "[/s]"),
    **_same_for_all("superscript", "[/sup]"),
    **_same_for_all("subscript", "[/sub]"),
    ("link", "xenforo"): "[/url]",
    ("link", "proboards"): "[/a]",
    # The opening template renders the whole image
    **_same_for_all("image", ""),
    ("inline_code", "xenforo"): "[/font]",
    ("inline_code", "proboards"): "[/tt]",
    ("disclosure", "xenforo"): "[/spoiler]\n",
    ("disclosure", "proboards"): None,
}

# Size tokens for heading levels 1-6. No surveyed dialect distinguishes more
# than four sizes, so levels 4-6 share the smallest one.
HEADING_SIZES: dict[Dialect, tuple[str, ...]] = {
    "xenforo": ("7", "6", "5", "4", "4", "4"),
    "proboards": ("7", "6", "5", "4", "4", "4"),
}

# First code point the dialect's runtime cannot store, or None for no limit.
# XenForo stores posts as UCS-2.
ENCODING_LIMITS: dict[Dialect, Optional[int]] = {
    "xenforo": UCS2_LIMIT,
    "proboards": None,
}


def validate_dialect(dialect: str) -> Dialect:
    """Return ``dialect`` if it is supported.

    Raises
    ------
    InvalidDialectError
        If the name is not one of ``DIALECTS``

    """
    if dialect not in DIALECTS:
        raise InvalidDialectError(dialect, DIALECTS)
    return dialect  # type: ignore[return-value]


def _render(table: MarkupTable, construct: Construct, dialect: Dialect, fields: dict[str, object]) -> Optional[str]:
    template = table[(construct, dialect)]
    if template is None:
        return None
    return template.format(**fields) if fields else template


def open_markup(construct: Construct, dialect: Dialect, **fields: object) -> Optional[str]:
    """Render the opening markup of ``construct`` in ``dialect``.

    Parameters
    ----------
    construct : Construct
        Dialect policy key
    dialect : Dialect
        Target dialect
    **fields
        Values substituted into the template

    Returns
    -------
    str or None
        Markup text, or None if the dialect has no equivalent

    Raises
    ------
    KeyError
        If the table has no row for the pair

    """
    return _render(OPEN_MARKUP, construct, dialect, fields)


def close_markup(construct: Construct, dialect: Dialect, **fields: object) -> Optional[str]:
    """Render the closing markup of ``construct`` in ``dialect``.

    Same contract as :func:`open_markup`.
    """
    return _render(CLOSE_MARKUP, construct, dialect, fields)


def heading_size(level: int, dialect: Dialect) -> str:
    """Size token for a heading ``level`` (1-6) in ``dialect``."""
    return HEADING_SIZES[dialect][level - 1]


def supports(construct: Construct, dialect: Dialect) -> bool:
    """Whether ``dialect`` has an equivalent for ``construct``."""
    return OPEN_MARKUP.get((construct, dialect)) is not None
