#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2bb/raw_markup.py
"""Heuristic translation of raw HTML fragments.

Markdown lets authors embed HTML, which the parser hands over untouched.
Only a short whitelist of simple elements is translated into BBCode:

- ``<del>``, ``<sup>``, ``<sub>``, ``<b>``, ``<i>``, ``<blockquote>`` and
  their closing tags
- ``<br>`` in any of its spellings (``<br/>``, ``<br />``, ...)
- ``<details>``/``<summary>``, rendered as a spoiler

Matching is exact and case-sensitive after trimming surrounding whitespace.
Anything else is either a comment (dropped silently) or treated as literal
text that merely looks like markup (passed through with a warning).

A ``<summary>`` element must arrive whole: opening tag, label and closing tag
in one fragment. When the parser splits it (because the label contains nested
markup or spans lines), the label cannot be recovered and translation fails
with :class:`~md2bb.exceptions.MalformedInlineMarkupError`.

"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Literal, Optional

from md2bb.constants import COMMENT_PREFIX, Construct, Dialect
from md2bb.diagnostics import Diagnostic
from md2bb.dialects import close_markup, open_markup, supports
from md2bb.exceptions import MalformedInlineMarkupError

RawMarkupAction = Literal["markup", "passthrough", "suppress"]

# Exact fragments and the (construct, closing) pair they translate to
_ELEMENTS: dict[str, tuple[Construct, bool]] = {
    "<del>": ("strikethrough", False),
    "</del>": ("strikethrough", True),
    "<sup>": ("superscript", False),
    "</sup>": ("superscript", True),
    "<sub>": ("subscript", False),
    "</sub>": ("subscript", True),
    "<b>": ("strong", False),
    "</b>": ("strong", True),
    "<i>": ("emphasis", False),
    "</i>": ("emphasis", True),
    "<blockquote>": ("block_quote", False),
    "</blockquote>": ("block_quote", True),
    "</details>": ("disclosure", True),
}

_SUMMARY_OPEN = "<summary"
_SUMMARY_CLOSE = "</summary>"
_BREAK_PREFIX = "<br"
_TAG_DELIMITERS = re.compile(r"[<>]")


@dataclass(frozen=True)
class RawMarkupResult:
    """Outcome of classifying one raw markup fragment.

    Parameters
    ----------
    action : {"markup", "passthrough", "suppress"}
        ``markup``: ``text`` is translated BBCode (possibly empty).
        ``passthrough``: ``text`` is the original fragment, emitted literally.
        ``suppress``: nothing is emitted.
    text : str, default = ""
        Text to append to the output
    diagnostic : Diagnostic or None, default = None
        Warning to report, if any

    """

    action: RawMarkupAction
    text: str = ""
    diagnostic: Optional[Diagnostic] = None


def _markup(text: Optional[str]) -> RawMarkupResult:
    return RawMarkupResult("markup", text or "")


def _unrecognized(fragment: str, trimmed: str) -> RawMarkupResult:
    if trimmed.startswith(COMMENT_PREFIX):
        return RawMarkupResult("suppress")
    return RawMarkupResult(
        "passthrough",
        fragment,
        Diagnostic("unrecognized-construct", f"Unrecognised HTML tag: {trimmed}"),
    )


def _is_line_break(trimmed: str) -> bool:
    if len(trimmed) <= len(_BREAK_PREFIX):
        return False
    follower = trimmed[len(_BREAK_PREFIX)]
    return follower.isspace() or follower in "/>"


def _summary_label(trimmed: str) -> str:
    """Extract the decoded label of a single-fragment ``<summary>`` element."""
    if not trimmed.endswith(_SUMMARY_CLOSE):
        raise MalformedInlineMarkupError(trimmed)

    # "<summary ...>Label</summary>" splits into ["", "summary ...", "Label", ...]
    parts = _TAG_DELIMITERS.split(trimmed)
    if len(parts) < 3:
        raise MalformedInlineMarkupError(trimmed)
    return html.unescape(parts[2])


def classify_raw_markup(fragment: str, dialect: Dialect) -> RawMarkupResult:
    """Classify a raw HTML fragment and translate it for ``dialect``.

    Parameters
    ----------
    fragment : str
        Raw markup exactly as the parser produced it
    dialect : Dialect
        Target dialect

    Returns
    -------
    RawMarkupResult
        What to emit and whether to warn

    Raises
    ------
    MalformedInlineMarkupError
        If the fragment opens a ``<summary>`` element without closing it

    """
    trimmed = fragment.strip()

    element = _ELEMENTS.get(trimmed)
    if element is not None:
        construct, closing = element
        return _markup(close_markup(construct, dialect) if closing else open_markup(construct, dialect))

    if trimmed == "<details>":
        if not supports("disclosure", dialect):
            return RawMarkupResult(
                "suppress",
                diagnostic=Diagnostic("unrecognized-construct", f"{dialect} doesn't support `<details>`"),
            )
        return _markup(open_markup("disclosure", dialect))

    if trimmed.startswith(_SUMMARY_OPEN):
        label = _summary_label(trimmed)
        return _markup(open_markup("disclosure_label", dialect, label=label))

    if trimmed.startswith(_BREAK_PREFIX) and _is_line_break(trimmed):
        return _markup(open_markup("hard_break", dialect))

    return _unrecognized(fragment, trimmed)
