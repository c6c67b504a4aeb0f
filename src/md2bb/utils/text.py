#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2bb/utils/text.py
"""Text processing utilities for the Markdown event source.

Functions
---------
decode_entities : Decode HTML entity and numeric character references
smarten_punctuation : Replace ASCII punctuation with typographic forms

Examples
--------
    >>> from md2bb.utils.text import decode_entities, smarten_punctuation
    >>> decode_entities("AT&amp;T &copy; 2025")
    'AT&T © 2025'
    >>> smarten_punctuation('"Wait..." -- it\\'s fine')
    '“Wait…” – it’s fine'

"""

from __future__ import annotations

import html
import re
from html.entities import html5

# Only references terminated by ";" count, as in CommonMark
_ENTITY = re.compile(r"&(?:#[0-9]{1,7}|#[xX][0-9a-fA-F]{1,6}|[A-Za-z][A-Za-z0-9]{1,31});")

_ELLIPSIS = re.compile(r"\.\.\.")
_EM_DASH = re.compile(r"(?<!-)---(?!-)")
_EN_DASH = re.compile(r"(?<!-)--(?!-)")

# A quote opens when it starts the text or follows whitespace or an opener
_OPENING_DOUBLE = re.compile(r'(^|[\s(\[{\u2014\u2013-])"')
_OPENING_SINGLE = re.compile(r"(^|[\s(\[{\u2014\u2013-])'")


def _decode_reference(match: re.Match[str]) -> str:
    reference = match.group(0)
    if reference[1] == "#":
        return html.unescape(reference)
    # Exact names only; html.unescape would also expand prefixes such as "&not"
    return html5.get(reference[1:], reference)


def decode_entities(text: str) -> str:
    """Decode entity (``&amp;``) and numeric (``&#169;``, ``&#xA9;``) references.

    Unknown entity names and references without a trailing ``;`` are left
    unchanged.
    """
    if "&" not in text:
        return text
    return _ENTITY.sub(_decode_reference, text)


def smarten_punctuation(text: str, preceding: str = "") -> str:
    """Convert straight quotes, dashes and ellipses to typographic punctuation.

    Parameters
    ----------
    text : str
        Plain text run (no markup)
    preceding : str, default ""
        Text that comes before ``text`` in the same block, such as the end of
        the previous text run before an emphasis or code span. Only its last
        character is used, to decide whether a leading quote opens or closes.
        Empty at the start of a block.

    Returns
    -------
    str
        Text with ``...`` as an ellipsis, ``---`` as an em dash, ``--`` as an
        en dash, and straight quotes as curly quotes. Single quotes that do
        not open a quotation become apostrophes.

    Examples
    --------
        >>> smarten_punctuation('"', preceding="hi")
        '”'

    """
    text = _ELLIPSIS.sub("\u2026", text)
    text = _EM_DASH.sub("\u2014", text)
    text = _EN_DASH.sub("\u2013", text)

    # Quote substitutions keep length, so the context prefix can be cut off again
    context = preceding[-1:]
    text = _OPENING_DOUBLE.sub("\\1\u201c", context + text)
    text = text.replace('"', "\u201d")
    text = _OPENING_SINGLE.sub("\\1\u2018", text)
    text = text.replace("'", "\u2019")
    return text[len(context) :]
