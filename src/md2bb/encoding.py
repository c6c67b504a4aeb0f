#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2bb/encoding.py
"""Output encoding checks.

Some forum software keeps posts in a 16-bit representation and silently
mangles characters outside it (emoji being the usual culprit). The check
here only reports such characters; the output is never changed.
"""

from __future__ import annotations

from md2bb.constants import Dialect
from md2bb.dialects import ENCODING_LIMITS
from md2bb.diagnostics import Diagnostic


def validate_encoding(output: str, dialect: Dialect) -> list[Diagnostic]:
    """Find characters in ``output`` that ``dialect`` cannot store.

    Parameters
    ----------
    output : str
        Finished BBCode text
    dialect : Dialect
        Target dialect

    Returns
    -------
    list of Diagnostic
        One ``encoding-range`` diagnostic per offending character, in order
        of appearance. Empty for dialects without a limit.

    """
    limit = ENCODING_LIMITS[dialect]
    if limit is None:
        return []

    return [
        Diagnostic(
            kind="encoding-range",
            message=f"Non-UCS-2 character in output: '{char}' (U+{ord(char):x})",
        )
        for char in output
        if ord(char) >= limit
    ]
