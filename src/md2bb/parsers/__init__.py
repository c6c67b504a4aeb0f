#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Event sources that turn markup text into md2bb document events."""

from md2bb.parsers.markdown import MarkdownEventParser, markdown_to_events

__all__ = ["MarkdownEventParser", "markdown_to_events"]
