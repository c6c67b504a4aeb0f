#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2bb/diagnostics.py
"""Diagnostic sinks for non-fatal translation problems.

Translation never fails for unrecognized constructs or characters the target
forum cannot store; it reports them as :class:`Diagnostic` values instead.
Callers choose where they go by passing a sink:

- :class:`LoggingDiagnosticSink` (the default) writes each one as a warning
  on the ``md2bb.diagnostics`` logger, which the CLI routes to stderr.
- :class:`CollectingDiagnosticSink` keeps them in a list.

Any object with a ``warn(diagnostic)`` method satisfies
:class:`DiagnosticSink`.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from md2bb.constants import DiagnosticKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """A single non-fatal problem found during translation.

    Parameters
    ----------
    kind : {"unrecognized-construct", "encoding-range"}
        Category of the problem
    message : str
        Human-readable description

    """

    kind: DiagnosticKind
    message: str

    def __str__(self) -> str:
        return self.message


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receiver of translation diagnostics."""

    def warn(self, diagnostic: Diagnostic) -> None:
        """Record one diagnostic."""
        ...


class LoggingDiagnosticSink:
    """Sink that logs every diagnostic at WARNING level.

    Parameters
    ----------
    target : logging.Logger, optional
        Logger to write to; defaults to ``md2bb.diagnostics``

    """

    def __init__(self, target: logging.Logger | None = None):
        self._logger = target or logger

    def warn(self, diagnostic: Diagnostic) -> None:
        self._logger.warning(diagnostic.message)


@dataclass
class CollectingDiagnosticSink:
    """Sink that stores diagnostics in order of arrival."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def warn(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def messages(self) -> list[str]:
        """Messages of the collected diagnostics."""
        return [d.message for d in self.diagnostics]

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        """Collected diagnostics of a single category."""
        return [d for d in self.diagnostics if d.kind == kind]

    def clear(self) -> None:
        self.diagnostics.clear()
