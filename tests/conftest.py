"""Pytest configuration and shared fixtures for the md2bb test suite.

This module provides shared fixtures, test configuration, and helpers
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Iterator

import pytest
from hypothesis import Phase, Verbosity, settings

from md2bb.diagnostics import CollectingDiagnosticSink

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=30)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def sink() -> CollectingDiagnosticSink:
    """Provide a diagnostic sink that records warnings."""
    return CollectingDiagnosticSink()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    """Isolate a test from MD2BB_* variables and config files on disk.

    Yields
    ------
    Path
        An empty working directory, also used as the home directory

    """
    for key in list(os.environ):
        if key.startswith("MD2BB_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    yield tmp_path


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Undo handler changes that ``configure_logging`` makes to the root and diagnostics loggers."""
    saved = []
    for logger in (logging.getLogger(), logging.getLogger("md2bb.diagnostics")):
        saved.append((logger, logger.handlers[:], logger.level, logger.propagate))
    yield
    for logger, handlers, level, propagate in saved:
        for handler in logger.handlers:
            if handler not in handlers and isinstance(handler, logging.FileHandler):
                handler.close()
        logger.handlers[:] = handlers
        logger.setLevel(level)
        logger.propagate = propagate


@pytest.fixture
def sample_markdown() -> str:
    """Provide a Markdown document using only CommonMark constructs.

    Returns
    -------
    str
        Standard sample text used across multiple tests.

    """
    return """# Sample Post

This is a **sample post** with *italic text* and some `inline code`.

## Links

See [the docs](https://example.com/docs) for more.

- First
- Second

1. One
2. Two

> Quoted text

---
"""
