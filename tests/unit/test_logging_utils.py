"""Unit tests for configure_logging and resolve_log_level."""

import logging

import pytest

from md2bb.logging_utils import DIAGNOSTICS_LOGGER, configure_logging, resolve_log_level


def flush_all(*loggers):
    for logger in loggers:
        for handler in logger.handlers:
            handler.flush()


@pytest.mark.unit
class TestResolveLogLevel:
    """Test conversion of level names and numbers."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            (logging.ERROR, logging.ERROR),
            (None, logging.WARNING),
            ("CHATTY", logging.WARNING),
        ],
    )
    def test_resolve(self, value, expected):
        assert resolve_log_level(value) == expected


@pytest.mark.unit
class TestConfigureLogging:
    """Test the stderr and file handlers installed for the CLI."""

    def test_level_from_name(self):
        root = configure_logging("debug")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back_to_warning(self):
        assert configure_logging("CHATTY").level == logging.WARNING

    def test_diagnostic_format(self, capsys):
        configure_logging()
        logging.getLogger(DIAGNOSTICS_LOGGER).warning("Unrecognised HTML tag: <span>")

        assert capsys.readouterr().err == "[[WARN]] Unrecognised HTML tag: <span>\n"

    def test_diagnostic_format_unchanged_in_trace_mode(self, capsys):
        configure_logging("DEBUG", trace_mode=True)
        logging.getLogger(DIAGNOSTICS_LOGGER).warning("Unrecognised HTML tag: <span>")

        assert capsys.readouterr().err == "[[WARN]] Unrecognised HTML tag: <span>\n"

    def test_diagnostics_shown_above_warning_level(self, capsys):
        configure_logging("ERROR")
        logging.getLogger(DIAGNOSTICS_LOGGER).warning("Non-UCS-2 character in output")
        logging.getLogger("md2bb.api").warning("hidden")

        assert capsys.readouterr().err == "[[WARN]] Non-UCS-2 character in output\n"

    def test_diagnostics_do_not_propagate(self):
        configure_logging()

        diagnostics = logging.getLogger(DIAGNOSTICS_LOGGER)
        assert diagnostics.propagate is False
        assert len(diagnostics.handlers) == 1

    def test_reconfiguring_replaces_handlers(self):
        configure_logging()
        root = configure_logging("INFO")

        assert len(root.handlers) == 1
        assert len(logging.getLogger(DIAGNOSTICS_LOGGER).handlers) == 1

    def test_plain_format(self, capsys):
        configure_logging("INFO")
        logging.getLogger("md2bb.api").info("hello")

        assert capsys.readouterr().err == "INFO: hello\n"

    def test_trace_format_includes_logger_name(self, capsys):
        configure_logging("INFO", trace_mode=True)
        logging.getLogger("md2bb.api").info("hello")

        err = capsys.readouterr().err
        assert "[INFO] [md2bb.api] hello" in err

    def test_log_file_receives_records_and_diagnostics(self, tmp_path):
        log_file = tmp_path / "md2bb.log"
        root = configure_logging("ERROR", log_file=str(log_file))
        diagnostics = logging.getLogger(DIAGNOSTICS_LOGGER)
        logging.getLogger("md2bb").error("to file")
        diagnostics.warning("Unrecognised HTML tag: <span>")

        flush_all(root, diagnostics)
        content = log_file.read_text(encoding="utf-8")
        assert "[ERROR] [md2bb] to file" in content
        assert "[WARNING] [md2bb.diagnostics] Unrecognised HTML tag: <span>" in content

    def test_unwritable_log_file_is_reported(self, tmp_path, capsys):
        root = configure_logging("WARNING", log_file=str(tmp_path / "missing" / "md2bb.log"))

        assert len(root.handlers) == 1
        assert len(logging.getLogger(DIAGNOSTICS_LOGGER).handlers) == 1
        assert "Could not create log file" in capsys.readouterr().err
