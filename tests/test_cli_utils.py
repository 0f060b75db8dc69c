"""Tests for CLI utility functions."""

import logging

from service_template.cli import utils
from service_template.cli.utils import configure_logging, format_error, print_error
from service_template.exceptions import ConfigurationError


class TestFormatError:
    """Tests for plain-text error formatting."""

    def test_service_error(self):
        err = ConfigurationError("Invalid value for PORT", context={"value": "x"})
        text = format_error(err)
        assert text.startswith("Error: Invalid value for PORT")
        assert "value: x" in text

    def test_other_error_includes_type(self):
        assert format_error(ValueError("bad")) == "Error: ValueError: bad"

    def test_verbose_includes_traceback(self):
        try:
            raise RuntimeError("deep")
        except RuntimeError as e:
            text = format_error(e, verbose=True)

        assert "Traceback" in text
        assert "RuntimeError: deep" in text


class TestPrintError:
    """Tests for error printing."""

    def test_plain_output(self, capsys):
        print_error(ConfigurationError("broken"), use_rich=False)
        assert capsys.readouterr().err == "Error: broken\n"

    def test_rich_output(self, monkeypatch):
        from rich.console import Console

        console = Console(record=True, width=80, force_terminal=False)
        monkeypatch.setattr(utils, "_error_console", console)

        print_error(ConfigurationError("broken [port]"), use_rich=True)

        assert "Error: broken [port]" in console.export_text()

    def test_verbose_output(self, capsys):
        try:
            raise RuntimeError("deep")
        except RuntimeError as e:
            print_error(e, verbose=True)

        assert "RuntimeError: deep" in capsys.readouterr().err


class TestConfigureLogging:
    """Tests for logging setup."""

    def test_sets_root_level(self, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "level", root.level)

        configure_logging("debug")
        assert root.level == logging.DEBUG

        configure_logging(logging.WARNING)
        assert root.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "level", root.level)

        configure_logging("chatty")
        assert root.level == logging.INFO
