"""Unit tests for the top-level Typer applications."""

import logging

from saferm.cli.main import app, rm_app, setup_logging
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for the saferm command group."""

    def test_no_args_shows_help(self) -> None:
        """Running without a command prints usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output

    def test_rm_app_help(self) -> None:
        """The drop-in app documents its flags."""
        result = runner.invoke(rm_app, ["--help"])

        assert result.exit_code == 0
        assert "--dry-run" in result.stdout


class TestSetupLogging:
    """Tests for setup_logging function."""

    def teardown_method(self) -> None:
        logger = logging.getLogger("saferm")
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    def test_verbose_enables_debug(self) -> None:
        """Verbose mode logs at DEBUG."""
        setup_logging(verbose=True, quiet=False)

        logger = logging.getLogger("saferm")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_quiet_wins(self) -> None:
        """Quiet mode only lets errors through."""
        setup_logging(verbose=True, quiet=True)

        assert logging.getLogger("saferm").level == logging.ERROR

    def test_repeated_setup_does_not_stack_handlers(self) -> None:
        """Calling twice leaves a single handler."""
        setup_logging(verbose=False, quiet=False)
        setup_logging(verbose=False, quiet=False)

        assert len(logging.getLogger("saferm").handlers) == 1
