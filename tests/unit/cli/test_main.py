"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from src.cli.main import __version__, _configure_logging, app
from src.cli.models import ExitCode


runner = CliRunner()


@pytest.fixture(autouse=True)
def mock_configure_logging():
    """Keep CliRunner invocations from attaching handlers to the 'src' logger."""
    with patch('src.cli.main._configure_logging') as mock_configure:
        yield mock_configure


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    @pytest.mark.parametrize("verbosity, level", [
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (5, logging.DEBUG),
    ])
    def test_verbosity_sets_level(self, verbosity, level):
        """Verbosity maps to WARNING, INFO, DEBUG on the 'src' logger."""
        with patch('logging.getLogger') as mock_get_logger:
            mock_app_logger = MagicMock()
            mock_get_logger.return_value = mock_app_logger

            _configure_logging(verbosity)

            mock_get_logger.assert_any_call("src")
            mock_app_logger.setLevel.assert_called_with(level)

    def test_logdir_adds_timestamped_file(self, tmp_path):
        """--logdir creates the directory and a gist_<timestamp>.log file."""
        logdir = tmp_path / "logs"
        app_logger = logging.getLogger("src")
        before = list(app_logger.handlers)

        try:
            _configure_logging(1, str(logdir))

            log_files = list(logdir.glob("gist_*.log"))
            assert len(log_files) == 1
        finally:
            for handler in app_logger.handlers[len(before):]:
                handler.close()
            app_logger.handlers = before


class TestGlobalOptions:
    """Test cases for options shared by every subcommand."""

    def test_version(self):
        """--version prints the version and exits successfully."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"gist version {__version__}" in result.stdout

    def test_no_args_shows_help(self):
        """Running without a command shows usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output

    @patch('src.cli.main.ListCommand')
    @patch('src.cli.main.OutputHandler')
    def test_verbosity_and_no_color_reach_output(
        self, mock_output_cls, mock_list_cmd, mock_configure_logging
    ):
        """Global options configure logging and the output handler."""
        mock_list_cmd.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(app, ["-v", "2", "--no-color", "--logdir", "/tmp/l", "list"])

        assert result.exit_code == 0
        mock_configure_logging.assert_called_once_with(2, "/tmp/l")
        mock_output_cls.assert_called_once_with(verbosity=2, no_color=True)

    @patch('src.cli.main.ListCommand')
    @patch('src.cli.main.OutputHandler')
    def test_config_option_is_passed_to_command(self, mock_output_cls, mock_list_cmd):
        """--config selects the configuration file."""
        mock_list_cmd.return_value.run.return_value = ExitCode.SUCCESS

        runner.invoke(app, ["--config", "/etc/gist.yaml", "list"])

        assert mock_list_cmd.call_args.kwargs["config_path"] == "/etc/gist.yaml"


class TestListCommandCLI:
    """Test cases for `gist list`."""

    @patch('src.cli.main.ListCommand')
    @patch('src.cli.main.OutputHandler')
    def test_list_default(self, mock_output_cls, mock_list_cmd):
        """`gist list` runs without refresh."""
        mock_list_cmd.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(app, ["list"])

        assert result.exit_code == ExitCode.SUCCESS
        mock_list_cmd.return_value.run.assert_called_once_with(refresh=False)

    @patch('src.cli.main.ListCommand')
    @patch('src.cli.main.OutputHandler')
    def test_list_refresh(self, mock_output_cls, mock_list_cmd):
        """`gist list --refresh` forces a remote listing."""
        mock_list_cmd.return_value.run.return_value = ExitCode.SUCCESS

        runner.invoke(app, ["list", "--refresh"])

        mock_list_cmd.return_value.run.assert_called_once_with(refresh=True)

    @patch('src.cli.main.ListCommand')
    @patch('src.cli.main.OutputHandler')
    def test_list_exit_code_propagates(self, mock_output_cls, mock_list_cmd):
        """The command's exit code becomes the process exit code."""
        mock_list_cmd.return_value.run.return_value = ExitCode.NETWORK_ERROR

        result = runner.invoke(app, ["list"])

        assert result.exit_code == ExitCode.NETWORK_ERROR


class TestEditCommandCLI:
    """Test cases for `gist edit`."""

    @patch('src.cli.main.EditCommand')
    @patch('src.cli.main.OutputHandler')
    def test_edit_by_name(self, mock_output_cls, mock_edit_cmd):
        """`gist edit NAME` edits the file with that name."""
        mock_edit_cmd.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(app, ["edit", "notes.md"])

        assert result.exit_code == 0
        mock_edit_cmd.return_value.run.assert_called_once_with(
            "notes.md", page_id=None, refresh=False
        )

    @patch('src.cli.main.EditCommand')
    @patch('src.cli.main.OutputHandler')
    def test_edit_with_id_and_refresh(self, mock_output_cls, mock_edit_cmd):
        """--id and --refresh are forwarded."""
        mock_edit_cmd.return_value.run.return_value = ExitCode.EDIT_ERROR

        result = runner.invoke(app, ["edit", "notes.md", "--id", "abc", "--refresh"])

        assert result.exit_code == ExitCode.EDIT_ERROR
        mock_edit_cmd.return_value.run.assert_called_once_with(
            "notes.md", page_id="abc", refresh=True
        )

    def test_edit_requires_name(self):
        """`gist edit` without a name is a usage error."""
        result = runner.invoke(app, ["edit"])

        assert result.exit_code == 2


class TestNewCommandCLI:
    """Test cases for `gist new`."""

    @patch('src.cli.main.NewCommand')
    @patch('src.cli.main.OutputHandler')
    def test_new_with_options(self, mock_output_cls, mock_new_cmd):
        """Files, description and visibility are forwarded."""
        mock_new_cmd.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(app, ["new", "a.md", "b.py", "-d", "My notes", "--public"])

        assert result.exit_code == 0
        mock_new_cmd.return_value.run.assert_called_once_with(
            ["a.md", "b.py"], description="My notes", public=True
        )

    @patch('src.cli.main.NewCommand')
    @patch('src.cli.main.OutputHandler')
    def test_new_defaults_to_secret(self, mock_output_cls, mock_new_cmd):
        """Gists are secret unless --public is given."""
        mock_new_cmd.return_value.run.return_value = ExitCode.SUCCESS

        runner.invoke(app, ["new", "a.md"])

        mock_new_cmd.return_value.run.assert_called_once_with(
            ["a.md"], description="", public=False
        )
