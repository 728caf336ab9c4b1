# =============================================================================
# LENRA CHECK CLI TESTS
# =============================================================================
# Tests for argument parsing, exit status and fatal errors.
# =============================================================================

from unittest.mock import patch

import pytest

from lenra_check.cli import build_parser, main
from lenra_check.core.reporting import EXIT_CHECK_FAILED, EXIT_FATAL, EXIT_OK
from lenra_check.infra.app_client import AppCallError
from lenra_check.infra.docker_client import ServiceNotExposedError


@pytest.fixture
def patched_client(mock_app_client):
    """Replace the CLI AppClient with the template mock."""
    with patch("lenra_check.cli.AppClient", return_value=mock_app_client) as factory:
        yield factory


class TestParser:
    """Tests for the argument parser."""

    def test_check_arguments(self):
        """Flags, repeated ignores and checker names are parsed."""
        args = build_parser().parse_args(
            ["template", "--strict", "--ignore", "view:*", "--ignore", "manifest:rootWidget", "manifest"]
        )
        assert args.command == "template"
        assert args.strict
        assert args.ignore == ["view:*", "manifest:rootWidget"]
        assert args.rules == ["manifest"]

    def test_command_is_required(self):
        """A check command must be given."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestTemplateCommand:
    """Tests for `lenra-check template`."""

    def test_passing_template(self, patched_client):
        """A template app exits with 0."""
        assert main(["template"]) == EXIT_OK
        patched_client.assert_called_once_with(url="http://localhost:8080", timeout=None)

    def test_app_url_flag(self, patched_client):
        """--app-url and --timeout reach the client."""
        main(["--app-url", "http://app:8080", "--timeout", "3", "template"])
        patched_client.assert_called_once_with(url="http://app:8080", timeout=3.0)

    def test_error_fails(self, patched_client, mock_app_client):
        """A checker error exits with 1."""
        mock_app_client.get_manifest.return_value = {"manifest": {"rootWidget": "other"}, "extra": 1}
        assert main(["template"]) == EXIT_CHECK_FAILED

    def test_ignored_error_passes(self, patched_client, mock_app_client):
        """Ignoring the failing checker makes the run pass."""
        mock_app_client.get_manifest.return_value = {"manifest": {"rootWidget": "other"}}
        assert main(["template", "--ignore", "manifest"]) == EXIT_OK

    def test_strict_warning(self, patched_client, mock_app_client):
        """Warnings fail only in strict mode."""
        mock_app_client.get_manifest.return_value = {"manifest": {"rootView": "main"}, "extra": 1}
        assert main(["template"]) == EXIT_OK
        assert main(["template", "--strict"]) == EXIT_CHECK_FAILED

    def test_strict_from_config(self, patched_client, mock_app_client, tmp_path):
        """Strict mode and ignores can come from the configuration file."""
        mock_app_client.get_manifest.return_value = {"manifest": {"rootView": "main"}, "extra": 1}
        (tmp_path / "lenra-check.yaml").write_text("strict: true\n", encoding="utf-8")
        assert main(["template"]) == EXIT_CHECK_FAILED

        (tmp_path / "lenra-check.yaml").write_text(
            "strict: true\nignore: ['manifest:additionalRootProperties*']\n", encoding="utf-8"
        )
        assert main(["template"]) == EXIT_OK

    def test_invalid_config(self, patched_client, tmp_path):
        """A broken configuration exits with 2."""
        (tmp_path / "lenra-check.yaml").write_text("timeout: nope\n", encoding="utf-8")
        assert main(["template"]) == EXIT_FATAL


class TestAppCommand:
    """Tests for `lenra-check app`."""

    def test_root_view_app(self, patched_client, mock_app_client):
        """A valid root view app exits with 0."""
        mock_app_client.call.return_value = {"type": "text", "value": "Hello"}
        assert main(["app"]) == EXIT_OK

    def test_unknown_manifest_is_fatal(self, patched_client, mock_app_client):
        """A manifest matching no shape exits with 2."""
        mock_app_client.get_manifest.return_value = {"manifest": {"rootWidget": "main"}}
        assert main(["app"]) == EXIT_FATAL
        mock_app_client.call.assert_not_called()

    def test_unreachable_app_is_fatal(self, patched_client, mock_app_client):
        """An unreachable app exits with 2 when the manifest cannot be fetched."""
        mock_app_client.get_manifest.side_effect = AppCallError("connection refused")
        assert main(["app"]) == EXIT_FATAL


class TestServicePreflight:
    """Tests for --require-service."""

    @patch("lenra_check.cli.DockerProvider")
    def test_service_not_exposed(self, mock_provider, patched_client, mock_app_client):
        """A missing app service stops the run before any call."""
        mock_provider.return_value.ensure_service_exposed.side_effect = ServiceNotExposedError("app")
        assert main(["template", "--require-service"]) == EXIT_FATAL
        mock_app_client.get_manifest.assert_not_called()

    @patch("lenra_check.cli.DockerProvider")
    def test_service_exposed(self, mock_provider, patched_client):
        """An exposed app service lets the run go on."""
        mock_provider.return_value.ensure_service_exposed.return_value = [8080]
        assert main(["template", "--require-service"]) == EXIT_OK
        mock_provider.return_value.ensure_service_exposed.assert_called_once_with("app")
