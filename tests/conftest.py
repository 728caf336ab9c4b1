"""
Pytest configuration and fixtures for lenra-check tests.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from lenra_check.core.template import (  # noqa: E402
    EXPECTED_COUNTER,
    EXPECTED_HOME,
    EXPECTED_MAIN,
    EXPECTED_MENU,
)
from lenra_check.infra.app_client import AppClient  # noqa: E402


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run every test from an empty directory without LENRA_* variables."""
    for name in ("LENRA_APP_URL", "LENRA_APP_TIMEOUT", "LENRA_CHECK_STRICT", "LENRA_CHECK_IGNORE"):
        # setenv first: teardown then unsets values a test loads from a .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def template_views():
    """The view results of an app identical to the template."""
    return {
        "main": EXPECTED_MAIN,
        "menu": EXPECTED_MENU,
        "home": EXPECTED_HOME,
        "counter": EXPECTED_COUNTER,
    }


@pytest.fixture
def mock_app_client(template_views):
    """Mock AppClient answering like the template app."""
    client = MagicMock(spec=AppClient)
    client.url = "http://localhost:8080"
    client.get_manifest.return_value = {"manifest": {"rootView": "main"}}
    client.get_view.side_effect = lambda view, data=None, props=None: template_views[view]
    return client


@pytest.fixture
def view_result():
    """A view result following the view result schema."""
    return {
        "type": "flex",
        "children": [
            {"type": "text", "value": "Hello"},
            {"type": "view", "name": "menu"},
        ],
    }
