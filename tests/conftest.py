"""Shared fixtures for the Layout Toolkit test-suite."""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from layout_toolkit.config import ConfigManager
from layout_toolkit.core.converter import TreeBuilder
from layout_toolkit.core.models import AttributePrecedence

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point user overrides at an empty temp folder and reset the singleton."""
    config_dir = tmp_path / "user_config"
    monkeypatch.setenv("LAYOUT_TOOLKIT_CONFIG_DIR", str(config_dir))
    ConfigManager.reset()
    yield config_dir
    ConfigManager.reset()


@pytest.fixture
def builder():
    """TreeBuilder with explicit options (independent of config files)."""
    return TreeBuilder(
        precedence=AttributePrecedence.EXTRA_WINS,
        max_depth=256,
        default_position="absolute",
    )


@pytest.fixture
def stored_records():
    """Records as persisted by the layout editor."""
    return [
        {"html": "<span>Hi</span>", "id": "e1", "x": "5", "y": "5", "type": "div"},
        {
            "html": "<tr><td>1</td><td>2</td></tr>",
            "id": "t1",
            "x": "0",
            "y": "40",
            "type": "Table",
            "styles": {"width": "200px", "border": "1px solid"},
        },
        {"html": "Just text", "id": "p1", "type": "p", "attributes": {"class": "note"}},
    ]
