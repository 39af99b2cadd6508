"""Shared pytest configuration for wiz examples.

Provides the ``example_config`` fixture that loads a fresh ServerConfig
from the ``app.py`` file in the same directory as the test. Each call
re-executes app.py in an isolated module namespace.
"""

import importlib.util
from pathlib import Path

import pytest


@pytest.fixture
def example_config(request: pytest.FixtureRequest):
    """Load the ServerConfig from the sibling app.py next to the test file."""
    app_path = Path(request.path).parent / "app.py"
    module_name = f"example_{app_path.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, app_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.config
