"""Pytest configuration for koinos tests."""

import io
import sys
from pathlib import Path

import pytest

# Put the flat modules at the repository root on sys.path
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

from console_ui import ConsoleUI  # noqa: E402


@pytest.fixture
def captured_ui():
    """ConsoleUI writing plain text to a buffer, wide enough to avoid wrapping."""
    buffer = io.StringIO()
    ui = ConsoleUI(force_terminal=False, file=buffer, width=200)
    ui.buffer = buffer
    return ui
