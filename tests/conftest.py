"""
Pytest configuration and fixtures for TypeRig tests.
"""

import logging
import os
import shutil
import textwrap
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Set test environment before importing typerig modules
os.environ["TYPERIG_LOG_FILE"] = ""
os.environ["TYPERIG_REBUILD_STALE"] = "false"
os.environ["COLUMNS"] = "200"

from typerig.console import ConsoleHelper

SAMPLE_SOURCES = Path(__file__).resolve().parent.parent / "Sources"


def _write_unit(folder: Path, name: str, body: str) -> Path:
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / f"{name}.py"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


@pytest.fixture
def write_unit():
    """Write a source unit `<name>.py` into a folder: write_unit(folder, name, body) -> path."""
    return _write_unit


@pytest.fixture
def console():
    """Mock console helper; assertions go against show_message calls."""
    mock = MagicMock(spec=ConsoleHelper)
    mock.prompter = "[Initializing...] >"
    return mock


@pytest.fixture
def units_dir(tmp_path, write_unit):
    """Source folder with two good units and one that does not compile."""
    folder = tmp_path / "units"
    write_unit(folder, "rig_alpha", """
        from dataclasses import dataclass


        @dataclass
        class Alpha:
            count: int = 0
            label: str | None = None
    """)
    write_unit(folder, "rig_broken", """
        class Broken(:
            pass
    """)
    write_unit(folder, "rig_gamma", """
        from enum import Enum


        class Mood(Enum):
            CALM = "calm"
            ANGRY = "angry"


        class Gamma:
            mood: Mood = Mood.CALM

            def __init__(self, required):
                self.required = required
    """)
    return folder


@pytest.fixture
def shown():
    """shown(console_mock) -> every text passed to show_message, in order."""
    def _shown(console_mock) -> list[str]:
        return [c.args[0] for c in console_mock.show_message.call_args_list]
    return _shown


@pytest.fixture
def sample_sources(tmp_path):
    """Copy of the shipped Sources/ folder (builds write next to the units)."""
    target = tmp_path / "Sources"
    shutil.copytree(SAMPLE_SOURCES, target, ignore=shutil.ignore_patterns("*.pyc", "*.error.txt", "__pycache__"))
    return target


@pytest.fixture(autouse=True)
def restore_root_logging():
    """CLI commands reconfigure the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
