"""Fixtures for the timer, thread and AI tests."""

from __future__ import annotations

import os
import random
from collections.abc import Iterator

import pytest

# Headless runners have no display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """One event loop shared by every test that drives QTimer or QThread."""
    from PyQt6.QtCore import QCoreApplication

    yield QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
