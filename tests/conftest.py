"""Shared fixtures for the chart engine tests.

Qt-backed tests rely on pytest-qt (``qtbot`` / ``qapp``); the offscreen
platform is forced before any QApplication is created so the suite runs
headless in CI.
"""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from chartkit import ManualFrameScheduler, RecordingSurface  # noqa: E402


@pytest.fixture
def surface():
    return RecordingSurface(400, 300)


@pytest.fixture
def scheduler():
    return ManualFrameScheduler()


@pytest.fixture
def bar_config():
    return {
        "type": "bar",
        "data": {"labels": ["A", "B"], "datasets": [{"data": [10, 20]}]},
    }
