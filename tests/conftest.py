"""Shared fixtures for touchstick tests."""
import os

os.environ.setdefault('PYGAME_HIDE_SUPPORT_PROMPT', '1')

import pytest

from models import Rect, Vector2D
from touchstick import logging as ts_logging
from touchstick.engine import TouchStickEngine


def vec(x, y):
    return Vector2D(x=float(x), y=float(y))


@pytest.fixture
def zone():
    """150x150 zone centered on the origin (half size 75)."""
    return Rect.from_center_size(vec(0, 0), vec(150, 150))


@pytest.fixture
def engine():
    return TouchStickEngine()


@pytest.fixture(autouse=True)
def quiet_logging():
    """Silence loggers and drop any registered sinks after each test."""
    ts_logging.disable_logging()
    yield
    ts_logging.close_all_sinks()
    ts_logging.configure_logging(level='INFO')
    ts_logging._config['module_levels'].clear()
