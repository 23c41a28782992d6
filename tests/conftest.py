import logging
import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from trmap.core import LayeredMap  # noqa: E402


@pytest.fixture
def solid_map() -> LayeredMap:
    """2x2 map with every wall solid and every floor cell open."""
    return LayeredMap(2, 2, floor_value=0, wall_value=1)


@pytest.fixture
def patterned_map() -> LayeredMap:
    """3x2 map where every cell of every layer holds a distinct value."""
    m = LayeredMap(3, 2)
    for i in range(len(m.buffer)):
        m.buffer[i] = i + 1
    return m


@pytest.fixture
def restore_root_logger():
    """Put the root logger's handlers and level back after configure_logging runs."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
