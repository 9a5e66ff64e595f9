import sys, os

# Ensure src and the repository root are on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

import pytest

from match3.board import create_board
from tests.helpers import random_pieces


@pytest.fixture
def random_board():
    return create_board(random_pieces(seed=7), 6, 6)
