import sys, os

# Ensure the project root is on path for test imports
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from tests.helpers import RecordingSleep, drain, make_engine

__all__ = [
    "RecordingSleep",
    "drain",
    "make_engine",
]
