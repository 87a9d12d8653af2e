"""
Root conftest: puts src/ on the import path so tests run from a plain checkout.
Pipeline fixtures live in tests/conftest.py.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))
