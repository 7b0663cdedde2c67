"""
Test package initializer.

Ensures the project root is on sys.path so `app` and the shared sample data
can be imported when running tests from a plain checkout.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
