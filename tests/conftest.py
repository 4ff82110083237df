"""Pytest configuration.

The repository uses a `src/` layout. This conftest ensures tests can import the `chamabot` package
when running `pytest` locally without installing it.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure `import chamabot...` works when running pytest without installing the package.
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))
