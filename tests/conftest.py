"""
Test configuration shared by every test module.

Inserts the project `src/` onto sys.path so `pytest` runs from the repo root
without installing the package.
"""

from __future__ import annotations

import pathlib
import sys

_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))
