"""Pytest configuration for tdv_gui tests."""

import os
from pathlib import Path

from tests.helpers.optional_imports import module_available

HAS_PYSIDE6 = module_available("PySide6")

# Widgets need a platform plugin even on headless CI machines.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Skip collection of test files if GUI deps are missing.
if not HAS_PYSIDE6:
    collect_ignore = [
        path.name
        for path in Path(__file__).parent.glob("test_*.py")
        if path.name != "test_dependencies.py"
    ]
