"""Shared pytest configuration for the LinkedIn Accelerator project."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ``apps.api.app`` is imported from the checkout; the libraries may also be installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT / "libs" / "python", REPO_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
