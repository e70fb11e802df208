from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure repo root is importable for all tests, regardless of nested test layout.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def pinned_profile(monkeypatch):
    """Pin lane widths and worker count so results do not depend on the host."""
    monkeypatch.setenv("OPTBENCH_PROFILE", "generic_avx2")
    monkeypatch.setenv("OPTBENCH_WORKERS", "3")
    monkeypatch.delenv("OPTBENCH_MAX_ALLOC_MB", raising=False)
