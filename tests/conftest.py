from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for entry in (ROOT, ROOT / "src"):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


import pytest

from destructure.config import reset_global_naming
from destructure.schema import AccessorNamingConfig
from destructure.site import AccessorSlot, reset_global_site_registry


@pytest.fixture(autouse=True)
def _default_naming_fixture():
    reset_global_naming(AccessorNamingConfig())
    reset_global_site_registry()
    yield
    reset_global_naming(AccessorNamingConfig())


@pytest.fixture
def slot() -> AccessorSlot:
    return AccessorSlot()


@pytest.fixture
def recorded_setter():
    """Setter that records each update and applies it to a tracked value."""

    class _Recorder:
        def __init__(self) -> None:
            self.updates: list[object] = []
            self.value: object = None

        def __call__(self, update: object) -> None:
            self.updates.append(update)
            self.value = update(self.value) if callable(update) else update

    return _Recorder()


@pytest.fixture
def cache_events() -> list[tuple[str, object]]:
    return []
