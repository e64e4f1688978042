from __future__ import annotations

import pytest

from mimefields.core.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings() -> None:
    # Settings are cached process-wide; tests that patch the environment need a clean cache.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
