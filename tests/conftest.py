"""Mini README: Shared pytest fixtures.

Points the cached settings at a temporary data directory so tests never
write a register snapshot into the working tree.
"""

from __future__ import annotations

import pytest

from salondesk.configuration import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("SALONDESK_DATA_DIRECTORY", str(tmp_path / "salondesk-data"))
    monkeypatch.setenv("SALONDESK_PERSIST_REGISTER", "false")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
