"""Shared fixtures for the Boomer Bot MCP test suite."""

from __future__ import annotations

from typing import Any

import pytest

from core.reliability import reset_circuit_breakers
from core.store import CacheStore
from core.refresh import parse_records
from tests.helpers import make_raw
from utils import clear_cache


@pytest.fixture(autouse=True)
def _isolate_upstreams():
    """Each test starts with an empty response cache and closed circuits."""
    clear_cache()
    reset_circuit_breakers()
    yield
    clear_cache()
    reset_circuit_breakers()


@pytest.fixture
def baker_rows() -> list[dict[str, Any]]:
    return [
        {
            "OU Sooners videos": "Baker Mayfield Heisman Run",
            "Description": "",
            "URL": "https://www.youtube.com/watch?v=bkr123",
            "Channel": "OU",
        },
        {
            "OU Sooners videos": "Texas Game Highlights",
            "Description": "Baker Mayfield throws 3 TDs",
            "URL": "https://youtu.be/tx456",
            "Channel": "ESPN",
        },
    ]


@pytest.fixture
def baker_store(baker_rows) -> CacheStore:
    store = CacheStore()
    raw = make_raw(baker_rows)
    store.replace_if_changed(raw, parse_records(raw))
    return store
