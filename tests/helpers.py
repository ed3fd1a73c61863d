"""Shared builders for test documents."""

import json
from typing import Any


def make_raw(rows: list[dict[str, Any]]) -> bytes:
    """Serialize rows the way videos.json is published."""
    return json.dumps(rows).encode("utf-8")
