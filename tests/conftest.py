from __future__ import annotations

from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from finchat.parser.keywords import default_keyword_tables
from finchat.services.storage import MemStorage


def _top_level_tests_group(path: Path) -> str | None:
    parts = path.parts
    try:
        tests_index = parts.index("tests")
    except ValueError:
        return None
    if tests_index + 1 >= len(parts):
        return None
    return parts[tests_index + 1]


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    for item in items:
        group = _top_level_tests_group(Path(str(item.fspath)))
        if group in ("unit", "parser"):
            item.add_marker(pytest.mark.unit)
        elif group == "integration":
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def now() -> datetime:
    """Fixed classification time."""
    return datetime(2026, 1, 23, 12, 0, 0, tzinfo=ZoneInfo("Asia/Ho_Chi_Minh"))


@pytest.fixture
def tables():
    return default_keyword_tables()


@pytest.fixture
def storage() -> MemStorage:
    return MemStorage()
