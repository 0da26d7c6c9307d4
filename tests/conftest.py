from __future__ import annotations

from collections.abc import Callable

import pytest

from luckydraw import create_app
from luckydraw.services.draw_engine import DrawEngine
from luckydraw.services.spreadsheet_service import default_identifiers


class ScriptedRandomness:
    """Stands in for RandomnessSource with a fixed choice rule."""

    def __init__(self, pick: Callable[[int], int]) -> None:
        self._pick = pick
        self.calls: list[int] = []

    def next_int(self, max_value: int) -> int:
        self.calls.append(max_value)
        return self._pick(max_value)


@pytest.fixture()
def scripted() -> type[ScriptedRandomness]:
    return ScriptedRandomness


@pytest.fixture()
def pool_180() -> list[str]:
    return default_identifiers(1, 180, 3)


@pytest.fixture()
def engine(pool_180) -> DrawEngine:
    draw_engine = DrawEngine()
    draw_engine.load_pool(pool_180)
    return draw_engine


@pytest.fixture()
def app():
    return create_app(
        {
            "TESTING": True,
            "AWARDS_FILE": "",
            "DEFAULT_POOL_START": 1,
            "DEFAULT_POOL_END": 180,
            "DEFAULT_POOL_WIDTH": 3,
            "USE_STRONG_RANDOM": True,
        }
    )


@pytest.fixture()
def client(app):
    return app.test_client()
