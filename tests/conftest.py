from typing import Any

import pytest
from fastapi.testclient import TestClient

from amusebridge.api.app import app
from amusebridge.api.state import get_player_source


class FakePlayerSource:
    """Returns queued snapshots; an Exception in the queue is raised instead."""

    def __init__(self, *results: Any) -> None:
        self.results = list(results)
        self.calls = 0

    async def fetch_player_state(self) -> dict[str, Any]:
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def player_source():
    return FakePlayerSource({})


@pytest.fixture
def client(player_source):
    app.dependency_overrides[get_player_source] = lambda: player_source
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _make_raw_state(track: dict | None = None, **overrides: Any) -> dict[str, Any]:
    state = {
        "_isPersonalFM": False,
        "_personalFMTrack": {"id": 0},
        "_currentTrack": track if track is not None else {"id": 0},
        "_playing": True,
        "_volume": 0.5,
        "_progress": 12.7,
        "isCurrentTrackLiked": "INDIFFERENT",
        "repeatMode": "off",
    }
    state.update(overrides)
    return state


@pytest.fixture
def make_raw_state():
    return _make_raw_state
