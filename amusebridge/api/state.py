"""Shared application state (injected into routes)."""
from amusebridge.core.host_bridge import DevToolsPlayerSource, PlayerStateSource


class AppState:
    def __init__(self) -> None:
        self._player_source: PlayerStateSource | None = None

    @property
    def player_source(self) -> PlayerStateSource:
        if self._player_source is None:
            self._player_source = DevToolsPlayerSource()
        return self._player_source


_state = AppState()


def get_state() -> AppState:
    return _state


def get_player_source() -> PlayerStateSource:
    return _state.player_source
