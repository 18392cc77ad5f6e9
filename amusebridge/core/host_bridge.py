"""Read the raw player object out of the host app over the Chrome DevTools Protocol.

The host (an Electron player) must run with --remote-debugging-port. One
request = one Runtime.evaluate round-trip; nothing is cached between calls.
"""
import asyncio
import itertools
import logging
from typing import Any, Optional, Protocol

import aiohttp

from amusebridge.config import (
    DEVTOOLS_HOST,
    DEVTOOLS_PORT,
    DEVTOOLS_TARGET_FILTER,
    HOST_TIMEOUT_SEC,
    PLAYER_EXPRESSION,
)

logger = logging.getLogger(__name__)

# Copy fields into a plain object: getters such as isCurrentTrackLiked live on
# the Player prototype and would be dropped by value serialization.
DEFAULT_PLAYER_EXPRESSION = """(() => {
  const p = window.yesplaymusic.player;
  return {
    _isPersonalFM: p._isPersonalFM,
    _personalFMTrack: p._personalFMTrack,
    _currentTrack: p._currentTrack,
    _enabled: p._enabled,
    _playing: p._playing,
    _volume: p._volume,
    _progress: p._progress,
    isCurrentTrackLiked: p.isCurrentTrackLiked,
    repeatMode: p.repeatMode,
  };
})()"""


class HostBridgeError(Exception):
    """The raw player state could not be obtained from the host."""


class PlayerStateSource(Protocol):
    async def fetch_player_state(self) -> dict[str, Any]:
        ...


def select_page_target(targets: list[dict], url_filter: str = "") -> Optional[dict]:
    """First inspectable page target, optionally whose URL contains url_filter."""
    for target in targets:
        if target.get("type") != "page" or not target.get("webSocketDebuggerUrl"):
            continue
        if url_filter and url_filter not in (target.get("url") or ""):
            continue
        return target
    return None


def unwrap_evaluate_response(message: dict) -> dict[str, Any]:
    """Return the value of a Runtime.evaluate reply or raise HostBridgeError."""
    if "error" in message:
        error = message["error"] or {}
        raise HostBridgeError(error.get("message") or "DevTools request failed")
    result = message.get("result") or {}
    details = result.get("exceptionDetails")
    if details:
        exception = details.get("exception") or {}
        raise HostBridgeError(
            exception.get("description") or details.get("text") or "Script execution failed"
        )
    value = (result.get("result") or {}).get("value")
    if not isinstance(value, dict):
        raise HostBridgeError("Player object not available in host page")
    return value


class DevToolsPlayerSource:
    """Evaluates the player expression in the host's page over DevTools."""

    def __init__(
        self,
        host: str = DEVTOOLS_HOST,
        port: int = DEVTOOLS_PORT,
        *,
        url_filter: str = DEVTOOLS_TARGET_FILTER,
        expression: str = PLAYER_EXPRESSION or DEFAULT_PLAYER_EXPRESSION,
        timeout: float = HOST_TIMEOUT_SEC,
    ) -> None:
        self.base_url = f"http://{host}:{port}"
        self._url_filter = url_filter
        self._expression = expression
        self._timeout = timeout
        self._ids = itertools.count(1)

    async def fetch_player_state(self) -> dict[str, Any]:
        try:
            return await asyncio.wait_for(self._evaluate(), timeout=self._timeout)
        except asyncio.TimeoutError:
            raise HostBridgeError(
                f"Host did not answer within {self._timeout:.1f}s"
            ) from None
        except aiohttp.ClientError as e:
            raise HostBridgeError(f"Host unreachable at {self.base_url}: {e}") from e

    async def _evaluate(self) -> dict[str, Any]:
        async with aiohttp.ClientSession() as session:
            target = await self._find_target(session)
            async with session.ws_connect(target["webSocketDebuggerUrl"]) as ws:
                request_id = next(self._ids)
                await ws.send_json({
                    "id": request_id,
                    "method": "Runtime.evaluate",
                    "params": {
                        "expression": self._expression,
                        "returnByValue": True,
                        "awaitPromise": True,
                    },
                })
                async for msg in ws:
                    if msg.type != aiohttp.WSMsgType.TEXT:
                        break
                    message = msg.json()
                    # Skip protocol events and replies to other ids
                    if message.get("id") != request_id:
                        continue
                    return unwrap_evaluate_response(message)
        raise HostBridgeError("DevTools connection closed before the player state arrived")

    async def _find_target(self, session: aiohttp.ClientSession) -> dict:
        async with session.get(f"{self.base_url}/json/list") as resp:
            resp.raise_for_status()
            targets = await resp.json(content_type=None)
        target = select_page_target(targets or [], self._url_filter)
        if target is None:
            raise HostBridgeError("No host page found on the DevTools endpoint")
        logger.debug("Using DevTools target %s", target.get("url"))
        return target
