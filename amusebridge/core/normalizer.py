"""Map a raw host player snapshot to the /query response.

The host's track records changed shape across releases: the same value may
live under several keys. Each family of keys is listed below in precedence
order; the first key holding a non-empty value is used and the rest are not
consulted. Supporting a newly seen key is a one-line change to a tuple.

Every lookup degrades to "", [] or 0 so normalize() never raises for a
missing or null field.
"""
import math
from typing import Any, Iterable, Mapping, Optional

from amusebridge.config import TRACK_URL_TEMPLATE
from amusebridge.models.query import (
    LikeStatus,
    PlayerInfo,
    Query,
    RepeatType,
    TrackInfo,
    empty_query,
)

RawPlayerState = Mapping[str, Any]

TRACK_ARTISTS_KEYS = ("artists", "ar")
TRACK_ALBUM_KEYS = ("album", "al")
TRACK_DURATION_KEYS = ("dt", "duration")
TRACK_ALT_NAME_KEYS = ("transNames", "alias")
ALBUM_ALT_NAME_KEYS = ("transNames", "transName", "alias")
# Alias list wins over the translation when an artist carries both
ARTIST_ALT_NAME_KEYS = ("alias", "tns", "trans")

_REPEAT_MODES: dict[str, RepeatType] = {"on": "ONE", "all": "ALL"}
_LIKE_STATUSES = ("INDIFFERENT", "LIKE", "DISLIKE")
# Misspelling found in older host builds
_LIKE_STATUS_ALIASES: dict[str, LikeStatus] = {"INDEFFERENT": "INDIFFERENT"}

AUTHOR_SEPARATOR = " / "


def format_name(name: str, *alternates: str) -> str:
    """Primary name plus the first alternate in fullwidth parentheses."""
    if not alternates:
        return name
    return f"{name}（{alternates[0]}）"


def to_duration_human(seconds: int) -> str:
    """m:ss with no hour component (3600 -> "60:00")."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


def transform_repeat_mode(mode: Optional[str]) -> RepeatType:
    if not isinstance(mode, str):
        return "NONE"
    return _REPEAT_MODES.get(mode, "NONE")


def transform_like_status(value: Any) -> LikeStatus:
    """Canonical strings pass through; booleans come from builds exposing a liked flag."""
    if isinstance(value, bool):
        return "LIKE" if value else "INDIFFERENT"
    if isinstance(value, str):
        if value in _LIKE_STATUSES:
            return value  # type: ignore[return-value]
        return _LIKE_STATUS_ALIASES.get(value, "INDIFFERENT")
    return "INDIFFERENT"


def first_present(record: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Value of the first key in keys that is set and non-empty, else None."""
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


def alternate_names(record: Mapping[str, Any], keys: Iterable[str]) -> list[str]:
    """Alternate names from the first non-empty source; a bare string counts as one name."""
    value = first_present(record, keys)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None]
    return []


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if not math.isfinite(value):
        return 0
    return value


def _display_name(record: Mapping[str, Any], alt_keys: Iterable[str]) -> str:
    return format_name(str(record.get("name") or ""), *alternate_names(record, alt_keys))


def active_track(raw: RawPlayerState) -> Mapping[str, Any]:
    """Personal-radio track in radio mode, otherwise the current track."""
    key = "_personalFMTrack" if raw.get("_isPersonalFM") else "_currentTrack"
    return _as_mapping(raw.get(key))


def has_track(track: Mapping[str, Any]) -> bool:
    """False for an empty record or one holding only its identifier."""
    return len(track) > 1


def resolve_duration(track: Mapping[str, Any]) -> tuple[int, int]:
    """(raw_seconds, corrected_seconds) from the millisecond duration.

    The host reports one second too many; corrected drops it unless that
    would take the value below 1.
    """
    raw_seconds = int(_number(first_present(track, TRACK_DURATION_KEYS)) // 1000)
    corrected = raw_seconds - 1 if raw_seconds > 1 else raw_seconds
    return raw_seconds, corrected


def format_author(track: Mapping[str, Any]) -> str:
    artists = first_present(track, TRACK_ARTISTS_KEYS)
    if not isinstance(artists, (list, tuple)):
        return ""
    return AUTHOR_SEPARATOR.join(
        _display_name(artist, ARTIST_ALT_NAME_KEYS)
        for artist in artists
        if isinstance(artist, Mapping)
    )


def format_title(track: Mapping[str, Any]) -> str:
    return _display_name(track, TRACK_ALT_NAME_KEYS)


def format_album(album: Mapping[str, Any]) -> str:
    return _display_name(album, ALBUM_ALT_NAME_KEYS)


def normalize(raw: RawPlayerState) -> Query:
    """Build the /query response from a raw player snapshot. Does not mutate raw."""
    raw = _as_mapping(raw)
    track = active_track(raw)
    if not has_track(track):
        return empty_query()

    progress_raw = _number(raw.get("_progress"))
    progress = int(math.floor(progress_raw))
    duration_raw, duration = resolve_duration(track)
    # Percent uses the unfloored position over the uncorrected duration
    state_percent = progress_raw / duration_raw if duration_raw else 0.0

    album = _as_mapping(first_present(track, TRACK_ALBUM_KEYS))
    track_id = track.get("id")

    return Query(
        player=PlayerInfo(
            hasSong=True,
            isPaused=not raw.get("_playing"),
            volumePercent=_number(raw.get("_volume")) * 100,
            seekbarCurrentPosition=progress,
            seekbarCurrentPositionHuman=to_duration_human(progress),
            statePercent=state_percent,
            likeStatus=transform_like_status(raw.get("isCurrentTrackLiked")),
            repeatType=transform_repeat_mode(raw.get("repeatMode")),
        ),
        track=TrackInfo(
            author=format_author(track),
            title=format_title(track),
            album=format_album(album),
            cover=str(album.get("picUrl") or ""),
            duration=duration,
            durationHuman=to_duration_human(duration),
            url=TRACK_URL_TEMPLATE.format(id=track_id) if track_id is not None else "",
            id=str(track_id) if track_id is not None else "",
        ),
    )
