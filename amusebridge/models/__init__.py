"""Data models for the /query response."""
from amusebridge.models.query import (
    ErrorBody,
    LikeStatus,
    PlayerInfo,
    Query,
    RepeatType,
    TrackInfo,
    empty_query,
)

__all__ = [
    "ErrorBody",
    "LikeStatus",
    "PlayerInfo",
    "Query",
    "RepeatType",
    "TrackInfo",
    "empty_query",
]
