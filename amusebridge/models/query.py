"""Query response: player status + track metadata (the /query wire contract)."""
from typing import Literal

from pydantic import BaseModel

# Bump when a field below is renamed, removed or retyped.
QUERY_CONTRACT_VERSION = 1

LikeStatus = Literal["INDIFFERENT", "LIKE", "DISLIKE"]
RepeatType = Literal["NONE", "ALL", "ONE"]


class PlayerInfo(BaseModel):
    """Playback status of the host player."""
    hasSong: bool
    isPaused: bool
    volumePercent: float
    seekbarCurrentPosition: int
    seekbarCurrentPositionHuman: str
    statePercent: float
    likeStatus: LikeStatus
    repeatType: RepeatType


class TrackInfo(BaseModel):
    """Display-ready metadata of the active track."""
    author: str
    title: str
    album: str
    cover: str
    duration: int
    durationHuman: str
    url: str
    id: str
    # Reserved; always False for this player
    isVideo: bool = False
    isAdvertisement: bool = False
    inLibrary: bool = False


class Query(BaseModel):
    player: PlayerInfo
    track: TrackInfo


class ErrorBody(BaseModel):
    error: str


def empty_query() -> Query:
    """Fixed response when nothing is playing."""
    return Query(
        player=PlayerInfo(
            hasSong=False,
            isPaused=True,
            volumePercent=0,
            seekbarCurrentPosition=0,
            seekbarCurrentPositionHuman="0:00",
            statePercent=0,
            likeStatus="INDIFFERENT",
            repeatType="NONE",
        ),
        track=TrackInfo(
            author="",
            title="",
            album="",
            cover="",
            duration=0,
            durationHuman="0:00",
            url="",
            id="",
        ),
    )
