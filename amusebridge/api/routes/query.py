"""Now-playing snapshot for overlay widgets."""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from amusebridge.api.state import get_player_source
from amusebridge.core.host_bridge import PlayerStateSource
from amusebridge.core.normalizer import normalize
from amusebridge.models.query import ErrorBody, Query

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/query",
    response_model=Query,
    responses={500: {"model": ErrorBody}},
)
async def get_query(source: PlayerStateSource = Depends(get_player_source)):
    """Return player status and the active track; defaults when nothing is playing."""
    try:
        raw = await source.fetch_player_state()
    except Exception as e:
        logger.exception("Query: failed to read player state from host")
        return JSONResponse(status_code=500, content={"error": str(e)})
    return normalize(raw)
