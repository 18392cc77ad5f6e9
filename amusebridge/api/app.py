"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from amusebridge.api.state import AppState, get_state
from amusebridge.config import API_PORT

# Import routes after state to avoid circular imports
from amusebridge.api.routes import query

__all__ = ["app", "AppState", "get_state"]

logger = logging.getLogger(__name__)

ALLOWED_HEADERS = ["Origin", "X-Requested-With", "Content-Type", "Accept"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Amuse server listening at http://localhost:%s", API_PORT)
    yield
    # In-flight requests are not drained
    logger.info("Amuse server closing")


app = FastAPI(
    title="Amuse bridge",
    description="Local now-playing endpoint for the desktop music player",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=ALLOWED_HEADERS,
    expose_headers=ALLOWED_HEADERS,
)

app.include_router(query.router, tags=["query"])
