"""Entry: bind the /query listener on the fixed port until shutdown."""
import logging

import uvicorn

from amusebridge.config import AMUSE_ENABLED, API_HOST, API_PORT

logger = logging.getLogger(__name__)


def serve() -> None:
    """Run the listener; SIGINT/SIGTERM from the host's quit closes the socket."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    if not AMUSE_ENABLED:
        logger.info("Amuse server disabled (AMUSE_ENABLED=0), not listening")
        return
    uvicorn.run(
        "amusebridge.api.app:app",
        host=API_HOST,
        port=API_PORT,
    )


if __name__ == "__main__":
    serve()
