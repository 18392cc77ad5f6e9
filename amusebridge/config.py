"""Configuration: env, listener, DevTools bridge to the host player."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of amusebridge package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so AMUSE_* overrides are set
load_dotenv(BASE_DIR / ".env")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# Reporting endpoint. Port is part of the consumer contract (widgets poll it).
AMUSE_ENABLED = _env_flag("AMUSE_ENABLED", "1")
API_HOST = os.getenv("AMUSE_API_HOST", "0.0.0.0")
API_PORT = 9863

# Host player: Electron app started with --remote-debugging-port
DEVTOOLS_HOST = os.getenv("AMUSE_DEVTOOLS_HOST", "127.0.0.1")
DEVTOOLS_PORT = int(os.getenv("AMUSE_DEVTOOLS_PORT", "9222"))
# Substring of the page URL to pick when the host has several windows
DEVTOOLS_TARGET_FILTER = os.getenv("AMUSE_DEVTOOLS_TARGET_FILTER", "")
HOST_TIMEOUT_SEC = float(os.getenv("AMUSE_HOST_TIMEOUT_SEC", "2.0"))
# Empty = use the built-in expression in core.host_bridge
PLAYER_EXPRESSION = os.getenv("AMUSE_PLAYER_EXPRESSION", "")

TRACK_URL_TEMPLATE = "https://music.163.com/song?id={id}"
