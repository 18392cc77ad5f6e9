"""Core services: snapshot normalizer and host bridge."""
from amusebridge.core.host_bridge import DevToolsPlayerSource, HostBridgeError
from amusebridge.core.normalizer import normalize

__all__ = ["DevToolsPlayerSource", "HostBridgeError", "normalize"]
