"""Runtime configuration read from the environment."""

from .settings import LOG_LEVELS, STORE_KINDS, Settings, build_store

__all__ = [
    "LOG_LEVELS",
    "STORE_KINDS",
    "Settings",
    "build_store",
]
