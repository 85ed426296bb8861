"""Service layer over the player store."""

from .players import PlayerService

__all__ = ["PlayerService"]
