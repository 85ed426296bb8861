"""Domain errors raised by the service layer.

The API translates them into status-only responses: ``NotFoundError``
becomes 404 and ``AlreadyExistsError`` becomes 400.
"""

from __future__ import annotations


class FootballError(Exception):
    """Base class for player domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(FootballError):
    """No player matches the given identifier."""

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        super().__init__(f"Player {player_id} not found")


class AlreadyExistsError(FootballError):
    """A player with the same identifier is already stored."""

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        super().__init__(f"Player {player_id} already exists")


__all__ = [
    "FootballError",
    "NotFoundError",
    "AlreadyExistsError",
]
