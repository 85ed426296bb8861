"""Player CRUD operations and their domain errors."""

from __future__ import annotations

import logging
from typing import List, Optional

from football.exceptions import AlreadyExistsError, NotFoundError
from football.models import Player
from football.persistence import InMemoryPlayerStore, PlayerStore


logger = logging.getLogger("uvicorn.error")


class PlayerService:
    def __init__(self, store: Optional[PlayerStore] = None) -> None:
        self.store: PlayerStore = store if store is not None else InMemoryPlayerStore()

    def list_players(self) -> List[Player]:
        return self.store.list()

    def get_player(self, player_id: str) -> Player:
        player = self.store.get(player_id)
        if player is None:
            logger.warning("Player %s not found", player_id)
            raise NotFoundError(player_id)
        return player

    def add_player(self, player: Player) -> Player:
        if not self.store.insert(player):
            logger.warning("Player %s already exists", player.id)
            raise AlreadyExistsError(player.id)
        logger.info("Added player %s (%s)", player.id, player.name)
        return player

    def update_player(self, player: Player) -> Player:
        if not self.store.replace(player):
            logger.warning("Cannot update missing player %s", player.id)
            raise NotFoundError(player.id)
        logger.info("Updated player %s", player.id)
        return player

    def delete_player(self, player_id: str) -> None:
        if self.store.remove(player_id):
            logger.info("Deleted player %s", player_id)
        else:
            logger.info("Delete requested for unknown player %s; nothing to do", player_id)
