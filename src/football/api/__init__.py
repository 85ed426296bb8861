"""REST API for football player records."""

from __future__ import annotations

import logging
from typing import List

from fastapi import Depends, FastAPI, Request
from fastapi.responses import Response

from football.config import Settings, build_store
from football.exceptions import AlreadyExistsError, NotFoundError
from football.ingest import import_players, load_players_file
from football.models import Player
from football.services import PlayerService


logger = logging.getLogger("uvicorn.error")

ERROR_REASON_HEADER = "X-Error-Reason"


def _status_only(status_code: int, reason: str) -> Response:
    return Response(status_code=status_code, headers={ERROR_REASON_HEADER: reason})


def get_player_service(request: Request) -> PlayerService:
    return request.app.state.player_service


def create_app(
    service: PlayerService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    logger.setLevel(settings.log_level)

    if service is None:
        service = PlayerService(build_store(settings))
        if settings.seed_path is not None:
            report = import_players(service, load_players_file(settings.seed_path))
            logger.info(
                "Seeded %d players from %s (%d already present)",
                len(report.added),
                settings.seed_path,
                len(report.skipped),
            )

    app = FastAPI(title="football players")
    app.state.player_service = service
    app.state.settings = settings

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> Response:
        return _status_only(404, "Not found")

    @app.exception_handler(AlreadyExistsError)
    async def already_exists_handler(request: Request, exc: AlreadyExistsError) -> Response:
        return _status_only(400, "Already exists")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players", response_model=List[Player])
    def list_players(players: PlayerService = Depends(get_player_service)):
        return players.list_players()

    @app.get("/players/{player_id}", response_model=Player)
    def read_player(player_id: str, players: PlayerService = Depends(get_player_service)):
        return players.get_player(player_id)

    @app.post("/players", response_model=Player)
    def create_player(player: Player, players: PlayerService = Depends(get_player_service)):
        return players.add_player(player)

    @app.put("/players/{player_id}", response_model=Player)
    def update_player(
        player_id: str,
        player: Player,
        players: PlayerService = Depends(get_player_service),
    ):
        # The body id selects the record; the path id is only routing.
        if player_id != player.id:
            logger.warning(
                "PUT /players/%s carries body id %s; updating %s",
                player_id,
                player.id,
                player.id,
            )
        return players.update_player(player)

    @app.delete("/players/{player_id}")
    def delete_player(player_id: str, players: PlayerService = Depends(get_player_service)):
        players.delete_player(player_id)
        return Response(status_code=200)

    return app


__all__ = ["ERROR_REASON_HEADER", "create_app", "get_player_service"]
