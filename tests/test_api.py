import logging
from datetime import date
from unittest.mock import create_autospec

import pytest
from httpx import ASGITransport, AsyncClient

from football.api import ERROR_REASON_HEADER, create_app, get_player_service
from football.config import Settings
from football.exceptions import AlreadyExistsError, NotFoundError
from football.models import Player
from football.persistence import InMemoryPlayerStore
from football.services import PlayerService


IVANA = Player(
    id="1884823",
    number=5,
    name="Ivana ANDRES",
    position="Defender",
    birth_date=date(1994, 7, 13),
)
ALEXIA = Player(
    id="325636",
    number=11,
    name="Alexia PUTELLAS",
    position="Midfielder",
    birth_date=date(1994, 2, 4),
)
IVANA_JSON = {
    "id": "1884823",
    "number": 5,
    "name": "Ivana ANDRES",
    "position": "Defender",
    "birthDate": "1994-07-13",
}


@pytest.fixture
def player_service():
    return create_autospec(PlayerService, instance=True)


@pytest.fixture
async def stub_client(player_service):
    app = create_app(service=player_service, settings=Settings())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest.fixture
async def client():
    app = create_app(service=PlayerService(InMemoryPlayerStore()), settings=Settings())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


@pytest.mark.anyio
async def test_health(stub_client: AsyncClient):
    resp = await stub_client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_list_players(stub_client: AsyncClient, player_service):
    player_service.list_players.return_value = [IVANA, ALEXIA]

    resp = await stub_client.get("/players", headers={"Accept": "application/json"})

    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 2
    assert [Player.model_validate(item) for item in body] == [IVANA, ALEXIA]


@pytest.mark.anyio
async def test_read_player_exists(stub_client: AsyncClient, player_service):
    player_service.get_player.return_value = IVANA

    resp = await stub_client.get("/players/1884823")

    assert resp.status_code == 200
    assert resp.json() == IVANA_JSON
    player_service.get_player.assert_called_once_with("1884823")


@pytest.mark.anyio
async def test_read_player_doesnt_exist(stub_client: AsyncClient, player_service):
    player_service.get_player.side_effect = NotFoundError("1884823")

    resp = await stub_client.get("/players/1884823")

    assert resp.status_code == 404
    assert resp.content == b""
    assert resp.headers[ERROR_REASON_HEADER] == "Not found"


@pytest.mark.anyio
async def test_delete_player(stub_client: AsyncClient, player_service):
    resp = await stub_client.delete("/players/1884823")

    assert resp.status_code == 200
    assert resp.content == b""
    player_service.delete_player.assert_called_once_with("1884823")


@pytest.mark.anyio
async def test_update_player_exists(stub_client: AsyncClient, player_service):
    player_service.update_player.return_value = IVANA

    resp = await stub_client.put("/players/1884823", json=IVANA_JSON)

    assert resp.status_code == 200
    assert resp.json() == IVANA_JSON
    player_service.update_player.assert_called_once_with(IVANA)


@pytest.mark.anyio
async def test_update_player_doesnt_exist(stub_client: AsyncClient, player_service):
    player_service.update_player.side_effect = NotFoundError("1884823")

    resp = await stub_client.put("/players/1884823", json=IVANA_JSON)

    assert resp.status_code == 404
    assert resp.headers[ERROR_REASON_HEADER] == "Not found"


@pytest.mark.anyio
async def test_update_uses_body_id_not_path_id(stub_client: AsyncClient, player_service):
    player_service.update_player.return_value = IVANA

    resp = await stub_client.put("/players/some-other-id", json=IVANA_JSON)

    assert resp.status_code == 200
    player_service.update_player.assert_called_once_with(IVANA)


@pytest.mark.anyio
async def test_update_with_mismatched_ids_logs_warning(stub_client: AsyncClient, player_service, caplog):
    player_service.update_player.return_value = IVANA
    caplog.set_level(logging.WARNING, logger="uvicorn.error")

    resp = await stub_client.put("/players/some-other-id", json=IVANA_JSON)

    assert resp.status_code == 200
    warnings = [
        record
        for record in caplog.records
        if record.name == "uvicorn.error" and record.levelno == logging.WARNING
    ]
    assert len(warnings) == 1
    assert "some-other-id" in warnings[0].getMessage()
    assert "1884823" in warnings[0].getMessage()


@pytest.mark.anyio
async def test_update_with_matching_ids_logs_nothing(stub_client: AsyncClient, player_service, caplog):
    player_service.update_player.return_value = IVANA
    caplog.set_level(logging.WARNING, logger="uvicorn.error")

    resp = await stub_client.put("/players/1884823", json=IVANA_JSON)

    assert resp.status_code == 200
    assert not [record for record in caplog.records if record.levelno >= logging.WARNING]


@pytest.mark.anyio
async def test_service_can_be_replaced_through_dependency_overrides(player_service):
    app = create_app(service=PlayerService(InMemoryPlayerStore()), settings=Settings())
    app.dependency_overrides[get_player_service] = lambda: player_service
    player_service.get_player.return_value = ALEXIA

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        resp = await async_client.get("/players/325636")

    assert resp.status_code == 200
    assert resp.json()["name"] == "Alexia PUTELLAS"
    player_service.get_player.assert_called_once_with("325636")
    assert app.state.player_service.list_players() == []


@pytest.mark.anyio
async def test_create_player_doesnt_exist(stub_client: AsyncClient, player_service):
    player_service.add_player.return_value = IVANA

    resp = await stub_client.post("/players", json=IVANA_JSON)

    assert resp.status_code == 200
    assert resp.json() == IVANA_JSON
    player_service.add_player.assert_called_once_with(IVANA)


@pytest.mark.anyio
async def test_create_player_already_exists(stub_client: AsyncClient, player_service):
    player_service.add_player.side_effect = AlreadyExistsError("1884823")

    resp = await stub_client.post("/players", json=IVANA_JSON)

    assert resp.status_code == 400
    assert resp.content == b""
    assert resp.headers[ERROR_REASON_HEADER] == "Already exists"


@pytest.mark.anyio
async def test_create_player_rejects_malformed_body(stub_client: AsyncClient, player_service):
    resp = await stub_client.post(
        "/players",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 422

    resp = await stub_client.post("/players", json={**IVANA_JSON, "birthDate": "13/07/1994"})
    assert resp.status_code == 422
    player_service.add_player.assert_not_called()


@pytest.mark.anyio
async def test_player_lifecycle(client: AsyncClient):
    resp = await client.post("/players", json=IVANA_JSON)
    assert resp.status_code == 200
    assert resp.json() == IVANA_JSON

    resp = await client.post("/players", json=IVANA_JSON)
    assert resp.status_code == 400

    resp = await client.get("/players/1884823")
    assert resp.status_code == 200
    assert resp.json() == IVANA_JSON

    resp = await client.delete("/players/1884823")
    assert resp.status_code == 200

    resp = await client.get("/players/1884823")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_update_then_list(client: AsyncClient):
    resp = await client.put("/players/1884823", json=IVANA_JSON)
    assert resp.status_code == 404

    await client.post("/players", json=IVANA_JSON)
    await client.post("/players", json=ALEXIA.to_json_dict())

    moved = {**IVANA_JSON, "number": 4, "position": "Centre-back"}
    resp = await client.put("/players/1884823", json=moved)
    assert resp.status_code == 200
    assert resp.json() == moved

    resp = await client.get("/players")
    assert resp.status_code == 200
    assert resp.json() == [moved, ALEXIA.to_json_dict()]

    service = client.app.state.player_service
    assert service.get_player("1884823").number == 4


@pytest.mark.anyio
async def test_delete_unknown_player_is_ok(client: AsyncClient):
    resp = await client.delete("/players/nobody")
    assert resp.status_code == 200


def test_create_app_builds_sqlite_store_and_seeds(tmp_path):
    seed = tmp_path / "seed.json"
    seed.write_text(
        "[" + ", ".join(
            [
                '{"id": "1884823", "number": 5, "name": "Ivana ANDRES", "position": "Defender", "birthDate": "1994-07-13"}',
                '{"id": "325636", "number": 11, "name": "Alexia PUTELLAS", "position": "Midfielder", "birthDate": "1994-02-04"}',
            ]
        ) + "]",
        encoding="utf-8",
    )
    settings = Settings(store="sqlite", db_path=str(tmp_path / "players.sqlite"), seed_path=seed)

    app = create_app(settings=settings)
    service = app.state.player_service
    assert [player.id for player in service.list_players()] == ["1884823", "325636"]

    # Seeding again skips ids already stored.
    again = create_app(settings=settings)
    assert len(again.state.player_service.list_players()) == 2
