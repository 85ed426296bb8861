"""Helpers to load player files and emit canonical records."""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path
from typing import Iterable, List, Sequence

from pydantic import ValidationError

from football.exceptions import AlreadyExistsError
from football.models import Player
from football.services import PlayerService


logger = logging.getLogger(__name__)

CSV_HEADER: tuple[str, ...] = ("id", "number", "name", "position", "birthDate")


class PlayerFileError(ValueError):
    """Raised when a player file cannot be parsed."""


@dataclass
class ImportReport:
    added: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.added) + len(self.skipped)


def _parse_rows(rows: Iterable[dict], source: Path) -> List[Player]:
    players: List[Player] = []
    for idx, row in enumerate(rows, start=1):
        if not isinstance(row, dict):
            raise PlayerFileError(f"{source}: entry {idx} is not an object")
        try:
            players.append(Player.model_validate(row))
        except ValidationError as exc:
            raise PlayerFileError(f"{source}: entry {idx} is invalid: {exc}") from exc
    return players


def load_players_file(path: Path) -> List[Player]:
    """Load players from a JSON array or a CSV file with ``CSV_HEADER`` columns."""

    text = path.read_text(encoding="utf-8-sig")
    if path.suffix.lower() == ".csv":
        reader = csv.DictReader(StringIO(text))
        missing = [column for column in CSV_HEADER if column not in (reader.fieldnames or [])]
        if missing:
            raise PlayerFileError(f"{path}: missing columns {', '.join(missing)}")
        return _parse_rows(reader, path)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PlayerFileError(f"{path}: invalid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise PlayerFileError(f"{path}: expected a JSON array of players")
    return _parse_rows(data, path)


def players_to_json(players: Sequence[Player]) -> str:
    return json.dumps([player.to_json_dict() for player in players], indent=2)


def players_to_csv(players: Sequence[Player]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADER)
    for player in players:
        writer.writerow([
            player.id,
            player.number,
            player.name,
            player.position,
            player.birth_date.isoformat(),
        ])
    return buffer.getvalue()


def import_players(service: PlayerService, players: Iterable[Player]) -> ImportReport:
    """Add each player through the service, skipping ids already present."""

    report = ImportReport()
    for player in players:
        try:
            service.add_player(player)
        except AlreadyExistsError:
            report.skipped.append(player.id)
            continue
        report.added.append(player.id)
    logger.info("Imported %d players, skipped %d", len(report.added), len(report.skipped))
    return report
