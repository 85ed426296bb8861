"""Storage backends for player records."""

from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Protocol

from football.models import Player


class PlayerStore(Protocol):
    def list(self) -> List[Player]: ...

    def get(self, player_id: str) -> Optional[Player]: ...

    def insert(self, player: Player) -> bool: ...

    def replace(self, player: Player) -> bool: ...

    def remove(self, player_id: str) -> bool: ...

    def clear(self) -> None: ...


class InMemoryPlayerStore:
    """Dict-backed store; insertion order is the listing order."""

    def __init__(self) -> None:
        self._players: Dict[str, Player] = {}
        self._lock = threading.Lock()

    def list(self) -> List[Player]:
        with self._lock:
            return list(self._players.values())

    def get(self, player_id: str) -> Optional[Player]:
        return self._players.get(player_id)

    def insert(self, player: Player) -> bool:
        with self._lock:
            if player.id in self._players:
                return False
            self._players[player.id] = player
            return True

    def replace(self, player: Player) -> bool:
        with self._lock:
            if player.id not in self._players:
                return False
            self._players[player.id] = player
            return True

    def remove(self, player_id: str) -> bool:
        with self._lock:
            return self._players.pop(player_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._players.clear()


class SqlitePlayerStore:
    """Simple SQLite-backed store for player records."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS players (
                    id TEXT PRIMARY KEY,
                    number INTEGER NOT NULL,
                    name TEXT NOT NULL,
                    position TEXT NOT NULL,
                    birth_date TEXT NOT NULL,
                    seq INTEGER NOT NULL
                )
                """
            )

    def list(self) -> List[Player]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM players ORDER BY seq").fetchall()
        return [self._row_to_player(row) for row in rows]

    def get(self, player_id: str) -> Optional[Player]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
            if row is None:
                return None
            return self._row_to_player(row)

    def insert(self, player: Player) -> bool:
        with self._connect() as conn:
            try:
                conn.execute(
                    """
                    INSERT INTO players (id, number, name, position, birth_date, seq)
                    VALUES (?, ?, ?, ?, ?, (SELECT COALESCE(MAX(seq), 0) + 1 FROM players))
                    """,
                    (
                        player.id,
                        player.number,
                        player.name,
                        player.position,
                        player.birth_date.isoformat(),
                    ),
                )
            except sqlite3.IntegrityError:
                return False
        return True

    def replace(self, player: Player) -> bool:
        # seq is left alone so a replaced record keeps its listing position
        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE players
                SET number = ?, name = ?, position = ?, birth_date = ?
                WHERE id = ?
                """,
                (
                    player.number,
                    player.name,
                    player.position,
                    player.birth_date.isoformat(),
                    player.id,
                ),
            )
            return cursor.rowcount > 0

    def remove(self, player_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM players WHERE id = ?", (player_id,))
            return cursor.rowcount > 0

    def clear(self) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM players")

    @staticmethod
    def _row_to_player(row: sqlite3.Row) -> Player:
        return Player(
            id=row["id"],
            number=row["number"],
            name=row["name"],
            position=row["position"],
            birth_date=date.fromisoformat(row["birth_date"]),
        )


__all__ = [
    "PlayerStore",
    "InMemoryPlayerStore",
    "SqlitePlayerStore",
]
