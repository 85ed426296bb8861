"""Read and write player files (JSON arrays or CSV)."""

from .players import (
    CSV_HEADER,
    PlayerFileError,
    ImportReport,
    import_players,
    load_players_file,
    players_to_csv,
    players_to_json,
)

__all__ = [
    "CSV_HEADER",
    "PlayerFileError",
    "ImportReport",
    "import_players",
    "load_players_file",
    "players_to_csv",
    "players_to_json",
]
