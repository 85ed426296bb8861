"""Command-line interface for serving the API and managing player files."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

import uvicorn

from football.config import Settings, build_store
from football.ingest import (
    PlayerFileError,
    import_players,
    load_players_file,
    players_to_csv,
    players_to_json,
)
from football.services import PlayerService


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage football player records")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the REST API")
    serve.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    serve.add_argument("--port", type=int, default=8000, help="Port to listen on")
    serve.add_argument("--reload", action="store_true", help="Reload on source changes")

    import_cmd = subparsers.add_parser("import", help="Load players from a JSON or CSV file")
    import_cmd.add_argument("path", type=Path, help="Players file (.json array or .csv)")

    export = subparsers.add_parser("export", help="Write all players to a file")
    export.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Destination path; .csv writes CSV, anything else JSON (stdout if omitted)",
    )

    subparsers.add_parser("list", help="Print stored players")
    return parser.parse_args(argv)


def _serve(args: argparse.Namespace, settings: Settings) -> None:
    uvicorn.run(
        "football.api:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    settings = Settings.from_env()

    if args.command == "serve":
        _serve(args, settings)
        return

    service = PlayerService(build_store(settings))

    if args.command == "import":
        try:
            players = load_players_file(args.path)
        except (OSError, PlayerFileError) as exc:
            raise SystemExit(f"Cannot import {args.path}: {exc}") from exc
        report = import_players(service, players)
        print(f"Imported {len(report.added)}/{report.total} players from {args.path}")
        if report.skipped:
            preview = ", ".join(report.skipped[:5])
            more = len(report.skipped) - 5
            suffix = f", +{more} more" if more > 0 else ""
            print(f"Already present: {preview}{suffix}")
        if settings.store == "memory":
            print("Note: FOOTBALL_STORE=memory, imported players are not persisted")
    elif args.command == "export":
        players = service.list_players()
        if args.output is None:
            print(players_to_json(players))
        else:
            if args.output.suffix.lower() == ".csv":
                text = players_to_csv(players)
            else:
                text = players_to_json(players)
            args.output.write_text(text, encoding="utf-8")
            print(f"Wrote {len(players)} players to {args.output}")
    elif args.command == "list":
        for player in service.list_players():
            print(
                f"{player.id}\t#{player.number}\t{player.name}\t{player.position}\t"
                f"{player.birth_date.isoformat()}"
            )


if __name__ == "__main__":
    main()
