"""Lightweight REST client for the football players API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_player(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SystemExit(f"Invalid player file {path}: {exc}") from exc
    if not isinstance(data, dict) or "id" not in data:
        raise SystemExit(f"{path} must hold a single player object with an id")
    return data


def _fail(resp: httpx.Response, what: str) -> None:
    reason = resp.headers.get("X-Error-Reason") or resp.reason_phrase
    raise SystemExit(f"{what}: {resp.status_code} {reason}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the football players REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--list", action="store_true", help="List all players")
    parser.add_argument("--get", metavar="PLAYER_ID", help="Fetch a single player")
    parser.add_argument("--create", type=Path, metavar="FILE", help="Create a player from a JSON file")
    parser.add_argument("--update", type=Path, metavar="FILE", help="Replace a player from a JSON file")
    parser.add_argument("--delete", metavar="PLAYER_ID", help="Delete a player")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.create:
            player = load_player(args.create)
            resp = client.post("/players", json=player)
            if resp.status_code == 400:
                _fail(resp, f"player {player['id']} not created")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.update:
            player = load_player(args.update)
            resp = client.put(f"/players/{player['id']}", json=player)
            if resp.status_code == 404:
                _fail(resp, f"player {player['id']} not updated")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.get:
            resp = client.get(f"/players/{args.get}")
            if resp.status_code == 404:
                _fail(resp, f"player {args.get} not found")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.delete:
            resp = client.delete(f"/players/{args.delete}")
            resp.raise_for_status()
            print(f"Deleted player {args.delete}")
        if args.list:
            resp = client.get("/players")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
