import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from app import crud
from app.db import SessionLocal, init_db
from app.repositories import EventDetailsInput


def load_event_payload(path: Path) -> dict[str, Any]:
    """Read an event record from a YAML or JSON file."""

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        payload = json.loads(text)
    else:
        payload = yaml.safe_load(text)
    if not isinstance(payload, dict):
        raise ValueError(f"{path} must contain a single mapping of event fields")
    return payload


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or update the awards event calendar")
    parser.add_argument("--file", type=Path, required=True, help="YAML or JSON event record")
    parser.add_argument(
        "--no-activate",
        action="store_true",
        help="Store the event without making it the active one",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    try:
        payload = EventDetailsInput.from_mapping(load_event_payload(args.file))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("Could not read event record from {}: {}", args.file, exc)
        return 1

    init_db()
    with SessionLocal() as session:
        record = crud.upsert_event_details(session, payload, activate=not args.no_activate)
        session.commit()
        logger.info(
            "Stored event {} ({} {}) active={}",
            record.id,
            record.event_name,
            record.event_year,
            record.is_active,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
