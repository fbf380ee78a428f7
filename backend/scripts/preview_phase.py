import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

import yaml
from loguru import logger

from app import crud
from app.core.config import get_settings
from app.db import SessionLocal
from app.domain import CTAContext, EventMilestones, parse_instant
from app.repositories import EventDetailsInput, to_milestones
from app.services.event_phase import format_countdown, resolve, select_cta


def _milestones_from_file(path: Path) -> EventMilestones:
    text = path.read_text(encoding="utf-8")
    raw = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a single mapping of event fields")
    # EventDetailsInput mirrors the event_details columns.
    return to_milestones(EventDetailsInput.from_mapping(raw))


def _milestones_from_db() -> EventMilestones | None:
    with SessionLocal() as session:
        return crud.get_active_milestones(session)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show the event phase the site would render")
    parser.add_argument("--at", default=None, help="ISO timestamp to evaluate (defaults to now, UTC)")
    parser.add_argument("--file", type=Path, default=None, help="Read the event from a YAML/JSON file")
    parser.add_argument(
        "--context",
        choices=[context.value for context in CTAContext],
        default=CTAContext.HEADER.value,
        help="Page region whose call to action is shown",
    )
    parser.add_argument("--debug", action="store_true", help="Include the boundary comparison snapshot")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    now: datetime | None = None
    if args.at:
        now = parse_instant(args.at)
        if now is None:
            logger.error("Invalid --at timestamp: {}", args.at)
            return 1

    if args.file:
        try:
            milestones = _milestones_from_file(args.file)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.error("Could not read event record from {}: {}", args.file, exc)
            return 1
    else:
        milestones = _milestones_from_db()

    links = get_settings().cta_links
    result = resolve(milestones, now, links=links)
    countdown = format_countdown(result)
    output = {
        **result.to_dict(include_debug=args.debug),
        "context": args.context,
        "context_cta": select_cta(result, args.context, links=links).to_dict(),
        "countdown": countdown.to_dict() if countdown else None,
    }
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
