import logging
import sys
import json
import argparse

from core.config_loader import load_config, AppConfig
from core.providers import ChildProvider, InMemoryChildProvider, load_roster
from core.scorer import MatchingService
from core.availability import suggested_slots
from core.geo import coarse_location, distance_km, fuzzy_distance

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

MAX_LIMIT = 50


def get_matches(
    provider: ChildProvider,
    service: MatchingService,
    child_id: str,
    limit: int = 20,
    offset: int = 0,
    max_candidates: int = 100
):
    """Build the matches payload for a child.

    Over-fetches limit + offset results from the scoring engine and slices
    the requested page afterwards.

    Returns:
        Response dict, or None if the child is unknown
    """
    child = provider.get_child(child_id)
    if child is None:
        return None

    candidates = provider.list_candidates(child, limit=max_candidates)
    matches = service.find_top_matches(child, candidates, limit + offset)
    page = matches[offset:offset + limit]

    return {
        'matches': [m.to_dict() for m in page],
        'total': len(matches),
        'limit': limit,
        'offset': offset,
    }


def get_suggestions(provider: ChildProvider, child_id: str, other_id: str):
    """Suggested playdate windows for two children over the next two weeks."""
    child = provider.get_child(child_id)
    other = provider.get_child(other_id)
    if child is None or other is None:
        return None

    return {
        'suggestions': [
            {
                'start': s.start.isoformat(),
                'end': s.end.isoformat(),
                'label': s.label,
                'dayOfWeek': s.day_of_week.value,
            }
            for s in suggested_slots(child.availability_slots, other.availability_slots)
        ]
    }


def _build(config: AppConfig, roster_path: str):
    roster_path = roster_path or config.roster_file
    if not roster_path:
        raise ValueError("No roster file given (use --roster or roster_file in config)")
    children = load_roster(roster_path, default_radius_km=config.matching.default_radius_km)
    return InMemoryChildProvider(children), MatchingService(config.matching)


def _limit(value: str) -> int:
    limit = int(value)
    if not 1 <= limit <= MAX_LIMIT:
        raise argparse.ArgumentTypeError(f"limit must be between 1 and {MAX_LIMIT}")
    return limit


def _offset(value: str) -> int:
    offset = int(value)
    if offset < 0:
        raise argparse.ArgumentTypeError("offset must be >= 0")
    return offset


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="PlayMatch compatibility scoring")
    parser.add_argument("--config", default="config.yaml", help="Path to config YAML")
    parser.add_argument("--roster", default=None, help="Path to roster YAML/JSON")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    match_parser = subparsers.add_parser("match", help="Top matches for a child")
    match_parser.add_argument("--child-id", required=True)
    match_parser.add_argument("--limit", type=_limit, default=20)
    match_parser.add_argument("--offset", type=_offset, default=0)

    suggest_parser = subparsers.add_parser("suggest", help="Suggested playdate slots for two children")
    suggest_parser.add_argument("--child-id", required=True)
    suggest_parser.add_argument("--other-id", required=True)

    fuzzy_parser = subparsers.add_parser("distance", help="Approximate distance between two children")
    fuzzy_parser.add_argument("--child-id", required=True)
    fuzzy_parser.add_argument("--other-id", required=True)

    args = parser.parse_args(argv)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.config)
        provider, service = _build(config, args.roster)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to initialise: {e}")
        return 1

    if args.command == "match":
        payload = get_matches(
            provider, service, args.child_id,
            limit=args.limit, offset=args.offset,
            max_candidates=config.matching.max_candidates
        )
    elif args.command == "suggest":
        payload = get_suggestions(provider, args.child_id, args.other_id)
    else:
        payload = None
        child = provider.get_child(args.child_id)
        other = provider.get_child(args.other_id)
        if child and other:
            if child.household.has_coordinates and other.household.has_coordinates:
                distance = distance_km(child.household.coordinates, other.household.coordinates)
                payload = {'distance': fuzzy_distance(distance)}
            else:
                payload = {'distance': "Location not available"}
            if other.household.city:
                payload['location'] = coarse_location(
                    other.household.city, other.household.state, other.household.country
                )

    if payload is None:
        ids = [args.child_id] if args.command == "match" else [args.child_id, args.other_id]
        missing = [i for i in ids if provider.get_child(i) is None]
        logger.error(f"Child not found: {', '.join(missing)}")
        return 1

    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
