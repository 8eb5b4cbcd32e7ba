"""
Roster loading, seed normalization and seed draws.
"""
import logging
import random
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .errors import DrawError, RosterError
from .models import Competitor

logger = logging.getLogger(__name__)

# Seed numbers reach us under several names depending on which API produced the record.
SEED_FIELDS = ('seed', 'drawSeedNumber', 'draw_seed_number', 'seedNumber', 'seed_number')
NAME_FIELDS = ('name', 'fullName', 'full_name')


def coerce_seed(value) -> Optional[int]:
    """
    Convert a raw seed value to an int, or None when it is not a whole number.

    Numeric strings ("7") and integral floats (7.0) are accepted; booleans,
    fractions and anything unparsable are not.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            return None
    return None


def competitor_from_dict(data: Mapping) -> Competitor:
    """Build a Competitor from a raw record, resolving aliased seed/name fields."""
    if not isinstance(data, Mapping):
        raise RosterError(f"Competitor entry must be a mapping, got {type(data).__name__}")

    raw_id = data.get('id')
    name = next((data[key] for key in NAME_FIELDS if data.get(key) is not None), None)
    if raw_id is None and name is None:
        raise RosterError("Competitor entry needs an 'id' or a 'name'")
    if name is None:
        name = str(raw_id)
    competitor_id = str(raw_id) if raw_id is not None else str(name)

    raw_seed = next((data[key] for key in SEED_FIELDS if data.get(key) is not None), None)
    club = data.get('club')
    return Competitor(
        id=competitor_id,
        name=str(name).strip(),
        seed=coerce_seed(raw_seed),
        club=str(club) if club is not None else None,
    )


def load_roster(source) -> List[Competitor]:
    """
    Turn parsed YAML/JSON into a competitor list.

    Accepts a list of entries, or a mapping with a 'competitors' list.
    """
    if source is None:
        return []
    if isinstance(source, Mapping):
        if 'competitors' not in source:
            raise RosterError("Roster mapping must contain a 'competitors' list")
        source = source['competitors'] or []
    if isinstance(source, (str, bytes)) or not isinstance(source, Iterable):
        raise RosterError("Roster must be a list of competitor entries")
    return [competitor_from_dict(entry) for entry in source]


def normalize_roster(roster: Iterable[Competitor]) -> Tuple[Tuple[Competitor, ...], Tuple[str, ...]]:
    """
    Filter, deduplicate and sort a roster by seed.

    Competitors without a positive integer seed are dropped quietly. For a
    repeated seed the first competitor in input order is kept and every
    later one is dropped with a warning.

    Returns (seed_ordered_roster, warnings).
    """
    seen: Dict[int, Competitor] = {}
    warnings: List[str] = []

    for competitor in roster:
        if not competitor.is_eligible():
            logger.debug("Skipping %s: no usable seed (%r)", competitor.name, competitor.seed)
            continue
        kept = seen.get(competitor.seed)
        if kept is not None:
            message = (
                f"Duplicate seed {competitor.seed} for {competitor.name} "
                f"(already held by {kept.name}); entry skipped"
            )
            logger.warning(message)
            warnings.append(message)
            continue
        seen[competitor.seed] = competitor

    ordered = tuple(sorted(seen.values(), key=lambda c: c.seed))
    return ordered, tuple(warnings)


def automatic_draw(competitors: Iterable[Competitor], rng: Optional[random.Random] = None) -> List[Competitor]:
    """Assign seeds 1..N in random order. Input order of competitors is kept."""
    competitors = list(competitors)
    if not competitors:
        raise DrawError("No competitors to draw")
    rng = rng or random.Random()
    seeds = list(range(1, len(competitors) + 1))
    rng.shuffle(seeds)
    return [competitor.with_seed(seed) for competitor, seed in zip(competitors, seeds)]


def manual_draw(competitors: Iterable[Competitor], assignments: Mapping[str, object]) -> List[Competitor]:
    """
    Apply hand-drawn seed numbers keyed by competitor id.

    Competitors missing from `assignments` come back without a seed.
    """
    competitors = list(competitors)
    if not competitors:
        raise DrawError("No competitors to draw")

    known_ids = {competitor.id for competitor in competitors}
    unknown = sorted(str(key) for key in assignments if str(key) not in known_ids)
    if unknown:
        raise DrawError(f"Unknown competitor id(s): {', '.join(unknown)}")

    seeds: Dict[str, int] = {}
    used: Dict[int, str] = {}
    for key, raw_seed in assignments.items():
        competitor_id = str(key)
        seed = coerce_seed(raw_seed)
        if seed is None or seed <= 0:
            raise DrawError(f"Seed number for {competitor_id} must be a positive integer, got {raw_seed!r}")
        if seed in used:
            raise DrawError(f"Seed number {seed} assigned to both {used[seed]} and {competitor_id}")
        used[seed] = competitor_id
        seeds[competitor_id] = seed

    return [competitor.with_seed(seeds.get(competitor.id)) for competitor in competitors]
