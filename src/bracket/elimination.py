"""
Single elimination bracket generation.

The bracket is built in four stages, each a pure function of the previous
stage's output:

    normalize_roster -> plan_bracket -> pair_first_round -> reduce_rounds

build_bracket() runs them in order.
"""
import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import (
    EMPTY,
    BracketPlan,
    BracketResult,
    Competitor,
    CompetitorSlot,
    Match,
    Round,
    Slot,
    WinnerSlot,
)
from .seeding import normalize_roster
from .settings import get_default_settings


def calculate_lower_power(num_competitors: int) -> int:
    """Largest power of 2 not above num_competitors (0 for an empty roster)."""
    if num_competitors <= 0:
        return 0
    return 1 << (num_competitors.bit_length() - 1)


def calculate_bracket_size(num_competitors: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    lower = calculate_lower_power(num_competitors)
    if lower == num_competitors:
        return lower
    return lower * 2


def calculate_byes(num_competitors: int) -> int:
    """Calculate number of byes needed."""
    return calculate_bracket_size(num_competitors) - max(num_competitors, 0)


def plan_bracket(num_competitors: int) -> BracketPlan:
    """
    Work out bracket dimensions for a roster of `num_competitors`.

    For 25 competitors: lower power 16, bracket size 32, 7 byes,
    9 first round matches, 5 rounds.
    """
    if num_competitors < 0:
        raise ValueError(f"Competitor count cannot be negative: {num_competitors}")

    lower_power = calculate_lower_power(num_competitors)
    upper_power = calculate_bracket_size(num_competitors)
    bye_count = calculate_byes(num_competitors)
    first_round_matches = (num_competitors - bye_count) // 2
    total_rounds = int(math.log2(upper_power)) if upper_power else 0

    return BracketPlan(
        competitor_count=num_competitors,
        lower_power=lower_power,
        upper_power=upper_power,
        bye_count=bye_count,
        first_round_match_count=first_round_matches,
        total_rounds=total_rounds,
    )


def get_round_name(match_count: int, round_number: int, settings: Optional[Dict] = None) -> str:
    """Get the name of a round from the number of matches it holds."""
    settings = settings or get_default_settings()
    label = settings['round_labels'].get(match_count)
    if label:
        return label
    return settings['round_label_template'].format(number=round_number)


def pair_first_round(roster: Sequence[Competitor], plan: BracketPlan,
                     settings: Optional[Dict] = None) -> Tuple[Round, Tuple[Competitor, ...]]:
    """
    Create round 1 and the group of competitors who skip it.

    The seed-ordered roster splits into three runs: the top seeds and the
    bottom seeds play round 1, the middle seeds get a bye into round 2.

    With byes (non power of 2), groups pair in order: seed 1 plays the
    first of the bottom group, seed 2 the second, and so on. For 25
    competitors that is 1v17, 2v18 ... 9v25 with seeds 10-16 on byes.

    Without byes, the bottom group is reversed so that 1 plays N, 2 plays
    N-1 (8 competitors: 1v8, 2v7, 3v6, 4v5).

    Returns (round_1, bye_group).
    """
    first_round_matches = plan.first_round_match_count
    num_competitors = len(roster)

    higher_seeds = roster[:first_round_matches]
    bye_group = tuple(roster[first_round_matches:num_competitors - first_round_matches])
    lower_seeds = list(roster[num_competitors - first_round_matches:])
    if plan.bye_count == 0:
        lower_seeds.reverse()

    matches = tuple(
        Match(
            round=1,
            match_number=i + 1,
            slot_a=CompetitorSlot(higher),
            slot_b=CompetitorSlot(lower),
        )
        for i, (higher, lower) in enumerate(zip(higher_seeds, lower_seeds))
    )

    # A first round played alongside byes is a play-in, whatever its size
    if plan.bye_count == 0:
        name = get_round_name(len(matches), 1, settings)
    else:
        name = (settings or get_default_settings())['round_label_template'].format(number=1)

    return Round(number=1, name=name, matches=matches), bye_group


def _pair_sequentially(round_number: int, first_match_number: int, entrants: Sequence[Slot]) -> List[Match]:
    """Pair entrants two at a time; an odd last entrant faces an empty slot."""
    matches = []
    for offset in range(0, len(entrants), 2):
        slot_a = entrants[offset]
        slot_b = entrants[offset + 1] if offset + 1 < len(entrants) else EMPTY
        matches.append(Match(
            round=round_number,
            match_number=first_match_number + offset // 2,
            slot_a=slot_a,
            slot_b=slot_b,
        ))
    return matches


def _build_second_round(first_round: Round, bye_group: Sequence[Competitor],
                        settings: Optional[Dict]) -> Round:
    """
    Merge round 1 winners with the bye group.

    Winner of match i meets bye_group[i] while both lists last; whichever
    list is longer then pairs the rest of its entries among themselves.
    """
    winners = [WinnerSlot(round=first_round.number, match_number=m.match_number)
               for m in first_round.matches]
    byes = [CompetitorSlot(competitor) for competitor in bye_group]
    paired = min(len(winners), len(byes))

    matches = [
        Match(round=2, match_number=i + 1, slot_a=winners[i], slot_b=byes[i])
        for i in range(paired)
    ]
    leftover = winners[paired:] if len(winners) > len(byes) else byes[paired:]
    matches.extend(_pair_sequentially(2, paired + 1, leftover))

    return Round(number=2, name=get_round_name(len(matches), 2, settings), matches=tuple(matches))


def _build_next_round(previous: Round, settings: Optional[Dict]) -> Round:
    number = previous.number + 1
    winners = [WinnerSlot(round=previous.number, match_number=m.match_number)
               for m in previous.matches]
    matches = tuple(_pair_sequentially(number, 1, winners))
    return Round(number=number, name=get_round_name(len(matches), number, settings), matches=matches)


def reduce_rounds(first_round: Round, bye_group: Sequence[Competitor], plan: BracketPlan,
                  settings: Optional[Dict] = None) -> Tuple[Round, ...]:
    """
    Build round 2 through the final.

    Round 2 folds the byes in; every later round pairs winners of
    consecutive matches from the round before.
    """
    if plan.total_rounds < 2:
        return ()

    rounds = [_build_second_round(first_round, bye_group, settings)]
    for _ in range(3, plan.total_rounds + 1):
        rounds.append(_build_next_round(rounds[-1], settings))
    return tuple(rounds)


def build_bracket(roster: Iterable[Competitor], settings: Optional[Dict] = None) -> BracketResult:
    """
    Build a complete single elimination bracket from a seeded roster.

    Entries without a positive seed are ignored and repeated seeds keep
    only their first entry (reported in `warnings`). Fewer than two
    eligible competitors give a bracket with no rounds; with exactly one,
    that competitor is returned as champion.
    """
    ordered, warnings = normalize_roster(roster)
    plan = plan_bracket(len(ordered))

    if plan.total_rounds == 0:
        champion = ordered[0] if len(ordered) == 1 else None
        return BracketResult(plan=plan, roster=ordered, warnings=warnings, champion=champion)

    first_round, bye_group = pair_first_round(ordered, plan, settings)
    later_rounds = reduce_rounds(first_round, bye_group, plan, settings)

    return BracketResult(
        plan=plan,
        roster=ordered,
        rounds=(first_round,) + later_rounds,
        warnings=warnings,
        bye_group=bye_group,
    )
