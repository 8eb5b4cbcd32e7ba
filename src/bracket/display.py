"""
Bracket output for renderers: a JSON-ready dict and a plain text view.
"""
from typing import Dict, List, Optional

from .models import BracketResult, Competitor, CompetitorSlot, Match, Slot, WinnerSlot
from .settings import get_default_settings


def competitor_label(competitor: Competitor) -> str:
    return f"#{competitor.seed} {competitor.name}"


def slot_label(slot: Slot, settings: Optional[Dict] = None) -> str:
    """Human readable text for one side of a match."""
    settings = settings or get_default_settings()
    if isinstance(slot, CompetitorSlot):
        return competitor_label(slot.competitor)
    if isinstance(slot, WinnerSlot):
        return settings['winner_label_template'].format(round=slot.round, match=slot.match_number)
    return settings['bye_label']


def _competitor_dict(competitor: Competitor) -> Dict:
    return {
        'id': competitor.id,
        'name': competitor.name,
        'seed': competitor.seed,
        'club': competitor.club,
    }


def slot_to_dict(slot: Slot, settings: Optional[Dict] = None) -> Dict:
    data = {'label': slot_label(slot, settings)}
    if isinstance(slot, CompetitorSlot):
        data['type'] = 'competitor'
        data['competitor'] = _competitor_dict(slot.competitor)
    elif isinstance(slot, WinnerSlot):
        data['type'] = 'winner'
        data['source_match'] = slot.match_id
    else:
        data['type'] = 'empty'
    return data


def match_to_dict(match: Match, settings: Optional[Dict] = None) -> Dict:
    return {
        'id': match.id,
        'round': match.round,
        'match_number': match.match_number,
        'slots': [slot_to_dict(match.slot_a, settings), slot_to_dict(match.slot_b, settings)],
        'seeds': [slot.competitor.seed if isinstance(slot, CompetitorSlot) else None
                  for slot in match.slots],
        'is_bye': match.is_bye,
    }


def get_bracket_display(result: BracketResult, settings: Optional[Dict] = None) -> Dict:
    """
    Get bracket data formatted for UI display.

    Returns dict with:
    - totals: competitors, byes, first round matches, rounds, matches
    - plan: the raw bracket dimensions
    - rounds: list of {number, name, matches}
    - warnings: duplicate seed notices
    - champion: competitor dict when the roster has a single entry
    """
    plan = result.plan
    rounds = [
        {
            'number': round_.number,
            'name': round_.name,
            'matches': [match_to_dict(match, settings) for match in round_.matches],
        }
        for round_ in result.rounds
    ]
    return {
        'total_competitors': plan.competitor_count,
        'bye_count': plan.bye_count,
        'first_round_matches': plan.first_round_match_count,
        'total_rounds': plan.total_rounds,
        'total_matches': result.match_count,
        'plan': {
            'lower_power': plan.lower_power,
            'upper_power': plan.upper_power,
            'bye_count': plan.bye_count,
            'first_round_match_count': plan.first_round_match_count,
            'total_rounds': plan.total_rounds,
        },
        'seeded_competitors': [_competitor_dict(c) for c in result.roster],
        'byes': [_competitor_dict(c) for c in result.bye_group],
        'rounds': rounds,
        'warnings': list(result.warnings),
        'champion': _competitor_dict(result.champion) if result.champion else None,
    }


def render_bracket(result: BracketResult, settings: Optional[Dict] = None) -> str:
    """Plain text bracket, one block per round."""
    if not result.rounds:
        if result.champion is not None:
            return f"Champion: {competitor_label(result.champion)}"
        return "No bracket: no competitors with a valid seed"

    lines: List[str] = []
    for round_ in result.rounds:
        lines.append(round_.name)
        for match in round_.matches:
            lines.append(
                f"  [{match.id}] {slot_label(match.slot_a, settings)} vs {slot_label(match.slot_b, settings)}"
            )
        lines.append("")
    if lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)
