"""
Value types shared by the bracket pipeline.

Everything here is frozen: a computed bracket can be handed to a renderer
or a store (or shared across threads) without copying.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Competitor:
    id: str
    name: str
    seed: Optional[int] = None
    club: Optional[str] = None

    def is_eligible(self) -> bool:
        """True when the competitor carries a positive integer seed."""
        seed = self.seed
        return isinstance(seed, int) and not isinstance(seed, bool) and seed > 0

    def with_seed(self, seed: Optional[int]) -> 'Competitor':
        return Competitor(id=self.id, name=self.name, seed=seed, club=self.club)


@dataclass(frozen=True)
class CompetitorSlot:
    """A concrete competitor: seeded into round 1 or advancing on a bye."""
    competitor: Competitor


@dataclass(frozen=True)
class WinnerSlot:
    """The winner of match `match_number` in round `round`."""
    round: int
    match_number: int

    @property
    def match_id(self) -> str:
        return match_code(self.round, self.match_number)


@dataclass(frozen=True)
class EmptySlot:
    """No opponent; the other side of the match advances untouched."""


Slot = Union[CompetitorSlot, WinnerSlot, EmptySlot]

EMPTY = EmptySlot()


def match_code(round_number: int, match_number: int) -> str:
    return f"R{round_number}-M{match_number}"


@dataclass(frozen=True)
class Match:
    round: int
    match_number: int
    slot_a: Slot
    slot_b: Slot

    @property
    def id(self) -> str:
        return match_code(self.round, self.match_number)

    @property
    def slots(self) -> Tuple[Slot, Slot]:
        return (self.slot_a, self.slot_b)

    @property
    def is_bye(self) -> bool:
        return isinstance(self.slot_a, EmptySlot) or isinstance(self.slot_b, EmptySlot)

    def competitors(self) -> Tuple[Competitor, ...]:
        """Concrete competitors placed directly into this match."""
        return tuple(slot.competitor for slot in self.slots if isinstance(slot, CompetitorSlot))


@dataclass(frozen=True)
class Round:
    number: int
    name: str
    matches: Tuple[Match, ...] = ()


@dataclass(frozen=True)
class BracketPlan:
    competitor_count: int
    lower_power: int
    upper_power: int
    bye_count: int
    first_round_match_count: int
    total_rounds: int


@dataclass(frozen=True)
class BracketResult:
    plan: BracketPlan
    roster: Tuple[Competitor, ...] = ()
    rounds: Tuple[Round, ...] = ()
    warnings: Tuple[str, ...] = ()
    champion: Optional[Competitor] = None
    bye_group: Tuple[Competitor, ...] = field(default=())

    @property
    def match_count(self) -> int:
        return sum(len(round_.matches) for round_ in self.rounds)

    def find_match(self, round_number: int, match_number: int) -> Optional[Match]:
        for round_ in self.rounds:
            if round_.number != round_number:
                continue
            for match in round_.matches:
                if match.match_number == match_number:
                    return match
        return None
