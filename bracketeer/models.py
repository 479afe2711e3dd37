"""
bracketeer/models.py - Entity types for tournaments, participants and matches

Participants live in a Roster owned by their tournament. Matches keep only
participant ids plus a reference to that roster, so their player lookups
always reflect the most recent participant refresh.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator

from .errors import InvalidTournamentTypeError, UnresolvedParticipantError


# ============================================================================
# Enumerations
# ============================================================================


class TournamentType(str, Enum):
    """Bracket format. Values are the literal strings used on the wire."""

    SINGLE_ELIMINATION = "single elimination"
    DOUBLE_ELIMINATION = "double elimination"
    ROUND_ROBIN = "round robin"
    SWISS = "swiss"

    @classmethod
    def parse(cls, value: "TournamentType | str") -> "TournamentType":
        """Accept a member or its wire string.

        Raises:
            InvalidTournamentTypeError: value is not one of the four formats
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidTournamentTypeError(repr(value)) from None


class MatchResult(Enum):
    OPEN = "open"
    DRAW = "draw"
    PLAYER1_WON = "player1"
    PLAYER2_WON = "player2"


# ============================================================================
# Records
# ============================================================================


@dataclass(frozen=True)
class Participant:
    id: int
    name: str
    seed: int | None = None

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TournamentRecord:
    """Fields decoded from one <tournament> element."""

    id: int
    name: str
    url: str
    description: str
    tournament_type: TournamentType
    subdomain: str | None = None


class Roster:
    """Participants of one tournament, in fetch order, indexed by id."""

    def __init__(self, participants: Iterable[Participant] = ()):
        self._ordered: list[Participant] = []
        self._by_id: dict[int, Participant] = {}
        self.replace(participants)

    def replace(self, participants: Iterable[Participant]) -> None:
        """Swap the whole contents for a freshly fetched list."""
        ordered = list(participants)
        self._ordered = ordered
        self._by_id = {p.id: p for p in ordered}

    def get(self, participant_id: int) -> Participant | None:
        return self._by_id.get(participant_id)

    def __getitem__(self, participant_id: int) -> Participant:
        try:
            return self._by_id[participant_id]
        except KeyError:
            raise UnresolvedParticipantError(f"participant id {participant_id}") from None

    def __contains__(self, participant_id: object) -> bool:
        return participant_id in self._by_id

    def __iter__(self) -> Iterator[Participant]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        return f"Roster({self._ordered!r})"


@dataclass(frozen=True)
class Match:
    """A pairing computed by the server. Read-only from the client's side."""

    id: int
    player1_id: int
    player2_id: int
    result: MatchResult
    roster: Roster = field(repr=False, compare=False)

    @property
    def player1(self) -> Participant:
        return self.roster[self.player1_id]

    @property
    def player2(self) -> Participant:
        return self.roster[self.player2_id]

    @property
    def is_open(self) -> bool:
        return self.result is MatchResult.OPEN

    @property
    def winner(self) -> Participant | None:
        """Winning participant, or None while open or after a draw."""
        if self.result is MatchResult.PLAYER1_WON:
            return self.player1
        if self.result is MatchResult.PLAYER2_WON:
            return self.player2
        return None

    def __str__(self) -> str:
        return f"{self.player1.name} vs. {self.player2.name}"
