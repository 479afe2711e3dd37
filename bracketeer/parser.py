"""
bracketeer/parser.py - Decode Challonge XML into entities

Each record is decoded all-or-nothing: a missing field, a non-integer id or
a dangling participant reference fails the whole document. Fields are read
from a record's direct children only, so values never bleed between
records.

Documents look like:

    <tournaments type="array">
      <tournament>
        <id type="integer">42</id>
        <name>Friday Bracket</name>
        <url>friday_bracket</url>
        <description></description>
        <tournament-type>double elimination</tournament-type>
      </tournament>
    </tournaments>
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Callable, TypeVar

from .errors import (
    InvalidMatchStateError,
    MalformedDataError,
    UnresolvedParticipantError,
)
from .models import (
    Match,
    MatchResult,
    Participant,
    Roster,
    TournamentRecord,
    TournamentType,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Record elements
XML_TOURNAMENT = "tournament"
XML_PARTICIPANT = "participant"
XML_MATCH = "match"

# Field tags
XML_ID = "id"
XML_NAME = "name"
XML_URL = "url"
XML_DESCRIPTION = "description"
XML_TYPE = "tournament-type"
XML_SUBDOMAIN = "subdomain"
XML_SEED = "seed"
XML_P1_ID = "player1-id"
XML_P2_ID = "player2-id"
XML_STATE = "state"
XML_WINNER_ID = "winner_id"

XML_STATE_OPEN = "open"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


# ============================================================================
# Element helpers
# ============================================================================


def _parse_document(xml: bytes | str) -> ET.Element:
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    try:
        return ET.fromstring(xml)
    except ET.ParseError as e:
        raise MalformedDataError(f"not well-formed XML: {e}") from e


def _is_nil(element: ET.Element) -> bool:
    return element.get("nil") == "true"


def _text(record: ET.Element, tag: str) -> str | None:
    """Text of the first direct child named tag; None if absent or nil."""
    child = record.find(tag)
    if child is None or _is_nil(child):
        return None
    return child.text or ""


def _required_text(record: ET.Element, tag: str) -> str:
    value = _text(record, tag)
    if value is None:
        raise MalformedDataError(f"<{record.tag}> is missing <{tag}>")
    return value


def _required_string(record: ET.Element, tag: str) -> str:
    """Like _required_text, but a present element marked nil reads as ""."""
    child = record.find(tag)
    if child is None:
        raise MalformedDataError(f"<{record.tag}> is missing <{tag}>")
    if _is_nil(child):
        return ""
    return child.text or ""


def _to_int(value: str, record: ET.Element, tag: str) -> int:
    stripped = value.strip()
    if not _INTEGER_RE.fullmatch(stripped):
        raise MalformedDataError(f"<{record.tag}><{tag}> is not an integer: {value!r}")
    return int(stripped)


def _required_int(record: ET.Element, tag: str) -> int:
    return _to_int(_required_text(record, tag), record, tag)


def _optional_int(record: ET.Element, tag: str) -> int | None:
    value = _text(record, tag)
    if value is None or not value.strip():
        return None
    return _to_int(value, record, tag)


def _records(root: ET.Element, tag: str) -> list[ET.Element]:
    """All elements named tag, root included, in document order."""
    return list(root.iter(tag))


def _first_record(root: ET.Element, tag: str) -> ET.Element:
    # Only the first match is consulted when a single record is requested
    found = root if root.tag == tag else root.find(f".//{tag}")
    if found is None:
        raise MalformedDataError(f"no <{tag}> element in document")
    return found


def _decode_list(
    xml: bytes | str, tag: str, decode: Callable[[ET.Element], T]
) -> list[T]:
    root = _parse_document(xml)
    return [decode(record) for record in _records(root, tag)]


# ============================================================================
# Tournaments
# ============================================================================


def _decode_tournament(record: ET.Element) -> TournamentRecord:
    type_text = _required_text(record, XML_TYPE).strip()
    try:
        tournament_type = TournamentType(type_text)
    except ValueError:
        raise MalformedDataError(f"unknown tournament type {type_text!r}") from None

    subdomain = _text(record, XML_SUBDOMAIN)
    return TournamentRecord(
        id=_required_int(record, XML_ID),
        name=_required_string(record, XML_NAME),
        url=_required_string(record, XML_URL),
        description=_required_string(record, XML_DESCRIPTION),
        tournament_type=tournament_type,
        subdomain=subdomain or None,
    )


def parse_tournament(xml: bytes | str) -> TournamentRecord:
    return _decode_tournament(_first_record(_parse_document(xml), XML_TOURNAMENT))


def parse_tournament_list(xml: bytes | str) -> list[TournamentRecord]:
    return _decode_list(xml, XML_TOURNAMENT, _decode_tournament)


# ============================================================================
# Participants
# ============================================================================


def _decode_participant(record: ET.Element) -> Participant:
    return Participant(
        id=_required_int(record, XML_ID),
        name=_required_string(record, XML_NAME),
        seed=_optional_int(record, XML_SEED),
    )


def parse_participant(xml: bytes | str) -> Participant:
    return _decode_participant(_first_record(_parse_document(xml), XML_PARTICIPANT))


def parse_participant_list(xml: bytes | str) -> list[Participant]:
    return _decode_list(xml, XML_PARTICIPANT, _decode_participant)


# ============================================================================
# Matches
# ============================================================================


def decode_result(state: str, player1_id: int, player2_id: int, winner_id: int | None) -> MatchResult:
    """Map a match state and winner onto a MatchResult.

    "open" wins regardless of any winner present. Otherwise a winner is
    required; one that is neither player counts as a draw.
    """
    if state == XML_STATE_OPEN:
        return MatchResult.OPEN
    if not state:
        raise InvalidMatchStateError("empty state")
    if winner_id is None:
        raise InvalidMatchStateError(f"state {state!r} has no winner")
    if winner_id == player1_id:
        return MatchResult.PLAYER1_WON
    if winner_id == player2_id:
        return MatchResult.PLAYER2_WON
    logger.debug(
        "Winner %d matches neither player (%d, %d); recording a draw",
        winner_id, player1_id, player2_id,
    )
    return MatchResult.DRAW


def _match_decoder(roster: Roster) -> Callable[[ET.Element], Match]:
    def decode(record: ET.Element) -> Match:
        match_id = _required_int(record, XML_ID)
        p1_id = _required_int(record, XML_P1_ID)
        p2_id = _required_int(record, XML_P2_ID)
        state = _required_text(record, XML_STATE).strip()

        for pid in (p1_id, p2_id):
            if pid not in roster:
                raise UnresolvedParticipantError(
                    f"match {match_id} references participant {pid}"
                )

        winner_id = None
        if state != XML_STATE_OPEN:
            winner_id = _optional_int(record, XML_WINNER_ID)
        result = decode_result(state, p1_id, p2_id, winner_id)

        return Match(
            id=match_id,
            player1_id=p1_id,
            player2_id=p2_id,
            result=result,
            roster=roster,
        )

    return decode


def parse_match(xml: bytes | str, roster: Roster) -> Match:
    return _match_decoder(roster)(_first_record(_parse_document(xml), XML_MATCH))


def parse_match_list(xml: bytes | str, roster: Roster) -> list[Match]:
    return _decode_list(xml, XML_MATCH, _match_decoder(roster))
