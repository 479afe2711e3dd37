"""
bracketeer/validation.py - Argument checks run before any request is built

Each check raises its own ValidationError subclass; none of them touch the
network.
"""

import re

from .errors import InvalidCustomUrlError, NameTooLongError
from .models import TournamentType

NAME_MAX_LENGTH = 60

_CUSTOM_URL_RE = re.compile(r"[a-zA-Z0-9_]+")


def is_valid_custom_url(url: str) -> bool:
    """True if url only contains letters, digits and underscores."""
    return isinstance(url, str) and _CUSTOM_URL_RE.fullmatch(url) is not None


def validate_name(name: str) -> None:
    if len(name) > NAME_MAX_LENGTH:
        raise NameTooLongError(f"{len(name)} characters, limit is {NAME_MAX_LENGTH}")


def validate_custom_url(url: str) -> None:
    if not is_valid_custom_url(url):
        raise InvalidCustomUrlError(repr(url))


def validate_tournament_type(value: TournamentType | str) -> TournamentType:
    return TournamentType.parse(value)


def validate_new_tournament(
    name: str,
    url: str,
    tournament_type: TournamentType | str,
) -> TournamentType:
    """Run every creation check in order. Returns the normalized type."""
    validate_name(name)
    validate_custom_url(url)
    return validate_tournament_type(tournament_type)
