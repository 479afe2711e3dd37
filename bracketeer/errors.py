"""
bracketeer/errors.py - Error taxonomy for the Challonge client

Every failure the library reports is a ChallongeError carrying an ErrorKind
and an optional detail string. Subclasses exist per kind so callers can
catch as broadly or narrowly as they like:

    ChallongeError
    ├── ConnectivityError           (DEFAULT)
    ├── BadApiKeyError              (BAD_API_KEY)
    ├── InvalidArgumentsError       (INVALID_ARGUMENTS)
    │   └── ValidationError
    │       ├── NameTooLongError
    │       ├── InvalidCustomUrlError
    │       └── InvalidTournamentTypeError
    └── MalformedDataError          (MALFORMED_DATA)
        ├── UnresolvedParticipantError
        └── InvalidMatchStateError
"""

from enum import Enum
from types import MappingProxyType


class ErrorKind(Enum):
    DEFAULT = "default"
    BAD_API_KEY = "bad_api_key"
    INVALID_ARGUMENTS = "invalid_arguments"
    NAME_TOO_LONG = "name_too_long"
    INVALID_URL = "invalid_url"
    INVALID_TOURNAMENT_TYPE = "invalid_tournament_type"
    MALFORMED_DATA = "malformed_data"
    UNRESOLVED_PARTICIPANT = "unresolved_participant"
    INVALID_MATCH_STATE = "invalid_match_state"


REASONS = MappingProxyType({
    ErrorKind.DEFAULT: "Problem connecting with Challonge service",
    ErrorKind.BAD_API_KEY: "Could not authenticate using given API key",
    ErrorKind.INVALID_ARGUMENTS: "Invalid arguments",
    ErrorKind.NAME_TOO_LONG: "Name too long",
    ErrorKind.INVALID_URL: "Invalid URL",
    ErrorKind.INVALID_TOURNAMENT_TYPE: "Invalid tournament type",
    ErrorKind.MALFORMED_DATA: "Could not parse input XML",
    ErrorKind.UNRESOLVED_PARTICIPANT: "Match references an unknown participant",
    ErrorKind.INVALID_MATCH_STATE: "Invalid match state",
})


class ChallongeError(Exception):
    """Base class for every error raised by bracketeer."""

    kind = ErrorKind.DEFAULT

    def __init__(self, detail: str | None = None):
        self.detail = detail
        super().__init__(self.reason if detail is None else f"{self.reason}: {detail}")

    @property
    def reason(self) -> str:
        return REASONS[self.kind]


class ConnectivityError(ChallongeError):
    """Could not talk to the service, or it failed on its side."""

    kind = ErrorKind.DEFAULT


class BadApiKeyError(ChallongeError):
    """The service rejected the API key (HTTP 401)."""

    kind = ErrorKind.BAD_API_KEY


class InvalidArgumentsError(ChallongeError):
    """The service (or local validation) rejected the request arguments."""

    kind = ErrorKind.INVALID_ARGUMENTS


class ValidationError(InvalidArgumentsError):
    """Raised before any request is sent when an argument fails a local check."""


class NameTooLongError(ValidationError):
    kind = ErrorKind.NAME_TOO_LONG


class InvalidCustomUrlError(ValidationError):
    kind = ErrorKind.INVALID_URL


class InvalidTournamentTypeError(ValidationError):
    kind = ErrorKind.INVALID_TOURNAMENT_TYPE


class MalformedDataError(ChallongeError):
    """A success response could not be decoded into entities."""

    kind = ErrorKind.MALFORMED_DATA


class UnresolvedParticipantError(MalformedDataError):
    """A match names a participant id the tournament doesn't have."""

    kind = ErrorKind.UNRESOLVED_PARTICIPANT


class InvalidMatchStateError(MalformedDataError):
    kind = ErrorKind.INVALID_MATCH_STATE
