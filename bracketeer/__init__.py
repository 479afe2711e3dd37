"""
Bracketeer - Challonge tournament brackets from Python

List and create tournaments, manage participants, and read match results
over the Challonge v1 XML API.
"""

__version__ = "0.1.0"

from .errors import (
    ErrorKind,
    ChallongeError,
    ConnectivityError,
    BadApiKeyError,
    InvalidArgumentsError,
    ValidationError,
    NameTooLongError,
    InvalidCustomUrlError,
    InvalidTournamentTypeError,
    MalformedDataError,
    UnresolvedParticipantError,
    InvalidMatchStateError,
)

from .models import (
    TournamentType,
    MatchResult,
    Participant,
    Roster,
    Match,
    TournamentRecord,
)

from .transport import (
    Response,
    Transport,
    TransportError,
    UrllibTransport,
)

from .client import (
    Challonge,
    Tournament,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "ErrorKind",
    "ChallongeError",
    "ConnectivityError",
    "BadApiKeyError",
    "InvalidArgumentsError",
    "ValidationError",
    "NameTooLongError",
    "InvalidCustomUrlError",
    "InvalidTournamentTypeError",
    "MalformedDataError",
    "UnresolvedParticipantError",
    "InvalidMatchStateError",
    # Entities
    "TournamentType",
    "MatchResult",
    "Participant",
    "Roster",
    "Match",
    "TournamentRecord",
    # Transport
    "Response",
    "Transport",
    "TransportError",
    "UrllibTransport",
    # Client
    "Challonge",
    "Tournament",
]
