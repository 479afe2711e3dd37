"""
bracketeer/builder.py - Turn typed operations into HTTP requests

Every operation maps to a method, an endpoint path under the API root, a
query string carrying the API key, and (for writes) a form-encoded body.
Values are percent-encoded one at a time before being joined; the keys and
separators are structural and are left alone.
"""

from dataclasses import dataclass
from urllib.parse import quote, quote_plus

from .errors import InvalidArgumentsError
from .models import TournamentType
from .validation import validate_name, validate_new_tournament

DEFAULT_BASE_URL = "https://api.challonge.com/v1/"

# Top-level parameters
PARAM_KEY = "api_key"
PARAM_SUBDOMAIN = "subdomain"

# Resource fields
PARAM_TOURNAMENT_NAME = "tournament[name]"
PARAM_TOURNAMENT_URL = "tournament[url]"
PARAM_TOURNAMENT_TYPE = "tournament[tournament_type]"
PARAM_TOURNAMENT_DESCRIPTION = "tournament[description]"
PARAM_PARTICIPANT_NAME = "participant[name]"
PARAM_PARTICIPANT_SEED = "participant[seed]"


@dataclass(frozen=True)
class Request:
    method: str
    url: str
    body: str | None = None


def encode_pairs(pairs: list[tuple[str, str]]) -> str:
    """Join key=value pairs with '&', form-encoding each value on its own."""
    return "&".join(f"{key}={quote_plus(str(value))}" for key, value in pairs)


def _integer(value, label: str = "resource id") -> str:
    message = f"{label} must be an integer, got {value!r}"
    if isinstance(value, bool):
        raise InvalidArgumentsError(message)
    try:
        return str(int(value))
    except (TypeError, ValueError):
        raise InvalidArgumentsError(message) from None


class RequestBuilder:
    """Builds Request objects for one API key (and optional subdomain)."""

    def __init__(
        self,
        api_key: str,
        subdomain: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
    ):
        if not api_key:
            raise InvalidArgumentsError("api_key is required")
        self.api_key = api_key
        self.subdomain = subdomain
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _url(self, *segments: str, with_subdomain: bool = False) -> str:
        path = "/".join(quote(segment, safe=".") for segment in segments)
        params = [(PARAM_KEY, self.api_key)]
        if with_subdomain and self.subdomain:
            params.append((PARAM_SUBDOMAIN, self.subdomain))
        return f"{self.base_url}{path}?{encode_pairs(params)}"

    def _tournament_url(self, tournament_id, *rest: str) -> str:
        tid = _integer(tournament_id)
        if rest:
            return self._url("tournaments", tid, *rest)
        return self._url("tournaments", f"{tid}.xml")

    # ------------------------------------------------------------------
    # Tournaments
    # ------------------------------------------------------------------

    def list_tournaments(self) -> Request:
        return Request("GET", self._url("tournaments.xml", with_subdomain=True))

    def create_tournament(
        self,
        name: str,
        url: str,
        tournament_type: TournamentType | str,
        description: str | None = None,
    ) -> Request:
        """Validate and build the create request.

        Raises:
            NameTooLongError, InvalidCustomUrlError, InvalidTournamentTypeError
        """
        ttype = validate_new_tournament(name, url, tournament_type)
        pairs = [
            (PARAM_TOURNAMENT_NAME, name),
            (PARAM_TOURNAMENT_URL, url),
            (PARAM_TOURNAMENT_TYPE, ttype.value),
        ]
        if description is not None:
            pairs.append((PARAM_TOURNAMENT_DESCRIPTION, description))
        return Request(
            "POST",
            self._url("tournaments.xml", with_subdomain=True),
            encode_pairs(pairs),
        )

    def show_tournament(self, tournament_id) -> Request:
        return Request("GET", self._tournament_url(tournament_id))

    def rename_tournament(self, tournament_id, name: str) -> Request:
        validate_name(name)
        return Request(
            "PUT",
            self._tournament_url(tournament_id),
            encode_pairs([(PARAM_TOURNAMENT_NAME, name)]),
        )

    def delete_tournament(self, tournament_id) -> Request:
        return Request("DELETE", self._tournament_url(tournament_id))

    def start_tournament(self, tournament_id) -> Request:
        return Request("POST", self._tournament_url(tournament_id, "start.xml"))

    # ------------------------------------------------------------------
    # Participants & matches
    # ------------------------------------------------------------------

    def list_participants(self, tournament_id) -> Request:
        return Request("GET", self._tournament_url(tournament_id, "participants.xml"))

    def add_participant(self, tournament_id, name: str, seed: int | None = None) -> Request:
        pairs = [(PARAM_PARTICIPANT_NAME, name)]
        if seed is not None:
            pairs.append((PARAM_PARTICIPANT_SEED, _integer(seed, "seed")))
        return Request(
            "POST",
            self._tournament_url(tournament_id, "participants.xml"),
            encode_pairs(pairs),
        )

    def list_matches(self, tournament_id) -> Request:
        return Request("GET", self._tournament_url(tournament_id, "matches.xml"))
