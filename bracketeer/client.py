"""
bracketeer/client.py - Challonge client and the tournament entity graph

Each public operation is one pass through the same pipeline:

    RequestBuilder -> Transport -> classify() -> parser

Validation happens inside the builder, so a bad argument never reaches the
transport. Nothing is cached: every read goes back to the server.
"""

import logging
from urllib.parse import urlsplit, urlunsplit

from .builder import DEFAULT_BASE_URL, PARAM_KEY, Request, RequestBuilder
from .classify import classify, classify_transport_error
from .models import Match, Participant, Roster, TournamentRecord, TournamentType
from .parser import (
    parse_match_list,
    parse_participant_list,
    parse_tournament,
    parse_tournament_list,
)
from .transport import Transport, TransportError, UrllibTransport

logger = logging.getLogger(__name__)


def _redact(url: str) -> str:
    """Mask the api_key query value; the rest of the URL is left alone."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    pairs = [
        f"{PARAM_KEY}=***" if pair.partition("=")[0] == PARAM_KEY else pair
        for pair in parts.query.split("&")
    ]
    return urlunsplit(parts._replace(query="&".join(pairs)))


class Challonge:
    """Entry point: holds credentials and the transport.

    Args:
        api_key: Key from the Challonge account settings page.
        subdomain: Organization subdomain for index and create calls.
        transport: Anything with send(method, url, body). Defaults to urllib.
        base_url: API root, ends with "/v1/".
    """

    def __init__(
        self,
        api_key: str,
        subdomain: str | None = None,
        transport: Transport | None = None,
        base_url: str = DEFAULT_BASE_URL,
    ):
        self.requests = RequestBuilder(api_key, subdomain=subdomain, base_url=base_url)
        self.transport = transport if transport is not None else UrllibTransport()

    @classmethod
    def from_config(cls, config=None, api_key: str | None = None) -> "Challonge":
        """Build a client from ~/.bracketeer/config.toml (or a loaded config)."""
        from .config import load_config, resolve_api_key

        if config is None:
            config = load_config()
        return cls(
            resolve_api_key(api_key, config),
            subdomain=config.subdomain,
            transport=UrllibTransport(timeout=config.timeout),
            base_url=config.base_url,
        )

    @property
    def subdomain(self) -> str | None:
        return self.requests.subdomain

    def dispatch(self, request: Request) -> bytes:
        """Send one request and return the success payload.

        Raises:
            ConnectivityError, BadApiKeyError, InvalidArgumentsError
        """
        logger.debug("%s %s", request.method, _redact(request.url))
        try:
            response = self.transport.send(request.method, request.url, request.body)
        except TransportError as e:
            raise classify_transport_error(e) from e
        return classify(response)

    # ------------------------------------------------------------------
    # Tournaments
    # ------------------------------------------------------------------

    def tournaments(self) -> list["Tournament"]:
        """List the account's (or subdomain's) tournaments.

        Participants and matches are not fetched; call refresh() on the
        tournaments you need them for.
        """
        xml = self.dispatch(self.requests.list_tournaments())
        return [Tournament(self, record) for record in parse_tournament_list(xml)]

    def get_tournament(self, tournament_id: int) -> "Tournament":
        """Fetch one tournament along with its participants and matches."""
        xml = self.dispatch(self.requests.show_tournament(tournament_id))
        tournament = Tournament(self, parse_tournament(xml))
        tournament.refresh()
        return tournament

    def create_tournament(
        self,
        name: str,
        url: str,
        tournament_type: TournamentType | str,
        description: str | None = None,
    ) -> "Tournament":
        """Create a tournament hosted at challonge.com/<url>.

        Raises:
            NameTooLongError: name longer than 60 characters
            InvalidCustomUrlError: url has characters outside [a-zA-Z0-9_]
            InvalidTournamentTypeError: not one of the four bracket types
        """
        request = self.requests.create_tournament(name, url, tournament_type, description)
        tournament = Tournament(self, parse_tournament(self.dispatch(request)))
        logger.info("Created tournament %d (%s)", tournament.id, tournament.url)
        tournament.refresh()
        return tournament


class Tournament:
    """A tournament plus the participants and matches it owns.

    Identity and server-side fields only change through operations that
    round-trip through the server. After delete() the object stays around
    but should be treated as invalid.
    """

    def __init__(self, client: Challonge, record: TournamentRecord):
        self._client = client
        self._record = record
        self._name = record.name
        self.participants = Roster()
        self.matches: list[Match] = []
        self.deleted = False

    # Read-only fields
    @property
    def id(self) -> int:
        return self._record.id

    @property
    def name(self) -> str:
        return self._name

    @property
    def url(self) -> str:
        return self._record.url

    @property
    def description(self) -> str:
        return self._record.description

    @property
    def tournament_type(self) -> TournamentType:
        return self._record.tournament_type

    @property
    def subdomain(self) -> str | None:
        return self._record.subdomain

    def __repr__(self) -> str:
        return f"Tournament(id={self.id}, name={self.name!r}, url={self.url!r})"

    def __str__(self) -> str:
        return f"{self.name}: (ID: {self.id}) (URL: {self.url})"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def rename(self, new_name: str) -> None:
        """Rename on the server, then locally once the server confirms."""
        self._client.dispatch(self._client.requests.rename_tournament(self.id, new_name))
        logger.info("Renamed tournament %d: %r -> %r", self.id, self._name, new_name)
        self._name = new_name

    def start(self) -> None:
        self._client.dispatch(self._client.requests.start_tournament(self.id))
        logger.info("Started tournament %d", self.id)

    def delete(self) -> None:
        self._client.dispatch(self._client.requests.delete_tournament(self.id))
        self.deleted = True
        logger.info("Deleted tournament %d", self.id)

    # ------------------------------------------------------------------
    # Participants & matches
    # ------------------------------------------------------------------

    def add_participant(self, name: str, seed: int | None = None) -> list[Participant]:
        """Add a participant, then reload the list so ids come from the server."""
        self._client.dispatch(self._client.requests.add_participant(self.id, name, seed))
        return self.refresh_participants()

    def get_participant_by_id(self, participant_id: int) -> Participant | None:
        return self.participants.get(participant_id)

    def refresh_participants(self) -> list[Participant]:
        xml = self._client.dispatch(self._client.requests.list_participants(self.id))
        participants = parse_participant_list(xml)
        self.participants.replace(participants)
        return participants

    def refresh_matches(self) -> list[Match]:
        """Reload matches, resolving players against the current roster."""
        xml = self._client.dispatch(self._client.requests.list_matches(self.id))
        self.matches = parse_match_list(xml, self.participants)
        return self.matches

    def refresh(self) -> None:
        self.refresh_participants()
        self.refresh_matches()
