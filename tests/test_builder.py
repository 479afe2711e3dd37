"""Tests for bracketeer.builder - request construction, no network."""

from urllib.parse import parse_qsl, urlsplit

import pytest

from bracketeer.builder import DEFAULT_BASE_URL, RequestBuilder, encode_pairs
from bracketeer.errors import (
    InvalidArgumentsError,
    InvalidCustomUrlError,
    InvalidTournamentTypeError,
    NameTooLongError,
)
from bracketeer.models import TournamentType


@pytest.fixture
def builder():
    return RequestBuilder("secret key/&=")


def _query(url: str) -> dict[str, str]:
    return dict(parse_qsl(urlsplit(url).query))


def _path(url: str) -> str:
    return urlsplit(url).path


# ============================================================================
# Encoding
# ============================================================================


class TestEncodePairs:
    def test_values_encoded_individually(self):
        body = encode_pairs([("tournament[name]", "A & B"), ("tournament[url]", "a/b")])
        assert body == "tournament[name]=A+%26+B&tournament[url]=a%2Fb"

    def test_keys_left_alone(self):
        assert encode_pairs([("participant[name]", "x")]) == "participant[name]=x"

    def test_unicode_is_utf8_percent_encoded(self):
        assert encode_pairs([("k", "é")]) == "k=%C3%A9"


# ============================================================================
# Tournaments
# ============================================================================


class TestListTournaments:
    def test_get_index_with_key(self, builder):
        req = builder.list_tournaments()
        assert req.method == "GET"
        assert req.url.startswith(DEFAULT_BASE_URL + "tournaments.xml?")
        assert _query(req.url) == {"api_key": "secret key/&="}
        assert req.body is None

    def test_api_key_is_percent_encoded(self, builder):
        req = builder.list_tournaments()
        assert "api_key=secret+key%2F%26%3D" in req.url

    def test_subdomain_added_when_set(self):
        req = RequestBuilder("k", subdomain="my org").list_tournaments()
        assert _query(req.url) == {"api_key": "k", "subdomain": "my org"}
        assert "subdomain=my+org" in req.url


class TestCreateTournament:
    def test_body_has_exactly_name_url_type(self, builder):
        req = builder.create_tournament("Friday Cup", "friday_cup", TournamentType.SINGLE_ELIMINATION)
        assert req.method == "POST"
        assert _path(req.url) == "/v1/tournaments.xml"
        assert dict(parse_qsl(req.body)) == {
            "tournament[name]": "Friday Cup",
            "tournament[url]": "friday_cup",
            "tournament[tournament_type]": "single elimination",
        }
        assert req.body == (
            "tournament[name]=Friday+Cup"
            "&tournament[url]=friday_cup"
            "&tournament[tournament_type]=single+elimination"
        )

    def test_accepts_wire_string_type(self, builder):
        req = builder.create_tournament("Cup", "cup", "round robin")
        assert "tournament[tournament_type]=round+robin" in req.body

    def test_description_included_when_given(self, builder):
        req = builder.create_tournament("Cup", "cup", "swiss", description="Best of 3 & fun")
        assert dict(parse_qsl(req.body))["tournament[description]"] == "Best of 3 & fun"

    def test_subdomain_goes_in_query(self):
        req = RequestBuilder("k", subdomain="org").create_tournament("Cup", "cup", "swiss")
        assert _query(req.url)["subdomain"] == "org"
        assert "subdomain" not in req.body

    @pytest.mark.parametrize("name_length", [0, 1, 30, 60])
    @pytest.mark.parametrize("ttype", list(TournamentType))
    def test_valid_inputs_build(self, builder, name_length, ttype):
        req = builder.create_tournament("n" * name_length, "slug_1", ttype)
        assert dict(parse_qsl(req.body, keep_blank_values=True)) == {
            "tournament[name]": "n" * name_length,
            "tournament[url]": "slug_1",
            "tournament[tournament_type]": ttype.value,
        }

    def test_long_name_rejected(self, builder):
        with pytest.raises(NameTooLongError):
            builder.create_tournament("n" * 61, "cup", "swiss")

    def test_bad_slug_rejected(self, builder):
        with pytest.raises(InvalidCustomUrlError):
            builder.create_tournament("Cup", "my-cup", "swiss")

    def test_bad_type_rejected(self, builder):
        with pytest.raises(InvalidTournamentTypeError):
            builder.create_tournament("Cup", "cup", "ladder")


class TestTournamentById:
    def test_show(self, builder):
        req = builder.show_tournament(42)
        assert (req.method, _path(req.url), req.body) == ("GET", "/v1/tournaments/42.xml", None)

    def test_rename(self, builder):
        req = builder.rename_tournament(42, "New & Improved")
        assert req.method == "PUT"
        assert _path(req.url) == "/v1/tournaments/42.xml"
        assert req.body == "tournament[name]=New+%26+Improved"

    def test_rename_checks_length(self, builder):
        with pytest.raises(NameTooLongError):
            builder.rename_tournament(42, "n" * 61)

    def test_delete(self, builder):
        req = builder.delete_tournament(42)
        assert (req.method, _path(req.url), req.body) == ("DELETE", "/v1/tournaments/42.xml", None)

    def test_start(self, builder):
        req = builder.start_tournament(42)
        assert (req.method, _path(req.url), req.body) == ("POST", "/v1/tournaments/42/start.xml", None)

    def test_no_subdomain_on_id_routes(self):
        req = RequestBuilder("k", subdomain="org").show_tournament(1)
        assert "subdomain" not in _query(req.url)

    @pytest.mark.parametrize("bad", ["42/../1", None, "abc", True])
    def test_non_integer_id_rejected(self, builder, bad):
        with pytest.raises(InvalidArgumentsError):
            builder.show_tournament(bad)


# ============================================================================
# Participants & matches
# ============================================================================


class TestParticipantsAndMatches:
    def test_list_participants(self, builder):
        req = builder.list_participants(7)
        assert (req.method, _path(req.url)) == ("GET", "/v1/tournaments/7/participants.xml")

    def test_add_participant(self, builder):
        req = builder.add_participant(7, "Zoë O'Neil")
        assert req.method == "POST"
        assert _path(req.url) == "/v1/tournaments/7/participants.xml"
        assert dict(parse_qsl(req.body)) == {"participant[name]": "Zoë O'Neil"}

    def test_add_participant_with_seed(self, builder):
        req = builder.add_participant(7, "Alice", seed=3)
        assert req.body == "participant[name]=Alice&participant[seed]=3"

    def test_add_participant_bad_seed(self, builder):
        with pytest.raises(InvalidArgumentsError):
            builder.add_participant(7, "Alice", seed="first")

    def test_list_matches(self, builder):
        req = builder.list_matches(7)
        assert (req.method, _path(req.url)) == ("GET", "/v1/tournaments/7/matches.xml")


class TestBuilderSetup:
    def test_empty_key_rejected(self):
        with pytest.raises(InvalidArgumentsError):
            RequestBuilder("")

    def test_base_url_gets_trailing_slash(self):
        req = RequestBuilder("k", base_url="http://localhost:9000/v1").list_tournaments()
        assert req.url.startswith("http://localhost:9000/v1/tournaments.xml?")
