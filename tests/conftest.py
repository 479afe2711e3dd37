"""Shared fixtures: a recording transport and canned Challonge XML."""

import pytest

from bracketeer.transport import Response, TransportError


class RecordingTransport:
    """Returns queued Responses in order and records every send()."""

    def __init__(self, responses=()):
        self.responses = list(responses)
        self.calls: list[tuple[str, str, str | None]] = []

    def queue(self, status: int = 200, body: bytes | str = b"") -> "RecordingTransport":
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.responses.append(Response(status=status, body=body))
        return self

    def fail(self, message: str = "connection refused") -> "RecordingTransport":
        self.responses.append(TransportError(message))
        return self

    def send(self, method, url, body=None):
        self.calls.append((method, url, body))
        if not self.responses:
            raise AssertionError(f"unexpected request: {method} {url}")
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


def tournament_xml(
    tid=42,
    name="Friday Bracket",
    url="friday_bracket",
    description="Weekly",
    ttype="double elimination",
) -> str:
    return (
        "<tournament>"
        f"<id type=\"integer\">{tid}</id>"
        f"<name>{name}</name>"
        f"<url>{url}</url>"
        f"<description>{description}</description>"
        f"<tournament-type>{ttype}</tournament-type>"
        "</tournament>"
    )


def participant_xml(pid, name, seed=None) -> str:
    seed_el = "" if seed is None else f"<seed type=\"integer\">{seed}</seed>"
    return f"<participant><id type=\"integer\">{pid}</id><name>{name}</name>{seed_el}</participant>"


def match_xml(mid, p1, p2, state="open", winner=None) -> str:
    winner_el = "" if winner is None else f"<winner_id type=\"integer\">{winner}</winner_id>"
    return (
        "<match>"
        f"<id type=\"integer\">{mid}</id>"
        f"<player1-id type=\"integer\">{p1}</player1-id>"
        f"<player2-id type=\"integer\">{p2}</player2-id>"
        f"<state>{state}</state>"
        f"{winner_el}"
        "</match>"
    )


def wrap(tag: str, *records: str) -> str:
    return f"<?xml version=\"1.0\" encoding=\"UTF-8\"?><{tag} type=\"array\">{''.join(records)}</{tag}>"


PARTICIPANTS_XML = wrap(
    "participants",
    participant_xml(1, "Alice", seed=1),
    participant_xml(2, "Bob", seed=2),
    participant_xml(3, "Carol"),
)

MATCHES_XML = wrap(
    "matches",
    match_xml(100, 1, 2, state="complete", winner=1),
    match_xml(101, 2, 3),
)


@pytest.fixture
def transport():
    return RecordingTransport()
