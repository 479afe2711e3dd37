"""
bracketeer/transport.py - One HTTP request in, one Response out

HTTP error statuses are returned as ordinary Responses (with the error body
read) so the classifier can decide what they mean. Anything that prevents
a status from being read at all raises TransportError.
"""

import http.client
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from . import __version__

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"
USER_AGENT = f"bracketeer/{__version__}"


@dataclass(frozen=True)
class Response:
    status: int
    body: bytes = b""


class TransportError(Exception):
    """The request never produced an HTTP status (DNS, TLS, socket, bad URL)."""


@runtime_checkable
class Transport(Protocol):
    def send(self, method: str, url: str, body: str | None = None) -> Response:
        ...


class UrllibTransport:
    """Transport backed by urllib.request.

    Args:
        timeout: Socket timeout in seconds. None blocks indefinitely.
        user_agent: Value for the User-Agent header.
    """

    def __init__(self, timeout: float | None = None, user_agent: str = USER_AGENT):
        self.timeout = timeout
        self.user_agent = user_agent

    def send(self, method: str, url: str, body: str | None = None) -> Response:
        headers = {"User-Agent": self.user_agent, "Accept": "application/xml"}
        data = None
        if body is not None:
            data = body.encode("utf-8")
            headers["Content-Type"] = FORM_CONTENT_TYPE

        try:
            req = urllib.request.Request(url, data=data, headers=headers, method=method)
        except ValueError as e:
            raise TransportError(f"malformed URL: {e}") from e

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                return Response(status=resp.status, body=resp.read())
        except urllib.error.HTTPError as e:
            # Error statuses still carry a body worth classifying
            try:
                error_body = e.read() if e.fp is not None else b""
            except (http.client.HTTPException, OSError):
                error_body = b""
            return Response(status=e.code, body=error_body or b"")
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
            raise TransportError(str(e) or type(e).__name__) from e
