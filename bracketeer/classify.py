"""
bracketeer/classify.py - Decide what an HTTP outcome means

A response is either a success payload (returned as bytes for the parser)
or one of the typed errors below. The payload is never handed on while an
error indicator is present.
"""

import logging
import xml.etree.ElementTree as ET

from .errors import (
    BadApiKeyError,
    ChallongeError,
    ConnectivityError,
    InvalidArgumentsError,
)
from .transport import Response, TransportError

logger = logging.getLogger(__name__)

HTTP_UNAUTHORIZED = 401
XML_ERRORS = "errors"
XML_ERROR = "error"

# Raw bodies get trimmed before landing in an error message
MAX_DETAIL_LENGTH = 200


def _error_root(body: bytes) -> ET.Element | None:
    if not body or not body.strip():
        return None
    try:
        root = ET.fromstring(body)
    except ET.ParseError:
        return None
    return root if root.tag == XML_ERRORS else None


def extract_error_messages(body: bytes) -> list[str]:
    """Pull the <error> texts out of an <errors> document. [] if it isn't one."""
    root = _error_root(body)
    if root is None:
        return []
    return [
        e.text.strip()
        for e in root.iter(XML_ERROR)
        if e.text and e.text.strip()
    ]


def _detail(response: Response) -> str | None:
    messages = extract_error_messages(response.body)
    if messages:
        return "; ".join(messages)
    text = response.body.decode("utf-8", errors="replace").strip()
    if not text:
        return None
    return text[:MAX_DETAIL_LENGTH]


def classify(response: Response) -> bytes:
    """Return the success payload, or raise the matching ChallongeError.

    Raises:
        BadApiKeyError: 401
        InvalidArgumentsError: any other 4xx, or a 2xx carrying <errors>
        ConnectivityError: 5xx and anything else unexpected
    """
    status = response.status

    if status == HTTP_UNAUTHORIZED:
        raise BadApiKeyError(_detail(response))

    if 400 <= status < 500:
        raise InvalidArgumentsError(_detail(response))

    if not 200 <= status < 300:
        raise ConnectivityError(f"HTTP {status}" + _suffix(_detail(response)))

    if _error_root(response.body) is not None:
        raise InvalidArgumentsError(_detail(response))

    return response.body


def _suffix(detail: str | None) -> str:
    return f" ({detail})" if detail else ""


def classify_transport_error(exc: TransportError) -> ChallongeError:
    """Every transport failure is the default connectivity error."""
    logger.debug("Transport failure: %s", exc)
    return ConnectivityError(str(exc) or None)
