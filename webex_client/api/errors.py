"""Typed errors for the WebEx XML API client.

WHY: Every failure in this client (a bad site URL, an unreachable host, an
unparseable response, a history lookup that was never recorded) must reach
the caller as something it can catch, log, or retry. A single base class with
an error kind lets callers branch on the category without string matching.

HOW: WebexError carries an ErrorKind and a message. One subclass per kind.
Configuration-style errors (validation, usage) also subclass ValueError so
code that already guards config mistakes with ``except ValueError`` keeps
working.

RULES:
- Raise where the problem is detected; only the CLI turns errors into exits
- kind is always one of ErrorKind
- Messages never include the password
"""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    """Category of a WebexError.

    RULES:
    - validation: caller-supplied configuration rejected (URL, mode, size)
    - transport: the request did not complete (socket, TLS, HTTP status)
    - decode: the response could not be turned into typed data
    - usage: the client was used out of order (no auth, bad history index)
    """

    VALIDATION = "validation"
    TRANSPORT = "transport"
    DECODE = "decode"
    USAGE = "usage"


class WebexError(Exception):
    """Base class for every error raised by webex_client."""

    kind: ErrorKind = ErrorKind.USAGE

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(WebexError, ValueError):
    """Raised when a URL, send mode, service name, or page size is rejected."""

    kind = ErrorKind.VALIDATION


class TransportError(WebexError):
    """Raised when the HTTP or socket round-trip fails.

    WHY: Network failures need to be distinguishable from bad responses so
    callers can decide whether a retry makes sense.

    HOW: Wraps the transport name and, when the server answered, the HTTP
    status code.

    RULES:
    - status_code is None for connection-level failures
    """

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class DecodeError(WebexError):
    """Raised when a response body is not the XML shape the decoder expects.

    RULES:
    - raw_response holds the body as received once the client has it;
      None when decoding failed before a body existed
    """

    kind = ErrorKind.DECODE

    def __init__(self, message: str, raw_response: str | None = None) -> None:
        self.raw_response = raw_response
        super().__init__(message)


class UsageError(WebexError, ValueError):
    """Raised when the client is called before it is ready or asked for
    history it does not have."""

    kind = ErrorKind.USAGE
