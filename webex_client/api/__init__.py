"""WebEx XML API package: envelope, transport, decoding, and the client.

WHY: Keeps every piece of XML API communication in one place so the CLI and
other callers only deal with WebexClient and typed results.

HOW: envelope builds request documents, transport sends them, decoder turns
responses into the dataclasses in models, client wires the steps together.

RULES:
- All network calls go through WebexClient (no direct transport use elsewhere)
- Errors are WebexError subclasses from errors
"""

from webex_client.api.client import WebexClient
from webex_client.api.errors import (
    DecodeError,
    ErrorKind,
    TransportError,
    UsageError,
    ValidationError,
    WebexError,
)
from webex_client.api.models import (
    Credentials,
    LstsummaryMeetingResponse,
    MeetingSummary,
    ResponseView,
)

__all__ = [
    "Credentials",
    "DecodeError",
    "ErrorKind",
    "LstsummaryMeetingResponse",
    "MeetingSummary",
    "ResponseView",
    "TransportError",
    "UsageError",
    "ValidationError",
    "WebexClient",
    "WebexError",
]
