"""Configuration constants, API catalogue, and .env loading.

WHY: The WebEx XML API is fixed-shape: one service path, two XML
namespaces, a closed list of service bindings, two ways of sending. Keeping
these values as plain module-level data makes them easy to find and change
without touching the envelope, transport, or decoder logic.

HOW: python-dotenv loads the .env file on import. Constants are module-level
strings, tuples, and ints. load_credentials() and load_site_url() read the
environment and give a clear error when something is missing.

RULES:
- Credentials are loaded from .env / environment, never hardcoded
- SEND_MODES lists exactly the two supported transports
- SERVICE_OPERATIONS uses the API's own "<group>.<Operation>" names
- WEBEX_DOMAIN is fixed; the send mode default can be overridden via
  the environment
"""

from __future__ import annotations

import os
from typing import Tuple

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Endpoint and wire constants
# ---------------------------------------------------------------------------

PREFIX_HTTP = "http"
PREFIX_HTTPS = "https"

WEBEX_DOMAIN = "webex.com"
"""Allow-listed domain suffix for customer sites (e.g. acme.webex.com)."""

XML_SERVICE_PATH = "WBXService/XMLService"
XML_VERSION = "1.0"
XML_ENCODING = "UTF-8"
USER_AGENT = "webex-client/0.1 (WebEx XML API)"

XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
API_SCHEMA_SERVICE = "http://www.webex.com/schemas/2002/06/service"
API_SCHEMA_MEETING = "http://www.webex.com/schemas/2002/06/service/meeting"

SERVICE_BINDING_PREFIX = "java:com.webex.service.binding."

# ---------------------------------------------------------------------------
# Transport selection
# ---------------------------------------------------------------------------

SEND_HTTPX = "httpx"
SEND_SOCKET = "socket"
SEND_MODES: Tuple[str, ...] = (SEND_HTTPX, SEND_SOCKET)

DEFAULT_SEND_MODE = os.getenv("WEBEX_SEND_MODE", SEND_HTTPX)
SOCKET_READ_SIZE = 1024

# ---------------------------------------------------------------------------
# Operation defaults
# ---------------------------------------------------------------------------

DEFAULT_MAXIMUM_NUM = 5
WEBEX_DATETIME_FORMAT = "%m/%d/%Y %H:%M:%S"

SERVICE_OPERATIONS: Tuple[str, ...] = (
    "user.AuthenticateUser",
    "user.CreateUser",
    "user.DelUser",
    "user.DelSessionTemplates",
    "user.GetloginTicket",
    "user.GetloginurlUser",
    "user.GetlogouturlUser",
    "user.GetUser",
    "user.LstsummaryUser",
    "user.SetUser",
    "user.UploadPMRIImage",
    "meeting.CreateMeeting",
    "meeting.CreateTeleconferenceSession",
    "meeting.DelMeeting",
    "meeting.GethosturlMeeting",
    "meeting.GetMeeting",
    "meeting.GetTeleconferenceSession",
    "meeting.LstsummaryMeeting",
    "meeting.SetMeeting",
    "meeting.SetTeleconferenceSession",
    "meeting.GetjoinurlMeeting",
    "event.CreateEvent",
    "event.DelEvent",
    "event.GetEvent",
    "event.LstRecordedEvent",
    "event.LstsummaryProgram",
    "event.SendInvitationEmail",
    "event.SetEvent",
    "event.UploadEventImage",
    "event.LstsummaryEvent",
    "attendee.CreateMeetingAttendee",
    "attendee.LstMeetingAttendee",
    "attendee.RegisterMeetingAttendee",
    "history.LstmeetingattendeeHistory",
)
"""Service bindings the XML API exposes. Only meeting.LstsummaryMeeting
has a typed decoder; the rest go through WebexClient.execute()."""


# ---------------------------------------------------------------------------
# Environment loaders
# ---------------------------------------------------------------------------

_CREDENTIAL_VARS = ("WEBEX_ID", "WEBEX_PASSWORD", "WEBEX_SITE_ID", "WEBEX_PARTNER_ID")


def load_credentials() -> Tuple[str, str, str, str]:
    """Load the four WebEx credentials from the environment.

    WHY: Every XML API call carries webExID, password, siteID and partnerID.
    Loading them from the environment (via .env) keeps them out of source.

    HOW: Reads WEBEX_ID, WEBEX_PASSWORD, WEBEX_SITE_ID and WEBEX_PARTNER_ID
    from os.environ (populated by python-dotenv).

    RULES:
    - Raises ValueError naming every missing variable
    - Values are stripped; empty counts as missing
    - Returns (webex_id, password, site_id, partner_id) in that order
    """
    values = [os.getenv(name, "").strip() for name in _CREDENTIAL_VARS]
    missing = [name for name, value in zip(_CREDENTIAL_VARS, values) if not value]
    if missing:
        raise ValueError(
            "WebEx credentials not configured. "
            "Add {} to the .env file.".format(", ".join(missing))
        )
    return values[0], values[1], values[2], values[3]


def load_site_url() -> str:
    """Load the customer site URL (e.g. https://acme.webex.com) from WEBEX_URL."""
    url = os.getenv("WEBEX_URL", "").strip()
    if not url:
        raise ValueError(
            "WebEx site URL not configured. "
            "Add WEBEX_URL (e.g. https://yoursite.webex.com) to the .env file."
        )
    return url
