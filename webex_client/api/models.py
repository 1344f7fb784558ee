"""Request and response dataclasses for the WebEx XML API.

WHY: The XML API answers with namespaced, all-text element trees. Typed
dataclasses make the decoded shape explicit: dates become datetimes,
durations become timedeltas, TRUE/FALSE flags become bools, and callers get
attribute access instead of tree walking.

HOW: Each response dataclass has a ``from_element()`` factory that reads
the leaves it owns from an ElementTree element. Leaf conversion helpers are
module-private. Credentials and CallRecord are the request-side and history
records kept by WebexClient.

RULES:
- Absent text leaves decode to "" and absent typed leaves to None
- A typed leaf that is present but malformed raises DecodeError
- start_date uses the API's "MM/DD/YYYY HH:MM:SS" format, naive local time
- duration is expressed in minutes by the API
- Credentials and Endpoint are immutable once built
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, List, Optional
from xml.etree.ElementTree import Element

from webex_client.api.errors import DecodeError
from webex_client.config import API_SCHEMA_MEETING, API_SCHEMA_SERVICE, WEBEX_DATETIME_FORMAT

SERV = "{%s}" % API_SCHEMA_SERVICE
MEET = "{%s}" % API_SCHEMA_MEETING


class ResponseView(str, enum.Enum):
    """Which stored value get_response() returns for a past call."""

    XML = "xml"
    DATA = "data"


@dataclass(frozen=True)
class Credentials:
    """The four values every XML API call authenticates with.

    RULES:
    - Field order is the order they appear in the securityContext block
    - complete is True only when all four are non-empty
    - repr hides the password
    """

    webex_id: str
    password: str = field(repr=False)
    site_id: str
    partner_id: str

    @property
    def complete(self) -> bool:
        return bool(self.webex_id and self.password and self.site_id and self.partner_id)


# ---------------------------------------------------------------------------
# Leaf conversion helpers
# ---------------------------------------------------------------------------


def _text(parent: Element, tag: str) -> str:
    child = parent.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def _optional_text(parent: Element, tag: str) -> Optional[str]:
    child = parent.find(tag)
    if child is None or child.text is None:
        return None
    return child.text.strip()


def _int(parent: Element, tag: str) -> Optional[int]:
    raw = _optional_text(parent, tag)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise DecodeError("Expected an integer in <{}>, got {!r}".format(_local(tag), raw)) from None


def _bool(parent: Element, tag: str) -> Optional[bool]:
    raw = _optional_text(parent, tag)
    if not raw:
        return None
    upper = raw.upper()
    if upper == "TRUE":
        return True
    if upper == "FALSE":
        return False
    raise DecodeError("Expected TRUE or FALSE in <{}>, got {!r}".format(_local(tag), raw))


def _datetime(parent: Element, tag: str) -> Optional[datetime]:
    raw = _optional_text(parent, tag)
    if not raw:
        return None
    try:
        return datetime.strptime(raw, WEBEX_DATETIME_FORMAT)
    except ValueError:
        raise DecodeError("Expected a MM/DD/YYYY HH:MM:SS date in <{}>, got {!r}".format(_local(tag), raw)) from None


def _minutes(parent: Element, tag: str) -> Optional[timedelta]:
    minutes = _int(parent, tag)
    if minutes is None:
        return None
    return timedelta(minutes=minutes)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


# ---------------------------------------------------------------------------
# Response records
# ---------------------------------------------------------------------------


@dataclass
class ResponseHeader:
    """Status block of every XML API response (serv:header/serv:response).

    WHY: The API answers HTTP 200 even for rejected requests; the real
    outcome is the result/gsbStatus pair, plus a reason when it failed.

    RULES:
    - result is "SUCCESS" or "FAILURE"
    - gsb_status is the site's global-backup status (e.g. "PRIMARY", "READY")
    - reason and exception_id are only present on FAILURE
    """

    result: str
    gsb_status: str
    reason: Optional[str] = None
    exception_id: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.result == "SUCCESS"

    @classmethod
    def from_element(cls, element: Element) -> ResponseHeader:
        return cls(
            result=_text(element, SERV + "result"),
            gsb_status=_text(element, SERV + "gsbStatus"),
            reason=_optional_text(element, SERV + "reason"),
            exception_id=_optional_text(element, SERV + "exceptionID"),
        )


@dataclass
class MeetingSummary:
    """One meet:meeting element of a LstsummaryMeeting response.

    WHY: The listing returns a fixed set of leaves per meeting. Naming them
    as typed fields replaces a dynamic copy of every leaf as text.

    HOW: from_element() reads each leaf by its meeting-namespace tag and
    converts it with the module's leaf helpers.

    RULES:
    - meeting_key is required; elements without it are skipped by the decoder
    - time_zone_id is the API's numeric zone id, time_zone its display label
    - host_joined / participants_joined / tele_presence come from TRUE/FALSE
    """

    meeting_key: str
    conf_name: str = ""
    meeting_type: str = ""
    host_webex_id: str = ""
    other_host_webex_id: str = ""
    time_zone_id: Optional[int] = None
    time_zone: str = ""
    status: str = ""
    start_date: Optional[datetime] = None
    duration: Optional[timedelta] = None
    list_status: str = ""
    host_joined: Optional[bool] = None
    participants_joined: Optional[bool] = None
    tele_presence: Optional[bool] = None

    @classmethod
    def from_element(cls, element: Element) -> MeetingSummary:
        return cls(
            meeting_key=_text(element, MEET + "meetingKey"),
            conf_name=_text(element, MEET + "confName"),
            meeting_type=_text(element, MEET + "meetingType"),
            host_webex_id=_text(element, MEET + "hostWebExID"),
            other_host_webex_id=_text(element, MEET + "otherHostWebExID"),
            time_zone_id=_int(element, MEET + "timeZoneID"),
            time_zone=_text(element, MEET + "timeZone"),
            status=_text(element, MEET + "status"),
            start_date=_datetime(element, MEET + "startDate"),
            duration=_minutes(element, MEET + "duration"),
            list_status=_text(element, MEET + "listStatus"),
            host_joined=_bool(element, MEET + "hostJoined"),
            participants_joined=_bool(element, MEET + "participantsJoined"),
            tele_presence=_bool(element, MEET + "telePresence"),
        )


@dataclass
class MatchingRecords:
    """Paging counters the server reports alongside a listing."""

    total: Optional[int]
    returned: Optional[int]
    start_from: Optional[int]

    @classmethod
    def from_element(cls, element: Element) -> MatchingRecords:
        return cls(
            total=_int(element, SERV + "total"),
            returned=_int(element, SERV + "returned"),
            start_from=_int(element, SERV + "startFrom"),
        )


@dataclass
class LstsummaryMeetingResponse:
    """Decoded meeting.LstsummaryMeeting response."""

    header: ResponseHeader
    meetings: List[MeetingSummary] = field(default_factory=list)
    matching_records: Optional[MatchingRecords] = None


@dataclass
class CallRecord:
    """One entry of WebexClient's call history.

    RULES:
    - envelope is the XML document sent in the XML form field
    - post_header / post_body are what the transport put on the wire
    - decoded is None for generic execute() calls
    """

    service: str
    envelope: str
    post_header: List[str]
    post_body: str
    raw_response: str
    decoded: Any = None
