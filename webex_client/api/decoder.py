"""Response decoding for the WebEx XML API.

WHY: Responses are namespaced XML: a serv:header with the result/status
pair and a serv:body whose bodyContent holds operation-specific elements in
the operation's own namespace. Callers want typed records, not trees.

HOW: ElementTree parses the text; the status block is read from
serv:header/serv:response and the items from serv:body/serv:bodyContent.
Each item is handed to the model's from_element() factory.

RULES:
- Malformed XML or a missing status block raises DecodeError
- A FAILURE response decodes normally (empty list, reason on the header)
- Items keep source order
- meet:meeting elements without a non-empty meetingKey are skipped
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import List

from webex_client.api.errors import DecodeError
from webex_client.api.models import (
    MEET,
    SERV,
    LstsummaryMeetingResponse,
    MatchingRecords,
    MeetingSummary,
    ResponseHeader,
)

logger = logging.getLogger(__name__)


def parse_document(xml_text: str) -> ET.Element:
    """Parse *xml_text* into its root element."""
    if not xml_text or not xml_text.strip():
        raise DecodeError("Empty response body")
    try:
        # str input is already decoded; expat ignores the declared encoding
        return ET.fromstring(xml_text.strip())
    except ET.ParseError as e:
        raise DecodeError("Response is not well-formed XML: {}".format(e)) from e


def parse_response_header(root: ET.Element) -> ResponseHeader:
    """Read the result/gsbStatus pair from serv:header/serv:response."""
    response = root.find("{0}header/{0}response".format(SERV))
    if response is None:
        raise DecodeError("Response has no serv:header/serv:response block")
    header = ResponseHeader.from_element(response)
    if not header.result:
        raise DecodeError("Response status block has no serv:result")
    return header


def parse_lstsummary_meeting(xml_text: str) -> LstsummaryMeetingResponse:
    """Decode a meeting.LstsummaryMeeting response.

    Args:
        xml_text: Raw response body.

    Returns:
        LstsummaryMeetingResponse with the status pair, the meetings in
        source order, and the server's paging counters when present.
    """
    root = parse_document(xml_text)
    header = parse_response_header(root)

    meetings: List[MeetingSummary] = []
    matching_records = None

    body_content = root.find("{0}body/{0}bodyContent".format(SERV))
    if body_content is not None:
        for element in body_content.findall(MEET + "meeting"):
            key = element.find(MEET + "meetingKey")
            if key is None or not (key.text or "").strip():
                continue
            meetings.append(MeetingSummary.from_element(element))

        records = body_content.find(MEET + "matchingRecords")
        if records is not None:
            matching_records = MatchingRecords.from_element(records)

    if not header.succeeded:
        logger.warning(
            "LstsummaryMeeting returned %s: %s (exception %s)",
            header.result,
            header.reason,
            header.exception_id,
        )

    return LstsummaryMeetingResponse(
        header=header,
        meetings=meetings,
        matching_records=matching_records,
    )
