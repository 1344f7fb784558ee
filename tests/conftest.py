"""Shared test fixtures for the webex_client test suite.

WHY: Decoder, client, and CLI tests all need the same sample responses and
a transport that never touches the network. Centralising them keeps every
test on the same response shapes.

HOW: Module-level XML strings mirror the XML API's LstsummaryMeeting
responses (success with two meetings plus one keyless element, and a
failure). FakeTransport records every PreparedRequest and replays queued
bodies.

RULES:
- No test opens a real connection
- Sample meetings are 11111 ("Weekly sync") and 22222 ("Design review")
"""

from __future__ import annotations

from typing import List

import pytest

from webex_client.api.client import WebexClient
from webex_client.api.transport import PreparedRequest, Transport

SITE_URL = "https://acme.webex.com"
CREDENTIALS = ("host@acme.com", "s3cret", "243585", "g0webx!")

# ---------------------------------------------------------------------------
# Sample responses
# ---------------------------------------------------------------------------

LSTSUMMARY_SUCCESS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<serv:message xmlns:serv="http://www.webex.com/schemas/2002/06/service"
              xmlns:com="http://www.webex.com/schemas/2002/06/common"
              xmlns:meet="http://www.webex.com/schemas/2002/06/service/meeting">
  <serv:header>
    <serv:response>
      <serv:result>SUCCESS</serv:result>
      <serv:gsbStatus>READY</serv:gsbStatus>
    </serv:response>
  </serv:header>
  <serv:body>
    <serv:bodyContent xsi:type="meet:lstsummaryMeetingResponse"
                      xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
      <meet:meeting>
        <meet:meetingKey>11111</meet:meetingKey>
        <meet:confName>Weekly sync</meet:confName>
        <meet:meetingType>MC</meet:meetingType>
        <meet:hostWebExID>host@acme.com</meet:hostWebExID>
        <meet:otherHostWebExID>host@acme.com</meet:otherHostWebExID>
        <meet:timeZoneID>4</meet:timeZoneID>
        <meet:timeZone>GMT-08:00, Pacific (San Jose)</meet:timeZone>
        <meet:status>NOT_INPROGRESS</meet:status>
        <meet:startDate>03/14/2024 09:30:00</meet:startDate>
        <meet:duration>60</meet:duration>
        <meet:listStatus>PUBLIC</meet:listStatus>
        <meet:hostJoined>FALSE</meet:hostJoined>
        <meet:participantsJoined>FALSE</meet:participantsJoined>
        <meet:telePresence>FALSE</meet:telePresence>
      </meet:meeting>
      <meet:meeting>
        <meet:confName>Orphan without key</meet:confName>
      </meet:meeting>
      <meet:meeting>
        <meet:meetingKey>22222</meet:meetingKey>
        <meet:confName>Design review</meet:confName>
        <meet:meetingType>MC</meet:meetingType>
        <meet:hostWebExID>host@acme.com</meet:hostWebExID>
        <meet:otherHostWebExID>other@acme.com</meet:otherHostWebExID>
        <meet:timeZoneID>4</meet:timeZoneID>
        <meet:timeZone>GMT-08:00, Pacific (San Jose)</meet:timeZone>
        <meet:status>INPROGRESS</meet:status>
        <meet:startDate>03/15/2024 14:00:00</meet:startDate>
        <meet:duration>90</meet:duration>
        <meet:listStatus>PRIVATE</meet:listStatus>
        <meet:hostJoined>TRUE</meet:hostJoined>
        <meet:participantsJoined>TRUE</meet:participantsJoined>
        <meet:telePresence>FALSE</meet:telePresence>
      </meet:meeting>
      <meet:matchingRecords>
        <serv:total>7</serv:total>
        <serv:returned>2</serv:returned>
        <serv:startFrom>1</serv:startFrom>
      </meet:matchingRecords>
    </serv:bodyContent>
  </serv:body>
</serv:message>
"""

LSTSUMMARY_FAILURE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<serv:message xmlns:serv="http://www.webex.com/schemas/2002/06/service">
  <serv:header>
    <serv:response>
      <serv:result>FAILURE</serv:result>
      <serv:reason>Corresponding Meeting not found</serv:reason>
      <serv:gsbStatus>PRIMARY</serv:gsbStatus>
      <serv:exceptionID>000015</serv:exceptionID>
    </serv:response>
  </serv:header>
  <serv:body>
    <serv:bodyContent/>
  </serv:body>
</serv:message>
"""

GET_USER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<serv:message xmlns:serv="http://www.webex.com/schemas/2002/06/service">
  <serv:header>
    <serv:response>
      <serv:result>SUCCESS</serv:result>
      <serv:gsbStatus>PRIMARY</serv:gsbStatus>
    </serv:response>
  </serv:header>
  <serv:body><serv:bodyContent/></serv:body>
</serv:message>
"""


# ---------------------------------------------------------------------------
# Transport double
# ---------------------------------------------------------------------------


class FakeTransport(Transport):
    """Transport that records requests and replays queued response bodies."""

    def __init__(self, responses: List[str] | None = None, error: Exception | None = None) -> None:
        super().__init__()
        self.responses = list(responses or [])
        self.error = error
        self.requests: List[PreparedRequest] = []

    @property
    def name(self) -> str:
        return "fake"

    def send(self, request: PreparedRequest) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


@pytest.fixture
def fake_transport():
    """A FakeTransport preloaded with two successful listing responses."""
    return FakeTransport([LSTSUMMARY_SUCCESS_XML, LSTSUMMARY_SUCCESS_XML])


@pytest.fixture
def client(fake_transport):
    """A fully configured WebexClient wired to fake_transport."""
    webex = WebexClient(url=SITE_URL, transport=fake_transport)
    webex.set_auth(*CREDENTIALS)
    return webex


@pytest.fixture
def webex_env(monkeypatch):
    """Populate the WEBEX_* environment variables used by config and the CLI."""
    monkeypatch.setenv("WEBEX_ID", CREDENTIALS[0])
    monkeypatch.setenv("WEBEX_PASSWORD", CREDENTIALS[1])
    monkeypatch.setenv("WEBEX_SITE_ID", CREDENTIALS[2])
    monkeypatch.setenv("WEBEX_PARTNER_ID", CREDENTIALS[3])
    monkeypatch.setenv("WEBEX_URL", SITE_URL)
