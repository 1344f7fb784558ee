"""Request envelope construction for the WebEx XML API.

WHY: Every XML API call is the same document with two variable parts: the
securityContext block carrying the caller's credentials, and a bodyContent
element whose xsi:type names the target service binding. Building it in one
place keeps every operation consistent.

HOW: The document is assembled as a list of string pieces and joined, the
same way the API's reference samples are written. Operation bodies are
pre-rendered fragments produced by the ``*_body`` helpers below or supplied
by the caller.

RULES:
- Declaration is always <?xml version="1.0" encoding="UTF-8"?>
- Credentials appear in order webExID, password, siteID, partnerID, verbatim
- The optional header fragment goes inside securityContext, after partnerID
- Fragments are not validated or escaped; malformed XML passes through
- Pure string construction, no side effects
"""

from __future__ import annotations

from typing import List, Optional

from webex_client.api.models import Credentials
from webex_client.config import SERVICE_BINDING_PREFIX, XML_ENCODING, XML_VERSION, XSI_NAMESPACE


def service_binding(operation: str) -> str:
    """Normalise an operation name to its binding form.

    ``meeting_LstsummaryMeeting`` and ``meeting.LstsummaryMeeting`` both
    become ``meeting.LstsummaryMeeting``.
    """
    return operation.replace("_", ".")


def build_envelope(
    credentials: Credentials,
    service: str,
    body: str,
    header: Optional[str] = None,
) -> str:
    """Build the complete XML request document for one call.

    Args:
        credentials: The four authentication values.
        service: Operation name, e.g. ``meeting.LstsummaryMeeting``.
        body: Pre-rendered XML fragment placed inside bodyContent.
        header: Optional pre-rendered fragment placed inside securityContext.

    Returns:
        The envelope as a single string.
    """
    xml: List[str] = []
    xml.append('<?xml version="{}" encoding="{}"?>'.format(XML_VERSION, XML_ENCODING))
    xml.append('<serv:message xmlns:xsi="{}">'.format(XSI_NAMESPACE))
    xml.append("<header>")
    xml.append("<securityContext>")
    xml.append("<webExID>{}</webExID>".format(credentials.webex_id))
    xml.append("<password>{}</password>".format(credentials.password))
    xml.append("<siteID>{}</siteID>".format(credentials.site_id))
    xml.append("<partnerID>{}</partnerID>".format(credentials.partner_id))
    if header:
        xml.append(header)
    xml.append("</securityContext>")
    xml.append("</header>")
    xml.append("<body>")
    xml.append('<bodyContent xsi:type="{}{}">'.format(SERVICE_BINDING_PREFIX, service_binding(service)))
    xml.append(body)
    xml.append("</bodyContent>")
    xml.append("</body>")
    xml.append("</serv:message>")
    return "".join(xml)


def lstsummary_meeting_body(maximum_num: int) -> str:
    """Body fragment for meeting.LstsummaryMeeting, ordered by start time."""
    body = [
        "<listControl>",
        "<startFrom/>",
        "<maximumNum>{}</maximumNum>".format(maximum_num),
        "</listControl>",
        "<order>",
        "<orderBy>STARTTIME</orderBy>",
        "</order>",
        "<dateScope>",
        "</dateScope>",
    ]
    return "".join(body)
