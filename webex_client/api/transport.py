"""Form encoding and the two ways of putting a request on the wire.

WHY: The XML API does not take the envelope as a raw body; it expects the
credentials and the envelope as URL-encoded form fields in a single POST.
Some deployments can use a normal HTTP client, others need the request
written by hand over a socket. Both are the same "send request, receive
response body" capability, so they share one interface and one registry.

HOW: prepare_request() builds the form body and the header lines once.
A Transport subclass then sends them:
  HttpxTransport:  a fresh httpx.Client per call, certificate checks off
  SocketTransport: socket.create_connection + manual write/read until EOF
TRANSPORTS maps send-mode keys to transport classes, like the formatter
registry of a pluggable pipeline: add a class, add one line.

RULES:
- Form fields are always UID, PWD, SID, PID, XML, in that order, each
  followed by "&"
- Header lines start with the request line "POST /<path> HTTP/1.0"
- Only socket mode adds Content-Type: application/xml and Content-Length
- One connection per call, closed before send() returns
- Blocking; timeout=None waits indefinitely; no retries
- Connection and HTTP failures are raised as TransportError
- Bodies are decoded strictly with the charset named in the XML
  declaration (UTF-8 when absent); undecodable bytes raise DecodeError
"""

from __future__ import annotations

import logging
import re
import socket
import ssl
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import quote_plus

import httpx

from webex_client.api.endpoint import Endpoint
from webex_client.api.errors import DecodeError, TransportError, ValidationError
from webex_client.api.models import Credentials
from webex_client.config import (
    PREFIX_HTTPS,
    SEND_HTTPX,
    SEND_SOCKET,
    SOCKET_READ_SIZE,
    USER_AGENT,
    XML_SERVICE_PATH,
)

logger = logging.getLogger(__name__)

_XML_ENCODING_RE = re.compile(rb"""^\s*<\?xml[^>]*?encoding=['"]([A-Za-z0-9._-]+)['"]""")


@dataclass
class PreparedRequest:
    """Everything a transport needs to send one call."""

    endpoint: Endpoint
    header_lines: List[str]
    body: str
    envelope: str


def build_form_body(credentials: Credentials, envelope: str) -> str:
    """URL-encode the credentials and the envelope as form fields."""
    fields = (
        ("UID", credentials.webex_id),
        ("PWD", credentials.password),
        ("SID", credentials.site_id),
        ("PID", credentials.partner_id),
        ("XML", envelope),
    )
    return "".join("{}={}&".format(name, quote_plus(value)) for name, value in fields)


def build_header_lines(endpoint: Endpoint, send_mode: str, body: str) -> List[str]:
    """Build the request line and headers for *send_mode*.

    The socket transport writes these lines verbatim, so it also needs the
    content headers; the httpx transport lets the client compute them.
    """
    lines = [
        "POST /{} HTTP/1.0".format(XML_SERVICE_PATH),
        "Host: {}".format(endpoint.host),
        "User-Agent: {}".format(USER_AGENT),
    ]
    if send_mode == SEND_SOCKET:
        lines.append("Content-Type: application/xml")
        lines.append("Content-Length: {}".format(len(body.encode("utf-8"))))
    return lines


def prepare_request(
    endpoint: Endpoint,
    credentials: Credentials,
    envelope: str,
    send_mode: str,
) -> PreparedRequest:
    body = build_form_body(credentials, envelope)
    return PreparedRequest(
        endpoint=endpoint,
        header_lines=build_header_lines(endpoint, send_mode, body),
        body=body,
        envelope=envelope,
    )


def _header_dict(header_lines: List[str]) -> Dict[str, str]:
    """Turn "Name: value" lines into a dict, skipping the request line."""
    headers: Dict[str, str] = {}
    for line in header_lines[1:]:
        name, _, value = line.partition(":")
        headers[name.strip()] = value.strip()
    return headers


class Transport(ABC):
    """Send one prepared request and return the response body as text.

    To add a transport:
    1. Subclass Transport
    2. Implement ``name`` and ``send()``
    3. Register the class in TRANSPORTS under its send-mode key
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._timeout = timeout

    @property
    @abstractmethod
    def name(self) -> str:
        """Send-mode key this transport is registered under."""

    @abstractmethod
    def send(self, request: PreparedRequest) -> str:
        """Send *request* and return the response body.

        Raises:
            TransportError: if the request could not be completed.
        """


class HttpxTransport(Transport):
    """Pooled-connection transport backed by httpx.

    WHY: A regular HTTP client handles TLS and body decoding for us.

    HOW: Opens a new httpx.Client for each call with certificate
    verification disabled, POSTs the form body, and closes the client.

    RULES:
    - Content-Type is application/x-www-form-urlencoded unless set
    - Any httpx.HTTPError or HTTP status >= 400 raises TransportError
    - ``transport`` is an optional httpx transport (e.g. MockTransport)
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(timeout)
        self._transport = transport

    @property
    def name(self) -> str:
        return SEND_HTTPX

    def send(self, request: PreparedRequest) -> str:
        headers = _header_dict(request.header_lines)
        headers.setdefault("Content-Type", "application/x-www-form-urlencoded")
        url = request.endpoint.url

        logger.debug("POST %s via httpx (%d bytes)", url, len(request.body))
        try:
            with httpx.Client(
                verify=False,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                resp = client.post(url, content=request.body.encode("utf-8"), headers=headers)
        except httpx.HTTPError as e:
            raise TransportError("HTTP request to {} failed: {}".format(url, e)) from e

        if resp.status_code >= 400:
            raise TransportError(
                "WebEx XML API returned HTTP {}".format(resp.status_code),
                status_code=resp.status_code,
            )
        return decode_body(resp.content)


class SocketTransport(Transport):
    """Raw-socket transport: write the request by hand, read until EOF.

    WHY: Works where no HTTP client stack is wanted, and shows exactly what
    goes over the wire.

    HOW: Connects to host:port, wraps the socket in TLS for https (without
    certificate checks, like the httpx transport), writes the header lines,
    a blank line and the body, then accumulates fixed-size reads until the
    server closes the connection. The status line is checked and the header
    block stripped before returning.

    RULES:
    - Lines are CRLF-terminated
    - Reads are SOCKET_READ_SIZE bytes each
    - OSError (including ssl.SSLError) raises TransportError
    - A missing or >= 400 status line raises TransportError
    """

    @property
    def name(self) -> str:
        return SEND_SOCKET

    def send(self, request: PreparedRequest) -> str:
        endpoint = request.endpoint
        payload = "\r\n".join(request.header_lines) + "\r\n\r\n" + request.body

        logger.debug("POST %s:%d via socket (%d bytes)", endpoint.host, endpoint.port, len(payload))
        try:
            sock = socket.create_connection((endpoint.host, endpoint.port), timeout=self._timeout)
            if endpoint.scheme == PREFIX_HTTPS:
                context = ssl.create_default_context()
                context.check_hostname = False
                context.verify_mode = ssl.CERT_NONE
                sock = context.wrap_socket(sock, server_hostname=endpoint.host)
            with sock:
                sock.sendall(payload.encode("utf-8"))
                chunks: List[bytes] = []
                while True:
                    chunk = sock.recv(SOCKET_READ_SIZE)
                    if not chunk:
                        break
                    chunks.append(chunk)
        except OSError as e:
            raise TransportError(
                "Socket error talking to {}:{} - {}".format(endpoint.host, endpoint.port, e)
            ) from e

        return _split_http_response(b"".join(chunks))


def _split_http_response(raw: bytes) -> str:
    """Check the status line of a raw HTTP response and return its body."""
    head, sep, body = raw.partition(b"\r\n\r\n")
    if not sep:
        head, sep, body = raw.partition(b"\n\n")
    status_line = head.splitlines()[0].decode("latin-1") if head else ""
    parts = status_line.split()
    if len(parts) < 2 or not parts[0].startswith("HTTP/") or not parts[1].isdigit():
        raise TransportError("Malformed HTTP response: {!r}".format(status_line[:80]))

    status_code = int(parts[1])
    if status_code >= 400:
        raise TransportError(
            "WebEx XML API returned HTTP {}".format(status_code),
            status_code=status_code,
        )
    return decode_body(body)


def decode_body(raw: bytes) -> str:
    """Decode a response body with the charset its XML declaration names.

    The HTTP Content-Type charset is ignored: the XML API declares its
    encoding in the document, and that is what the parser would honour.

    Raises:
        DecodeError: if the declared charset is unknown or the bytes are
            not valid in it.
    """
    match = _XML_ENCODING_RE.match(raw)
    encoding = match.group(1).decode("ascii") if match else "utf-8"
    try:
        return raw.decode(encoding)
    except LookupError:
        raise DecodeError("Response declares unknown encoding {!r}".format(encoding)) from None
    except UnicodeDecodeError as e:
        raise DecodeError("Response body is not valid {}: {}".format(encoding, e)) from e


TRANSPORTS: dict[str, type[Transport]] = {
    SEND_HTTPX: HttpxTransport,
    SEND_SOCKET: SocketTransport,
}


def get_transport(send_mode: str, timeout: Optional[float] = None) -> Transport:
    """Instantiate the transport registered for *send_mode*."""
    try:
        transport_cls = TRANSPORTS[send_mode]
    except KeyError:
        raise ValidationError(
            "Unknown send mode {!r}. Available: {}".format(send_mode, ", ".join(TRANSPORTS))
        ) from None
    return transport_cls(timeout=timeout)
