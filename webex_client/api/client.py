"""Synchronous client for the WebEx XML API.

WHY: Each XML API call is the same pipeline: build the envelope, send it,
decode the response, remember what happened. This module puts that pipeline
behind one client object so scripts, the CLI, and tests never touch XML or
sockets directly, and so several clients (sites, tenants) can coexist.

HOW: WebexClient holds the endpoint, the send mode, the credentials, and the
call history as instance state. _call() runs one round-trip:
check readiness → build_envelope → prepare_request → Transport.send →
decode → append CallRecord. Operation methods (lstsummary_meeting, execute)
only supply the service name, the body fragment, and the decoder.

RULES:
- Credentials and endpoint are checked before any network I/O
- The call counter advances only after send and decode both succeed
- A DecodeError from _call() carries the raw response body
- History is 1-based for callers: get_response(number=1) is the first call
- An injected transport replaces send-mode selection (test doubles)
- Not thread-safe: one client per thread
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Tuple

from webex_client.api.decoder import parse_lstsummary_meeting
from webex_client.api.endpoint import Endpoint, parse_endpoint
from webex_client.api.envelope import build_envelope, lstsummary_meeting_body, service_binding
from webex_client.api.errors import DecodeError, UsageError, ValidationError
from webex_client.api.models import (
    CallRecord,
    Credentials,
    LstsummaryMeetingResponse,
    ResponseView,
)
from webex_client.api.transport import Transport, get_transport, prepare_request
from webex_client.config import (
    DEFAULT_MAXIMUM_NUM,
    DEFAULT_SEND_MODE,
    SEND_MODES,
    SERVICE_OPERATIONS,
)

logger = logging.getLogger(__name__)


class WebexClient:
    """Client for one WebEx site.

    WHY: Gives callers a small, typed surface (set_url, set_send_mode,
    set_auth, the operation methods, and get_response) over the XML API.

    HOW: Configuration setters validate eagerly and raise typed errors.
    Operation methods delegate to _call(), which records every completed
    round-trip in self._history.

    RULES:
    - url / send_mode / credentials may be given to __init__ or set later
    - transport, when given, is used for every call regardless of send_mode
    - timeout (seconds) is passed to transports built from send_mode;
      None blocks indefinitely
    """

    def __init__(
        self,
        url: Optional[str] = None,
        send_mode: str = DEFAULT_SEND_MODE,
        credentials: Optional[Credentials] = None,
        transport: Optional[Transport] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._endpoint: Optional[Endpoint] = None
        self._send_mode = SEND_MODES[0]
        self._credentials = credentials
        self._transport = transport
        self._timeout = timeout
        self._history: List[CallRecord] = []

        if url is not None:
            self.set_url(url)
        self.set_send_mode(send_mode)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @staticmethod
    def get_send_modes() -> Tuple[str, ...]:
        """Return the supported send modes."""
        return SEND_MODES

    @property
    def endpoint(self) -> Optional[Endpoint]:
        return self._endpoint

    @property
    def send_mode(self) -> str:
        return self._send_mode

    def set_url(self, url: str) -> None:
        """Set the customer site URL, e.g. ``https://acme.webex.com``.

        Raises:
            ValidationError: if the URL is not an http(s) URL under the
                allowed domain.
        """
        self._endpoint = parse_endpoint(url)
        logger.debug("Endpoint set to %s", self._endpoint.url)

    def set_send_mode(self, mode: str) -> None:
        """Choose the transport: ``"httpx"`` or ``"socket"``.

        Raises:
            ValidationError: for any other value.
        """
        if mode not in SEND_MODES:
            raise ValidationError(
                "Unknown send mode {!r}. Available: {}".format(mode, ", ".join(SEND_MODES))
            )
        self._send_mode = mode

    def set_auth(self, webex_id: str, password: str, site_id: str, partner_id: str) -> None:
        """Replace the credentials used for every subsequent call."""
        self._credentials = Credentials(
            webex_id=webex_id,
            password=password,
            site_id=site_id,
            partner_id=partner_id,
        )

    def has_auth(self) -> bool:
        """Return True when all four credentials are set and non-empty."""
        return self._credentials is not None and self._credentials.complete

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    @property
    def calls(self) -> int:
        """Number of completed calls."""
        return len(self._history)

    @property
    def history(self) -> Tuple[CallRecord, ...]:
        return tuple(self._history)

    def get_record(self, number: Optional[int] = None) -> CallRecord:
        """Return the CallRecord of call *number* (1-based), default the latest.

        Raises:
            UsageError: if no call has completed yet or *number* is outside
                1..calls.
        """
        if not self._history:
            raise UsageError("No completed calls to read a response from")
        if number is None:
            return self._history[-1]
        if isinstance(number, bool) or not isinstance(number, int) or not 1 <= number <= len(self._history):
            raise UsageError(
                "Invalid response number {!r}: expected 1..{}".format(number, len(self._history))
            )
        return self._history[number - 1]

    def get_response(
        self,
        view: ResponseView | str = ResponseView.DATA,
        number: Optional[int] = None,
    ) -> Any:
        """Return the raw XML or the decoded response of a past call.

        Args:
            view: ``"xml"`` for the raw response body, ``"data"`` for the
                decoded object (None for execute() calls).
            number: 1-based call number; defaults to the most recent call.

        Raises:
            UsageError: for an unknown view or an out-of-range number.
        """
        try:
            view = ResponseView(view)
        except ValueError:
            raise UsageError(
                "Unknown response view {!r}: expected 'xml' or 'data'".format(view)
            ) from None

        record = self.get_record(number)
        if view is ResponseView.XML:
            return record.raw_response
        return record.decoded

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def lstsummary_meeting(self, maximum_num: int = DEFAULT_MAXIMUM_NUM) -> LstsummaryMeetingResponse:
        """List a summary of the site's meetings, ordered by start time.

        Args:
            maximum_num: Page size, a positive integer.

        Returns:
            The decoded response; also stored in the call history.
        """
        if isinstance(maximum_num, bool) or not isinstance(maximum_num, int) or maximum_num < 1:
            raise ValidationError(
                "maximum_num must be a positive integer, got {!r}".format(maximum_num)
            )
        return self._call(
            "meeting.LstsummaryMeeting",
            lstsummary_meeting_body(maximum_num),
            decode=parse_lstsummary_meeting,
        )

    def execute(self, service: str, body: str, header: Optional[str] = None) -> str:
        """Run any XML API operation and return the raw response XML.

        Args:
            service: Operation name, e.g. ``user.GetUser`` (``user_GetUser``
                is accepted too).
            body: Pre-rendered bodyContent fragment.
            header: Optional fragment appended to securityContext.

        Raises:
            ValidationError: if *service* is not a known operation.
        """
        binding = service_binding(service)
        if binding not in SERVICE_OPERATIONS:
            raise ValidationError("Unknown WebEx XML API operation {!r}".format(service))
        self._call(binding, body, header=header)
        return self._history[-1].raw_response

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _resolve_transport(self) -> Transport:
        if self._transport is not None:
            return self._transport
        return get_transport(self._send_mode, timeout=self._timeout)

    def _call(
        self,
        service: str,
        body: str,
        header: Optional[str] = None,
        decode: Optional[Callable[[str], Any]] = None,
    ) -> Any:
        """Build, send, decode, and record one call."""
        if not self.has_auth():
            raise UsageError("Authentication data not set: call set_auth() first")
        if self._endpoint is None:
            raise UsageError("WebEx site URL not set: call set_url() first")

        envelope = build_envelope(self._credentials, service, body, header)
        request = prepare_request(self._endpoint, self._credentials, envelope, self._send_mode)
        transport = self._resolve_transport()

        logger.info("Calling %s on %s via %s", service, self._endpoint.host, transport.name)
        raw_response = transport.send(request)
        logger.debug("%s returned %d characters", service, len(raw_response))

        decoded = None
        if decode is not None:
            try:
                decoded = decode(raw_response)
            except DecodeError as e:
                e.raw_response = raw_response
                raise

        self._history.append(
            CallRecord(
                service=service,
                envelope=envelope,
                post_header=list(request.header_lines),
                post_body=request.body,
                raw_response=raw_response,
                decoded=decoded,
            )
        )
        return decoded
