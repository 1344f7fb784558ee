"""Command-line interface for the WebEx XML API client.

WHY: Operators need a quick way to check a site's credentials and look at
its meetings without writing a script. The CLI wires configuration loading,
WebexClient, and output formatting behind one command.

HOW: argparse with three subcommands:
  list-meetings: meeting.LstsummaryMeeting, printed as a table, JSON, or raw XML
  send:          any catalogued operation with a body fragment read from a file
  operations:    print the operation catalogue
Credentials come from the environment / .env via config.load_credentials();
the site URL from --url or WEBEX_URL. Status messages go to stderr, results
to stdout.

RULES:
- -v/--verbose turns on DEBUG logging, otherwise WARNING
- Configuration problems and WebexError exit with status 1
- Results go to stdout so the output can be piped
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from webex_client import __version__
from webex_client.api.client import WebexClient
from webex_client.api.errors import WebexError
from webex_client.api.models import LstsummaryMeetingResponse
from webex_client.config import (
    DEFAULT_MAXIMUM_NUM,
    DEFAULT_SEND_MODE,
    SEND_MODES,
    SERVICE_OPERATIONS,
    load_credentials,
    load_site_url,
)

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed immediately."""
    print(msg, file=sys.stderr, flush=True)


def _build_client(args: argparse.Namespace) -> WebexClient:
    """Create a WebexClient from CLI arguments and the environment.

    RULES:
    - --url wins over WEBEX_URL
    - Credentials always come from the environment
    """
    client = WebexClient(
        url=args.url or load_site_url(),
        send_mode=args.send_mode,
        timeout=args.timeout,
    )
    client.set_auth(*load_credentials())
    return client


def format_meetings_table(response: LstsummaryMeetingResponse) -> str:
    """Render a listing as fixed-width text, one meeting per line."""
    lines = ["Result: {} ({})".format(response.header.result, response.header.gsb_status)]
    if response.header.reason:
        lines.append("Reason: {}".format(response.header.reason))
    for meeting in response.meetings:
        start = meeting.start_date.strftime("%Y-%m-%d %H:%M") if meeting.start_date else "-"
        minutes = int(meeting.duration.total_seconds() // 60) if meeting.duration else 0
        lines.append(
            "{:<12} {:<16} {:>4}m  {:<10} {}".format(
                meeting.meeting_key,
                start,
                minutes,
                meeting.status or "-",
                meeting.conf_name,
            )
        )
    if response.matching_records and response.matching_records.total is not None:
        lines.append("{} of {} meeting(s)".format(len(response.meetings), response.matching_records.total))
    return "\n".join(lines)


def response_to_json(response: LstsummaryMeetingResponse) -> str:
    """Serialise a decoded listing to JSON (dates and durations as strings)."""
    return json.dumps(dataclasses.asdict(response), indent=2, default=str)


def _run_list_meetings(args: argparse.Namespace) -> None:
    client = _build_client(args)
    _status("Listing up to {} meeting(s) on {}...".format(args.max, client.endpoint.host))
    response = client.lstsummary_meeting(args.max)

    if args.raw:
        print(client.get_response("xml"))
    elif args.json:
        print(response_to_json(response))
    else:
        print(format_meetings_table(response))

    if not response.header.succeeded:
        sys.exit(1)


def _run_send(args: argparse.Namespace) -> None:
    body = Path(args.body).read_text(encoding="utf-8")
    header = Path(args.header).read_text(encoding="utf-8") if args.header else None
    client = _build_client(args)
    _status("Calling {} on {}...".format(args.service, client.endpoint.host))
    print(client.execute(args.service, body, header=header))


def _run_operations(args: argparse.Namespace) -> None:
    for operation in SERVICE_OPERATIONS:
        print(operation)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="webex-client",
        description="Talk to a WebEx site through the legacy XML API.",
    )
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    # Connection options shared by the subcommands that make calls
    connection = argparse.ArgumentParser(add_help=False)
    connection.add_argument(
        "--url",
        default=None,
        help="Site URL, e.g. https://acme.webex.com (default: $WEBEX_URL).",
    )
    connection.add_argument(
        "--send-mode",
        choices=SEND_MODES,
        default=DEFAULT_SEND_MODE,
        help="Transport to use (default: %(default)s).",
    )
    connection.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Socket/HTTP timeout in seconds (default: wait indefinitely).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list-meetings",
        parents=[connection],
        help="List a summary of meetings ordered by start time.",
    )
    list_parser.add_argument(
        "--max",
        type=int,
        default=DEFAULT_MAXIMUM_NUM,
        help="Maximum number of meetings to return (default: %(default)s).",
    )
    output = list_parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Print the decoded response as JSON.")
    output.add_argument("--raw", action="store_true", help="Print the raw response XML.")
    list_parser.set_defaults(func=_run_list_meetings)

    send_parser = subparsers.add_parser(
        "send",
        parents=[connection],
        help="Call any XML API operation and print the raw response.",
    )
    send_parser.add_argument("service", help="Operation name, e.g. user.GetUser.")
    send_parser.add_argument("--body", required=True, help="File holding the bodyContent XML fragment.")
    send_parser.add_argument("--header", default=None, help="File holding an extra securityContext fragment.")
    send_parser.set_defaults(func=_run_send)

    operations_parser = subparsers.add_parser("operations", help="List known XML API operations.")
    operations_parser.set_defaults(func=_run_operations)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        args.func(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except WebexError as e:
        logger.debug("Call failed", exc_info=True)
        print("Error ({}): {}".format(e.kind.value, e), file=sys.stderr)
        sys.exit(1)
    except (ValueError, OSError) as e:
        # Missing configuration, unreadable body/header files
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
