"""Tests for the command-line interface.

WHY: The CLI is how operators check a site. It must read configuration
from the environment, print results to stdout, keep status on stderr, and
turn every error into exit status 1.

HOW: main() is called with explicit argv. The transport layer is replaced
by patching get_transport, so no connection is made.

RULES:
- capsys captures stdout/stderr
- webex_env provides credentials and WEBEX_URL
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from conftest import GET_USER_XML, LSTSUMMARY_FAILURE_XML, LSTSUMMARY_SUCCESS_XML, FakeTransport
from webex_client.api.errors import TransportError
from webex_client.cli import build_parser, main


def _run(argv, transport):
    with patch("webex_client.api.client.get_transport", return_value=transport) as factory:
        main(argv)
    return factory


class TestParser:
    def test_list_meetings_defaults(self):
        args = build_parser().parse_args(["list-meetings"])
        assert args.max == 5
        assert args.send_mode == "httpx"
        assert args.url is None
        assert args.timeout is None
        assert args.json is False and args.raw is False

    def test_send_mode_choices(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["list-meetings", "--send-mode", "curl"])

    def test_json_and_raw_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["list-meetings", "--json", "--raw"])

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestListMeetings:
    def test_prints_table(self, webex_env, capsys):
        transport = FakeTransport([LSTSUMMARY_SUCCESS_XML])
        factory = _run(["list-meetings", "--max", "2", "--send-mode", "socket", "--timeout", "3"], transport)

        factory.assert_called_once_with("socket", timeout=3.0)
        out, err = capsys.readouterr()
        assert "Result: SUCCESS (READY)" in out
        assert "11111" in out and "Weekly sync" in out
        assert "22222" in out and "Design review" in out
        assert "2 of 7 meeting(s)" in out
        assert "Listing up to 2 meeting(s) on acme.webex.com" in err
        assert "<maximumNum>2</maximumNum>" in transport.requests[0].envelope

    def test_prints_json(self, webex_env, capsys):
        _run(["list-meetings", "--json"], FakeTransport([LSTSUMMARY_SUCCESS_XML]))
        data = json.loads(capsys.readouterr().out)
        assert data["header"]["result"] == "SUCCESS"
        assert [m["meeting_key"] for m in data["meetings"]] == ["11111", "22222"]
        assert data["meetings"][0]["start_date"] == "2024-03-14 09:30:00"

    def test_prints_raw_xml(self, webex_env, capsys):
        _run(["list-meetings", "--raw"], FakeTransport([LSTSUMMARY_SUCCESS_XML]))
        assert capsys.readouterr().out.strip() == LSTSUMMARY_SUCCESS_XML.strip()

    def test_url_flag_overrides_env(self, webex_env, capsys):
        transport = FakeTransport([LSTSUMMARY_SUCCESS_XML])
        _run(["list-meetings", "--url", "https://other.webex.com"], transport)
        assert transport.requests[0].endpoint.host == "other.webex.com"

    def test_failure_result_exits_1(self, webex_env, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(["list-meetings"], FakeTransport([LSTSUMMARY_FAILURE_XML]))
        assert exc_info.value.code == 1
        assert "Reason: Corresponding Meeting not found" in capsys.readouterr().out

    def test_transport_error_exits_1(self, webex_env, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(["list-meetings"], FakeTransport(error=TransportError("connection refused")))
        assert exc_info.value.code == 1
        assert "Error (transport): connection refused" in capsys.readouterr().err

    def test_invalid_url_exits_1(self, webex_env, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(["list-meetings", "--url", "https://example.com"], FakeTransport())
        assert exc_info.value.code == 1
        assert "Error (validation)" in capsys.readouterr().err

    def test_missing_credentials_exits_1(self, webex_env, monkeypatch, capsys):
        monkeypatch.delenv("WEBEX_PASSWORD")
        transport = FakeTransport([LSTSUMMARY_SUCCESS_XML])
        with pytest.raises(SystemExit) as exc_info:
            _run(["list-meetings"], transport)
        assert exc_info.value.code == 1
        assert "WEBEX_PASSWORD" in capsys.readouterr().err
        assert transport.requests == []


class TestSend:
    def test_sends_body_file(self, webex_env, tmp_path, capsys):
        body = tmp_path / "body.xml"
        body.write_text("<webExId>jdoe</webExId>", encoding="utf-8")
        header = tmp_path / "header.xml"
        header.write_text("<email>x@acme.com</email>", encoding="utf-8")
        transport = FakeTransport([GET_USER_XML])

        _run(["send", "user.GetUser", "--body", str(body), "--header", str(header)], transport)

        assert capsys.readouterr().out.strip() == GET_USER_XML.strip()
        envelope = transport.requests[0].envelope
        assert "<webExId>jdoe</webExId>" in envelope
        assert "<email>x@acme.com</email></securityContext>" in envelope

    def test_missing_body_file_exits_1(self, webex_env, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(["send", "user.GetUser", "--body", str(tmp_path / "nope.xml")], FakeTransport())
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_unknown_operation_exits_1(self, webex_env, tmp_path, capsys):
        body = tmp_path / "body.xml"
        body.write_text("", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            _run(["send", "user.Explode", "--body", str(body)], FakeTransport())
        assert exc_info.value.code == 1
        assert "Error (validation)" in capsys.readouterr().err


class TestOperations:
    def test_lists_catalogue(self, capsys):
        main(["operations"])
        lines = capsys.readouterr().out.splitlines()
        assert "meeting.LstsummaryMeeting" in lines
        assert "history.LstmeetingattendeeHistory" in lines
