"""
Unit tests for credential files and crumb parsing.
"""

import netrc
import stat
from unittest.mock import patch

import pytest

from nodebatch.errors import CredentialError, CrumbError
from nodebatch.modules.auth import (
    Crumb,
    netrc_credentials,
    netrc_token,
    parse_crumb,
    server_hostname,
    write_netrc_file,
)


# =============================================================================
# Server hostname
# =============================================================================


@pytest.mark.parametrize(
    "url,expected",
    [
        ("http://jenkins.example.com:8080/", "jenkins.example.com"),
        ("https://ci.example.org/jenkins", "ci.example.org"),
        ("http://localhost", "localhost"),
        ("jenkins:8080/", "jenkins"),
        ("jenkins", "jenkins"),
    ],
)
def test_server_hostname(url, expected):
    assert server_hostname(url) == expected


# =============================================================================
# Netrc file
# =============================================================================


def test_write_netrc_file_contents_and_mode():
    path = write_netrc_file("http://jenkins.example.com:8080/", "alice", "s3cret")
    try:
        assert path.read_text() == (
            "machine jenkins.example.com\nlogin alice\npassword s3cret\n"
        )
        assert stat.S_IMODE(path.stat().st_mode) == 0o600
    finally:
        path.unlink()


def test_netrc_file_is_readable_by_netrc_module():
    path = write_netrc_file("http://jenkins.example.com:8080/", "alice", "s3cret")
    try:
        login, _, password = netrc.netrc(str(path)).authenticators("jenkins.example.com")
        assert (login, password) == ("alice", "s3cret")
    finally:
        path.unlink()


@pytest.mark.parametrize(
    "value,expected",
    [
        ("s3cret", "s3cret"),
        ("pass word", '"pass word"'),
        ('say"cheese', '"say\\"cheese"'),
        ("back\\slash", '"back\\\\slash"'),
        ("tab\there", '"tab\there"'),
        ("", '""'),
    ],
)
def test_netrc_token_quotes_only_when_needed(value, expected):
    assert netrc_token(value) == expected


@pytest.mark.parametrize(
    "password",
    ["pass word", 'say"cheese', "back\\slash", ' lead and trail ', 'mix "of" \\ all'],
)
def test_netrc_file_round_trips_awkward_passwords(password):
    path = write_netrc_file("http://jenkins.example.com:8080/", "alice", password)
    try:
        login, _, parsed = netrc.netrc(str(path)).authenticators("jenkins.example.com")
        assert (login, parsed) == ("alice", password)
    finally:
        path.unlink()


def test_netrc_credentials_removes_file_on_exit():
    with netrc_credentials("http://jenkins:8080", "alice", "pw") as path:
        assert path.exists()

    assert not path.exists()


def test_netrc_credentials_removes_file_on_error():
    with pytest.raises(RuntimeError):
        with netrc_credentials("http://jenkins:8080", "alice", "pw") as path:
            raise RuntimeError("boom")

    assert not path.exists()


def test_write_netrc_file_without_host_fails():
    with pytest.raises(CredentialError):
        write_netrc_file("http:///", "alice", "pw")


def test_write_netrc_file_reports_tempfile_failure():
    with patch("nodebatch.modules.auth.netrc_file.tempfile.mkstemp", side_effect=OSError("full")):
        with pytest.raises(CredentialError, match="Failed to create credential file") as exc_info:
            write_netrc_file("http://jenkins:8080", "alice", "pw")

    assert exc_info.value.exit_code == 2


# =============================================================================
# Crumb
# =============================================================================


def test_parse_crumb():
    crumb = parse_crumb("Jenkins-Crumb:0123abcd")

    assert crumb == Crumb(field="Jenkins-Crumb", value="0123abcd")
    assert crumb.as_header() == {"Jenkins-Crumb": "0123abcd"}
    assert str(crumb) == "Jenkins-Crumb: 0123abcd"


def test_parse_crumb_strips_whitespace():
    assert parse_crumb("  .crumb:xyz\n") == Crumb(field=".crumb", value="xyz")


@pytest.mark.parametrize("body", ["", "no-separator", ":value", "field:", "   "])
def test_parse_crumb_rejects_malformed_body(body):
    with pytest.raises(CrumbError) as exc_info:
        parse_crumb(body)

    assert exc_info.value.exit_code == 3
