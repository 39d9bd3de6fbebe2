"""
Shared pytest fixtures for Nodebatch tests.

This module provides common fixtures including:
- FakeJenkins: httpx.MockTransport-backed stand-in for a Jenkins server
- Netrc files pointing at the fake server
- Environment isolation for configuration
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from urllib.parse import parse_qs

import httpx
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nodebatch.modules.transport import ScriptConsoleClient

SERVER_URL = "http://jenkins.example.com:8080"


# =============================================================================
# Fake Jenkins Server
# =============================================================================

@dataclass
class FakeResponse:
    """Canned response for one Jenkins endpoint."""
    status_code: int = 200
    text: str = ""
    error: Optional[Exception] = None


@dataclass
class RecordedRequest:
    """Record of a request received by the fake server."""
    method: str
    path: str
    params: dict
    headers: httpx.Headers
    form: dict = field(default_factory=dict)


class FakeJenkins:
    """
    Mock the two Jenkins endpoints nodebatch talks to.

    Usage:
        def test_submit(fake_jenkins, make_client):
            fake_jenkins.script = FakeResponse(text="Confirmed web1 is online.\\n")
            with make_client() as client:
                client.submit_script("println('hi')")
            assert fake_jenkins.script_requests[0].form["script"] == ["println('hi')"]
    """

    def __init__(self):
        self.crumb = FakeResponse(text="Jenkins-Crumb:abc123")
        self.script = FakeResponse(text="")
        self.requests: List[RecordedRequest] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        form = {}
        if request.method == "POST":
            form = parse_qs(request.content.decode("utf-8"))

        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.url.path,
                params=dict(request.url.params),
                headers=request.headers,
                form=form,
            )
        )

        if request.url.path == "/crumbIssuer/api/xml":
            canned = self.crumb
        elif request.url.path == "/scriptText":
            canned = self.script
        else:
            return httpx.Response(404, text="Not Found")

        if canned.error is not None:
            raise canned.error
        return httpx.Response(canned.status_code, text=canned.text)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def crumb_requests(self) -> List[RecordedRequest]:
        return [r for r in self.requests if r.path == "/crumbIssuer/api/xml"]

    @property
    def script_requests(self) -> List[RecordedRequest]:
        return [r for r in self.requests if r.path == "/scriptText"]


@pytest.fixture
def fake_jenkins():
    """Provide a fresh fake Jenkins server."""
    return FakeJenkins()


@pytest.fixture
def netrc_file(tmp_path) -> Path:
    """Write a netrc file with credentials for the fake server."""
    path = tmp_path / "netrc"
    path.write_text("machine jenkins.example.com\nlogin alice\npassword s3cret\n")
    path.chmod(0o600)
    return path


@pytest.fixture
def make_client(fake_jenkins, netrc_file):
    """Factory for ScriptConsoleClient instances wired to the fake server."""

    def _make(**kwargs) -> ScriptConsoleClient:
        return ScriptConsoleClient(
            kwargs.pop("server_url", SERVER_URL),
            kwargs.pop("netrc_file", netrc_file),
            transport=fake_jenkins.transport,
            **kwargs,
        )

    return _make


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of configuration tests."""
    for name in (
        "NODEBATCH_PASSWORD",
        "NODEBATCH_SSL_VERIFY",
        "NODEBATCH_CA_CERT",
        "NODEBATCH_TIMEOUT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to streams of earlier CLI invocations."""
    yield
    for name in ("nodebatch", "httpx", "httpcore"):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
