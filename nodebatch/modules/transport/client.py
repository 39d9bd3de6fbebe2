"""
HTTP client for the Jenkins script console.

Wraps an httpx client that authenticates from a netrc file, fetches the CSRF
crumb and submits Groovy to ``/scriptText``, streaming the console output back
as it arrives.
"""

import logging
import netrc
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO, Union
from urllib.parse import urlsplit

import httpx

from nodebatch.errors import CredentialError, CrumbError, SubmissionError
from nodebatch.modules.auth import CRUMB_ISSUER_PATH, CRUMB_XPATH, Crumb, parse_crumb

logger = logging.getLogger("nodebatch.transport")

SCRIPT_TEXT_PATH = "/scriptText"

# Exit statuses follow curl's numbering for the same failures
EXIT_OK = 0
EXIT_CONNECT_FAILED = 7
EXIT_HTTP_ERROR = 22
EXIT_TIMEOUT = 28
EXIT_TRANSPORT_ERROR = 56


@dataclass
class SubmissionResult:
    """Outcome of a script submission."""

    status_code: int
    bytes_received: int = 0

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def exit_code(self) -> int:
        return EXIT_OK if self.ok else EXIT_HTTP_ERROR


def normalize_server_url(server_url: str) -> str:
    """Strip trailing slashes and default a scheme-less URL to http, as curl does."""
    url = server_url.rstrip("/")
    if not urlsplit(url).hostname:
        url = "http://" + url
    return url


class ScriptConsoleClient:
    """Client for one Jenkins server, authenticated from a netrc file."""

    def __init__(
        self,
        server_url: str,
        netrc_file: Union[str, Path],
        verify: Union[bool, str] = True,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            server_url: Jenkins base URL, e.g. ``http://jenkins:8080``
            netrc_file: netrc file holding credentials for the server host
            verify: TLS verification flag or CA bundle path
            timeout: Seconds before giving up on a request; None waits forever
            transport: Optional httpx transport (tests use httpx.MockTransport)

        Raises:
            CredentialError: If the netrc file cannot be parsed
        """
        self.server_url = normalize_server_url(server_url)
        try:
            auth = httpx.NetRCAuth(file=str(netrc_file))
        except (netrc.NetrcParseError, OSError) as e:
            raise CredentialError(f"Cannot read credential file: {e}") from e

        self._client = httpx.Client(
            base_url=self.server_url,
            auth=auth,
            verify=verify,
            timeout=timeout,
            transport=transport,
        )

        if self.server_url.startswith("http://"):
            logger.warning("Using HTTP without TLS; credentials are sent in the clear")

    def __enter__(self) -> "ScriptConsoleClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch_crumb(self) -> Crumb:
        """
        Ask the crumb issuer for the anti-forgery header.

        Raises:
            CrumbError: On transport failure, a non-2xx status or a malformed body
        """
        logger.info(f"Requesting crumb from {self.server_url}{CRUMB_ISSUER_PATH}")
        try:
            response = self._client.get(CRUMB_ISSUER_PATH, params={"xpath": CRUMB_XPATH})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CrumbError(
                f"Crumb issuer returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise CrumbError(f"Failed to contact crumb issuer: {e}") from e

        crumb = parse_crumb(response.text)
        logger.debug(f"Received crumb header field '{crumb.field}'")
        return crumb

    def submit_script(
        self,
        script: str,
        crumb: Optional[Crumb] = None,
        sink: Optional[TextIO] = None,
    ) -> SubmissionResult:
        """
        Run a Groovy script on the server and stream its output.

        Args:
            script: Groovy source, sent as the ``script`` form field
            crumb: Anti-forgery header to attach
            sink: Where console output is written (defaults to stdout)

        Returns:
            SubmissionResult with the HTTP status

        Raises:
            SubmissionError: If the request could not be completed
        """
        sink = sink or sys.stdout
        headers = crumb.as_header() if crumb else {}
        received = 0

        logger.info(f"Submitting {len(script)} characters of Groovy to {SCRIPT_TEXT_PATH}")
        try:
            with self._client.stream(
                "POST", SCRIPT_TEXT_PATH, data={"script": script}, headers=headers
            ) as response:
                for chunk in response.iter_text():
                    sink.write(chunk)
                    sink.flush()
                    received += len(chunk)
        except httpx.TimeoutException as e:
            raise SubmissionError(f"Script submission timed out: {e}", EXIT_TIMEOUT) from e
        except httpx.ConnectError as e:
            raise SubmissionError(
                f"Could not connect to {self.server_url}: {e}", EXIT_CONNECT_FAILED
            ) from e
        except httpx.HTTPError as e:
            raise SubmissionError(f"Script submission failed: {e}", EXIT_TRANSPORT_ERROR) from e

        result = SubmissionResult(status_code=response.status_code, bytes_received=received)
        if result.ok:
            logger.info(f"Script console returned HTTP {result.status_code}")
        else:
            logger.error(f"Script console returned HTTP {result.status_code}")
        return result
