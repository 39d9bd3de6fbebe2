"""
Transport Module - Black Box Interface

Purpose: Deliver generated Groovy to the Jenkins script console
Interface: ScriptConsoleClient.fetch_crumb(), ScriptConsoleClient.submit_script()
Hidden: HTTP library, netrc authentication, response streaming

Can be replaced with another delivery mechanism (jenkins-cli, SSH) without
touching script generation.
"""

from .client import (
    EXIT_CONNECT_FAILED,
    EXIT_HTTP_ERROR,
    EXIT_OK,
    EXIT_TIMEOUT,
    EXIT_TRANSPORT_ERROR,
    SCRIPT_TEXT_PATH,
    ScriptConsoleClient,
    SubmissionResult,
    normalize_server_url,
)

__all__ = [
    "EXIT_CONNECT_FAILED",
    "EXIT_HTTP_ERROR",
    "EXIT_OK",
    "EXIT_TIMEOUT",
    "EXIT_TRANSPORT_ERROR",
    "SCRIPT_TEXT_PATH",
    "ScriptConsoleClient",
    "SubmissionResult",
    "normalize_server_url",
]
