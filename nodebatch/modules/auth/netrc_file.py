"""
Temporary netrc(5) credentials for talking to Jenkins.

The password is written once to a private temporary file so every HTTP call
in a run can authenticate from it without prompting again. The file must be
removed when the run ends; use :func:`netrc_credentials` to guarantee that.
"""

import logging
import os
import stat
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
from urllib.parse import urlsplit

from nodebatch.errors import CredentialError

logger = logging.getLogger("nodebatch.auth")


def server_hostname(server_url: str) -> str:
    """
    Reduce a server URL to the bare host used as the netrc ``machine``.

    Example:
        >>> server_hostname("http://jenkins.example.com:8080/")
        'jenkins.example.com'
    """
    hostname = urlsplit(server_url).hostname
    if hostname:
        return hostname

    # No scheme, e.g. "jenkins:8080/": take everything up to the first '/' or ':'
    bare = server_url.split("://", 1)[-1]
    return bare.split("/", 1)[0].split(":", 1)[0]


def netrc_token(value: str) -> str:
    """
    Quote a value for a netrc file when the netrc lexer would split or unescape it.

    Example:
        >>> netrc_token("pass word")
        '"pass word"'
    """
    if value and not any(ch.isspace() or ch in '"\\' for ch in value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_netrc(machine: str, login: str, password: str) -> str:
    return f"machine {machine}\nlogin {netrc_token(login)}\npassword {netrc_token(password)}\n"


def write_netrc_file(server_url: str, username: str, password: str) -> Path:
    """
    Create a mode 0600 netrc file holding credentials for the server.

    Args:
        server_url: Jenkins base URL
        username: Login name
        password: Password or API token

    Returns:
        Path of the new file; the caller owns its removal

    Raises:
        CredentialError: If the file cannot be created or read back
    """
    machine = server_hostname(server_url)
    if not machine:
        raise CredentialError(f"Cannot determine server host from '{server_url}'")

    try:
        fd, name = tempfile.mkstemp(prefix="nodebatch-", suffix=".netrc")
    except OSError as e:
        raise CredentialError(f"Failed to create credential file: {e}") from e

    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)
            f.write(render_netrc(machine, username, password))
    except OSError as e:
        path.unlink(missing_ok=True)
        raise CredentialError(f"Failed to write credential file: {e}") from e

    if not os.access(path, os.R_OK):
        path.unlink(missing_ok=True)
        raise CredentialError("netrc file doesn't exist? Aborting.")

    logger.debug(f"Wrote credentials for {machine} to {path}")
    return path


@contextmanager
def netrc_credentials(server_url: str, username: str, password: str) -> Iterator[Path]:
    """Yield a temporary netrc file, deleting it however the block exits."""
    path = write_netrc_file(server_url, username, password)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)
        logger.debug(f"Removed credential file {path}")
