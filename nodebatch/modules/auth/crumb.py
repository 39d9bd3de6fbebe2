"""
Jenkins crumb handling.

Jenkins' CSRF protection requires a per-session nonce (the "crumb") on every
state-changing request. The crumb issuer is asked for ``<field>:<value>`` via
an XPath query, and the pair is sent back as a request header.
"""

from dataclasses import dataclass
from typing import Dict

from nodebatch.errors import CrumbError

CRUMB_ISSUER_PATH = "/crumbIssuer/api/xml"
CRUMB_XPATH = 'concat(//crumbRequestField,":",//crumb)'


@dataclass(frozen=True)
class Crumb:
    """Anti-forgery header name and value issued by Jenkins."""

    field: str
    value: str

    def as_header(self) -> Dict[str, str]:
        return {self.field: self.value}

    def __str__(self) -> str:
        return f"{self.field}: {self.value}"


def parse_crumb(body: str) -> Crumb:
    """
    Parse the crumb issuer's ``field:value`` response.

    Raises:
        CrumbError: If the body does not hold both a field name and a value
    """
    field, sep, value = body.strip().partition(":")
    field, value = field.strip(), value.strip()
    if not sep or not field or not value:
        raise CrumbError(f"Unexpected crumb issuer response: {body[:80]!r}")
    return Crumb(field=field, value=value)
