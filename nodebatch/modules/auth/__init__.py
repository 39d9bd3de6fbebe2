"""
Authentication Module - Black Box Interface

Purpose: Prepare credentials and anti-forgery tokens for Jenkins requests
Interface: netrc_credentials(), write_netrc_file(), parse_crumb(), Crumb
Hidden: Temporary file handling, netrc format, crumb response format

Authorization itself happens server-side; nothing here inspects permissions.
"""

from .crumb import CRUMB_ISSUER_PATH, CRUMB_XPATH, Crumb, parse_crumb
from .netrc_file import netrc_credentials, netrc_token, server_hostname, write_netrc_file

__all__ = [
    "CRUMB_ISSUER_PATH",
    "CRUMB_XPATH",
    "Crumb",
    "netrc_credentials",
    "netrc_token",
    "parse_crumb",
    "server_hostname",
    "write_netrc_file",
]
