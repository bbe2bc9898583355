"""
URL Validator - Refuse to fetch URLs that point into private networks.

Summaries are requested for arbitrary user-supplied URLs, so every outbound
fetch is checked first. Rejected URLs raise SSRFError, which is a FetchError
and is therefore reported like any other per-source fetch failure.
"""

import ipaddress
import socket
from urllib.parse import urlparse

from .exceptions import FetchError


class SSRFError(FetchError):
    """Raised when a URL targets a blocked host or scheme."""
    pass


ALLOWED_SCHEMES = {"http", "https"}

BLOCKED_HOSTNAMES = {
    "localhost",
    "localhost.localdomain",
    "ip6-localhost",
    "ip6-loopback",
    "metadata",
    "metadata.google.internal",
}

BLOCKED_SUFFIXES = (".local", ".internal", ".localhost")


def is_ip_blocked(ip_str: str) -> bool:
    """Check if an address is private, loopback, link-local or otherwise non-public."""
    try:
        ip = ipaddress.ip_address(ip_str)
    except ValueError:
        return False
    return (
        ip.is_private
        or ip.is_loopback
        or ip.is_link_local
        or ip.is_reserved
        or ip.is_multicast
        or ip.is_unspecified
    )


def validate_url(url: str, resolve_dns: bool = True) -> str:
    """
    Validate a URL before fetching it.

    Args:
        url: The URL to validate
        resolve_dns: Also resolve the hostname and check every address it maps to

    Returns:
        The URL, unchanged

    Raises:
        SSRFError: If the URL fails validation
    """
    try:
        parsed = urlparse(url)
        port = parsed.port
    except ValueError as e:
        raise SSRFError(f"Invalid URL: {e}", url=url) from e

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise SSRFError(f"URL scheme '{parsed.scheme}' is not allowed. Use http or https.", url=url)

    if not parsed.hostname:
        raise SSRFError("URL must include a hostname", url=url)

    hostname = parsed.hostname.lower()

    if hostname in BLOCKED_HOSTNAMES or hostname.endswith(BLOCKED_SUFFIXES):
        raise SSRFError(f"Access to '{hostname}' is not allowed", url=url)

    if is_ip_blocked(hostname):
        raise SSRFError(f"Access to IP address '{hostname}' is not allowed", url=url)

    if resolve_dns:
        try:
            addrinfo = socket.getaddrinfo(hostname, port or 80, proto=socket.IPPROTO_TCP)
        except (socket.gaierror, UnicodeError):
            # Unresolvable hosts fail at fetch time with a transport error
            return url
        for _family, _type, _proto, _canon, sockaddr in addrinfo:
            if is_ip_blocked(sockaddr[0]):
                raise SSRFError(
                    f"Hostname '{hostname}' resolves to blocked IP address '{sockaddr[0]}'",
                    url=url,
                )

    return url
