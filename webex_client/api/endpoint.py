"""Site URL validation and endpoint resolution.

WHY: Credentials are posted in clear form fields, so the client must only
ever talk to a WebEx-hosted site. The URL is checked once, when it is set,
and turned into an immutable (scheme, host) pair.

HOW: A case-insensitive regex allows ``http``/``https`` and a host made of
one or more labels ending in the allow-listed domain. The port follows from
the scheme.

RULES:
- No path, port, or query is accepted after the host
- Scheme is stored lowercased; host is stored as given
- Invalid input raises ValidationError
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from webex_client.api.errors import ValidationError
from webex_client.config import PREFIX_HTTP, PREFIX_HTTPS, WEBEX_DOMAIN, XML_SERVICE_PATH

_PORTS = {PREFIX_HTTP: 80, PREFIX_HTTPS: 443}

_URL_RE = re.compile(
    r"(?P<scheme>https?)://(?P<host>(?:[a-z0-9][a-z0-9_-]*\.)+" + re.escape(WEBEX_DOMAIN) + r")",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Endpoint:
    """A validated WebEx site: scheme plus host."""

    scheme: str
    host: str

    @property
    def port(self) -> int:
        return get_port(self.scheme)

    @property
    def url(self) -> str:
        """Full XML service URL, e.g. https://acme.webex.com/WBXService/XMLService."""
        return "{}://{}/{}".format(self.scheme, self.host, XML_SERVICE_PATH)


def validate_url(url: str) -> bool:
    """Return True if *url* is an http(s) URL of a host under the allowed domain."""
    if not isinstance(url, str):
        return False
    return _URL_RE.fullmatch(url) is not None


def get_port(scheme: str) -> int:
    """Map a scheme to its port: 80 for http, 443 for https."""
    try:
        return _PORTS[scheme.lower()]
    except (KeyError, AttributeError):
        raise ValidationError("Unsupported scheme: {!r}".format(scheme)) from None


def parse_endpoint(url: str) -> Endpoint:
    """Validate *url* and split it into an Endpoint.

    Raises:
        ValidationError: if the URL is not an http(s) URL under WEBEX_DOMAIN.
    """
    match = _URL_RE.fullmatch(url) if isinstance(url, str) else None
    if match is None:
        raise ValidationError(
            "Invalid WebEx site URL {!r}: expected http(s)://<site>.{}".format(url, WEBEX_DOMAIN)
        )
    return Endpoint(scheme=match.group("scheme").lower(), host=match.group("host"))
