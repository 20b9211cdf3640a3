from __future__ import annotations

import re
from typing import Literal
from urllib.parse import quote, urlsplit, urlunsplit

URL_SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z\d+.-]*://")

UrlValidationReason = Literal["invalid-format", "unsupported-protocol"]

URL_ERROR_MESSAGES: dict[str, str] = {
    "invalid-format": "Please enter a valid URL (e.g., https://example.com)",
    "unsupported-protocol": "Only HTTP and HTTPS URLs are supported",
}

_SUPPORTED_SCHEMES = ("http", "https")
_DEFAULT_PORTS = {"http": 80, "https": 443}

# Code points a browser refuses in a hostname.
_FORBIDDEN_HOST_RE = re.compile(r"[\s#%/:<>?@\[\\\]^|]")

_PATH_SAFE = "/%:@!$&'()*+,;=~"
_QUERY_SAFE = _PATH_SAFE + "?"


class UrlValidationError(ValueError):
    def __init__(self, reason: UrlValidationReason):
        self.reason = reason
        self.message = URL_ERROR_MESSAGES[reason]
        super().__init__(self.message)


def _encode_host(hostname: str) -> str:
    if ":" in hostname:
        # IPv6 literal; urlsplit already validated the brackets.
        return f"[{hostname}]"
    if _FORBIDDEN_HOST_RE.search(hostname):
        raise UrlValidationError("invalid-format")
    try:
        return hostname.encode("idna").decode("ascii").lower()
    except UnicodeError as e:
        raise UrlValidationError("invalid-format") from e


def normalize_url(raw: str) -> str:
    """Turn user input into an absolute http(s) URL without a fragment.

    Bare domains get an ``https://`` prefix before parsing. An explicit
    scheme is kept through parsing so that ``ftp://...`` is reported as an
    unsupported protocol rather than a malformed URL.
    """
    value = (raw or "").strip()
    if not value:
        raise UrlValidationError("invalid-format")

    if not URL_SCHEME_PATTERN.match(value):
        value = "https://" + value

    # Browsers read "\" as "/" before the query in http(s) URLs.
    if value.split(":", 1)[0].lower() in _SUPPORTED_SCHEMES:
        head, sep, rest = value.partition("?")
        if not sep:
            head, sep, rest = value.partition("#")
        value = head.replace("\\", "/") + sep + rest

    try:
        parsed = urlsplit(value)
        port = parsed.port
    except ValueError as e:
        raise UrlValidationError("invalid-format") from e

    if parsed.scheme not in _SUPPORTED_SCHEMES:
        raise UrlValidationError("unsupported-protocol")
    if not parsed.hostname:
        raise UrlValidationError("invalid-format")

    netloc = _encode_host(parsed.hostname)
    if port is not None and port != _DEFAULT_PORTS[parsed.scheme]:
        netloc = f"{netloc}:{port}"
    if parsed.username is not None:
        userinfo = parsed.username
        if parsed.password is not None:
            userinfo = f"{userinfo}:{parsed.password}"
        netloc = f"{userinfo}@{netloc}"

    path = quote(parsed.path, safe=_PATH_SAFE) or "/"
    query = quote(parsed.query, safe=_QUERY_SAFE)
    return urlunsplit((parsed.scheme, netloc, path, query, ""))


def hostname_of(url: str) -> str:
    return (urlsplit(url).hostname or "").lower()
