"""
URL parsing for source detection.

Users paste all sorts of things into the analyzer: full URLs, bare domains,
URLs with uppercase parameter names. This module turns that input into a
normalized URL plus a case-insensitive view of its query parameters, or
rejects it outright. It never raises.

Parameter Handling:
- Keys are lowercased ("UTM_Source" and "utm_source" are the same key)
- If a key repeats, the last value wins
- Blank values are kept here; consumers decide what blank means

Host Handling:
- Backslashes before the query are path separators ("a.com\\x" is "a.com/x")
- Percent-escapes in the host are decoded before validation
"""

import re
from dataclasses import dataclass, field
from urllib.parse import parse_qsl, unquote, urlsplit, urlunsplit

from .click_ids import detect_click_ids
from .models import DetectedClickId
from .rules import DEFAULT_RULES, RuleDataset
from .utm import UTMParams, extract_utm

_SCHEME_REGEX = re.compile(r"^https?://", re.IGNORECASE)

# Characters that can never appear in a hostname, checked after percent-decoding
_FORBIDDEN_HOST_CHARS = frozenset(" \t\r\n<>^|%\\[]@#?/\"'`{}")


@dataclass(frozen=True)
class ParsedURL:
    """
    A successfully parsed URL.

    Attributes:
        url: Normalized absolute URL
        hostname: Lowercased host without port or credentials
        pathname: Path component ("/" when empty)
        params: Query parameters with lowercased keys
        utm_params: The five UTM fields, blanks omitted
        click_ids: Known click IDs present, in dataset order
    """
    url: str
    hostname: str
    pathname: str
    params: dict[str, str] = field(default_factory=dict)
    utm_params: UTMParams = field(default_factory=UTMParams)
    click_ids: tuple[DetectedClickId, ...] = ()


def _ensure_scheme(url: str) -> str:
    """Prepend https:// when the input has no http(s) scheme."""
    if not _SCHEME_REGEX.match(url):
        return "https://" + url
    return url


def _normalize_backslashes(url: str) -> str:
    """Treat backslashes before the query or fragment as path separators."""
    end = len(url)
    for delimiter in "?#":
        index = url.find(delimiter)
        if index != -1:
            end = min(end, index)
    return url[:end].replace("\\", "/") + url[end:]


def _normalize_hostname(hostname: str | None) -> str | None:
    """
    Percent-decode, validate and lowercase a hostname.

    Returns None for empty hosts, hosts with forbidden characters (after
    decoding), and internationalized names that can't be IDNA-encoded.
    """
    if not hostname:
        return None

    hostname = unquote(hostname)
    if any(char in _FORBIDDEN_HOST_CHARS or ord(char) < 0x20 for char in hostname):
        return None

    hostname = hostname.lower()
    if not hostname.isascii():
        try:
            hostname = hostname.encode("idna").decode("ascii")
        except UnicodeError:
            return None

    return hostname


def parse_url(url_string: str | None, rules: RuleDataset = DEFAULT_RULES) -> ParsedURL | None:
    """
    Parse a URL and extract everything detection needs.

    Args:
        url_string: Raw user input, scheme optional
        rules: Dataset used for click ID detection

    Returns:
        ParsedURL, or None if the input can't be made into a valid URL

    Examples:
        >>> parse_url("facebook.com").hostname
        'facebook.com'

        >>> parse_url("https://example.com/?UTM_SOURCE=google").utm_params.source
        'google'

        >>> parse_url("face%62ook.com").hostname
        'facebook.com'

        >>> parse_url("https://exa mple.com") is None
        True
    """
    if not url_string or not url_string.strip():
        return None

    normalized = _normalize_backslashes(_ensure_scheme(url_string.strip()))

    try:
        parsed = urlsplit(normalized)
        # Accessing port validates it (raises ValueError if out of range)
        port = parsed.port
    except ValueError:
        return None

    hostname = _normalize_hostname(parsed.hostname)
    if not hostname:
        return None

    params: dict[str, str] = {}
    for key, value in parse_qsl(parsed.query, keep_blank_values=True):
        params[key.lower()] = value

    userinfo, at, _ = parsed.netloc.rpartition("@")
    host = f"[{hostname}]" if ":" in hostname else hostname
    netloc = f"{userinfo}{at}{host}" + (f":{port}" if port is not None else "")
    pathname = parsed.path or "/"
    href = urlunsplit((parsed.scheme.lower(), netloc, pathname, parsed.query, parsed.fragment))

    return ParsedURL(
        url=href,
        hostname=hostname,
        pathname=pathname,
        params=params,
        utm_params=extract_utm(params),
        click_ids=tuple(detect_click_ids(params, rules)),
    )
