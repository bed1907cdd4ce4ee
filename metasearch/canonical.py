"""URL canonicalization used to decide whether two providers found the same page."""

from __future__ import annotations

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

TRACKING_PARAMS: frozenset[str] = frozenset(
    {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_content",
        "utm_term",
        "fbclid",
        "gclid",
        "ref",
        "source",
        "sxsrf",
        "ei",
        "ved",
    }
)

_DEFAULT_PORTS = {("http", 80), ("https", 443)}


def canonicalize(url: str) -> str:
    """Return the deduplication key for a result URL.

    Drops a leading ``www.``, tracking parameters and trailing slashes, and
    sorts the remaining query parameters by key. Strings that do not parse as
    absolute URLs are only trimmed and lowercased. Never raises.
    """
    raw = url or ""
    try:
        parts = urlsplit(raw.strip())
        host = parts.hostname
        port = parts.port
    except ValueError:
        return raw.strip().lower()
    if not parts.scheme or not host:
        return raw.strip().lower()

    scheme = parts.scheme.lower()
    if (scheme, port) in _DEFAULT_PORTS:
        port = None
    if host.startswith("www."):
        host = host[4:]
    if ":" in host:
        host = f"[{host}]"
    netloc = host if port is None else f"{host}:{port}"
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"

    params = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in TRACKING_PARAMS
    ]
    # stable sort: repeated keys keep their relative order
    params.sort(key=lambda item: item[0])

    path = parts.path.rstrip("/") or "/"
    return urlunsplit((scheme, netloc, path, urlencode(params), parts.fragment))
