"""URL extraction and music-source detection."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from directives.parser_utils import strip_matches
from directives.types import MatchResult, Source, SyntaxType, UrlArgument

# URLs never swallow bracket, paren or brace delimiters, nor trailing punctuation.
_URL_CHAR = r"[^\s\[\]\(\)\{\}]"
_TAIL = r"""(?<![.,!?;:'"])"""
_HOST = r"(?:[\w-]+\.)+[a-z]{2,}"
URL_PATTERN = re.compile(
    rf"(?<![\w./:-])(?P<url>"
    rf"https?://{_HOST}(?::[0-9]+)?(?:/{_URL_CHAR}*)?{_TAIL}"
    rf"|{_HOST}/{_URL_CHAR}+{_TAIL}"
    rf"|spotify:[a-z]+:{_URL_CHAR}+{_TAIL}"
    rf")",
    re.IGNORECASE,
)

_SOURCE_HOSTS = (
    ("spotify.com", Source.SPOTIFY),
    ("soundcloud.com", Source.SOUNDCLOUD),
    ("youtube.com", Source.YOUTUBE),
    ("youtu.be", Source.YOUTUBE),
)


def detect_source(url: str) -> Source:
    """Map a URL or ``spotify:`` URI to the music source it points at."""

    lowered = (url or "").strip().lower()
    if lowered.startswith("spotify:"):
        return Source.SPOTIFY
    if "://" not in lowered:
        lowered = f"https://{lowered}"
    host = urlsplit(lowered).hostname or ""
    for suffix, source in _SOURCE_HOSTS:
        if host == suffix or host.endswith(f".{suffix}"):
            return source
    return Source.UNKNOWN


def match_url(text: str, syntax: SyntaxType = SyntaxType.KEYWORD) -> MatchResult[UrlArgument]:
    """Extract the first URL and strip every URL span from ``text``."""

    if not text:
        return MatchResult.miss(text)
    matches, remainder = strip_matches(URL_PATTERN, text)
    if not matches:
        return MatchResult.miss(text)
    value = matches[0].group("url")
    payload = UrlArgument(value=value, source=detect_source(value))
    if syntax == SyntaxType.SLASH:
        remainder = ""
    return MatchResult(matched=True, remainder=remainder, payload=payload, position=matches[0].start())


__all__ = ["URL_PATTERN", "detect_source", "match_url"]
