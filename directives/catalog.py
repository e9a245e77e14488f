"""Static registry of every keyword and pattern the bot understands.

The catalog is built once at startup (``build_default_catalog``) and handed to
resolvers by reference. Nothing mutates it afterwards, so concurrent
resolutions can share it without locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from directives.parsers.delimited import match_arg, match_identifier, match_search
from directives.parsers.keywords import match_keyword
from directives.parsers.numbers import match_number
from directives.parsers.ranges import range_matcher
from directives.parsers.urls import match_url
from directives.types import MatchResult, Permission, SyntaxType

Matcher = Callable[[str, SyntaxType], MatchResult[Any]]


@dataclass(frozen=True)
class DirectiveGroup:
    """A mutual-exclusion tier, or a slash option shared by several patterns."""

    name: str
    details: str = ""


@dataclass(frozen=True)
class Keyword:
    name: str
    details: str
    permission: Permission = Permission.USER
    group: Optional[str] = None
    aliases: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.aliases:
            object.__setattr__(self, "aliases", (self.name.lower(),))

    def match(self, text: str, syntax: SyntaxType = SyntaxType.KEYWORD) -> MatchResult[bool]:
        return match_keyword(self.aliases, text, syntax)

    def example(self, syntax: SyntaxType = SyntaxType.KEYWORD) -> str:
        token = self.aliases[0]
        if syntax == SyntaxType.TRADITIONAL:
            return f"-{token}"
        if syntax == SyntaxType.SLASH:
            return f"{self.group}: {token}" if self.group else f"{token}: True"
        return token


@dataclass(frozen=True)
class Pattern:
    """Typed-payload directive. Higher ``priority`` is extracted from text first.

    ``group`` is a mutual-exclusion tier. ``option_group`` names a shared slash
    option whose free text is scanned with every member's matcher; it defaults
    to ``group``.
    """

    name: str
    details: str
    priority: int
    matcher: Matcher = field(compare=False, repr=False)
    permission: Permission = Permission.USER
    group: Optional[str] = None
    usage: Tuple[str, ...] = ()
    traditional_usage: Optional[str] = None
    slash_usage: Optional[str] = None
    option_group: Optional[str] = None

    @property
    def slash_option(self) -> Optional[str]:
        return self.option_group or self.group

    def match(self, text: str, syntax: SyntaxType = SyntaxType.KEYWORD) -> MatchResult[Any]:
        return self.matcher(text, syntax)

    def example(self, syntax: SyntaxType = SyntaxType.KEYWORD) -> str:
        if syntax == SyntaxType.SLASH and self.slash_usage:
            return f"{self.name.lower()}: {self.slash_usage}"
        if syntax == SyntaxType.TRADITIONAL and self.traditional_usage:
            return self.traditional_usage
        return self.usage[0] if self.usage else self.name.lower()


Directive = Union[Keyword, Pattern]


class DirectiveCatalog:
    """Read-only lookup over keywords, patterns and their groups."""

    def __init__(
        self,
        keywords: Iterable[Keyword],
        patterns: Iterable[Pattern],
        groups: Iterable[DirectiveGroup] = (),
    ) -> None:
        directives: Dict[str, Directive] = {}
        for directive in [*keywords, *patterns]:
            key = directive.name.upper()
            if key in directives:
                raise ValueError(f"Directive '{key}' is already registered")
            directives[key] = directive
        self._directives: Mapping[str, Directive] = MappingProxyType(directives)
        self._keywords: Tuple[Keyword, ...] = tuple(d for d in directives.values() if isinstance(d, Keyword))
        # sorted() is stable, so equal priorities keep declaration order.
        self._patterns: Tuple[Pattern, ...] = tuple(
            sorted((d for d in directives.values() if isinstance(d, Pattern)), key=lambda p: -p.priority)
        )
        self._groups: Mapping[str, DirectiveGroup] = MappingProxyType({group.name: group for group in groups})

    def lookup(self, name: str) -> Optional[Directive]:
        if not name:
            return None
        return self._directives.get(name.strip().upper())

    def keyword(self, name: str) -> Optional[Keyword]:
        directive = self.lookup(name)
        return directive if isinstance(directive, Keyword) else None

    def pattern(self, name: str) -> Optional[Pattern]:
        directive = self.lookup(name)
        return directive if isinstance(directive, Pattern) else None

    def all_patterns(self) -> Tuple[Pattern, ...]:
        """Every pattern, highest priority first."""

        return self._patterns

    def all_keywords(self) -> Tuple[Keyword, ...]:
        return self._keywords

    def group(self, name: str) -> Optional[DirectiveGroup]:
        return self._groups.get(name)

    def group_members(self, name: str) -> List[Directive]:
        """Directives sharing the group (for patterns, the shared slash option)."""

        return [
            d for d in self._directives.values() if (d.slash_option if isinstance(d, Pattern) else d.group) == name
        ]

    def names(self) -> List[str]:
        return list(self._directives.keys())


# ---------------------------------------------------------------------------
# Default catalog
# ---------------------------------------------------------------------------
SOURCE_GROUP = "source"
TYPE_GROUP = "type"
SWITCH_GROUP = "switch"
INCREMENT_GROUP = "increment"
RANGE_GROUP = "range"
INPUT_GROUP = "input"

_DEFAULT_GROUPS = (
    DirectiveGroup(SOURCE_GROUP, "Specifies the source to fetch from"),
    DirectiveGroup(TYPE_GROUP, "Specifies the type of resource to fetch"),
    DirectiveGroup(SWITCH_GROUP, "Turns a feature on or off"),
    DirectiveGroup(INCREMENT_GROUP, "Raises or lowers a value"),
    DirectiveGroup(RANGE_GROUP, "Selects a range of items from a list"),
    DirectiveGroup(INPUT_GROUP, "A URL, an [identifier] or a search query"),
)

_DEFAULT_KEYWORDS = (
    Keyword("ENABLE", "Indicates to enable a particular feature", Permission.OWNER, SWITCH_GROUP),
    Keyword("DISABLE", "Indicates to disable a particular feature", Permission.OWNER, SWITCH_GROUP),
    Keyword("CLEAR", "Indicates to remove some data"),
    Keyword("MORE", "Indicates to increase a value", group=INCREMENT_GROUP),
    Keyword("LESS", "Indicates to decrease a value", group=INCREMENT_GROUP),
    Keyword("MY", "Indicates to fetch information from your account"),
    Keyword("SOUNDCLOUD", "Indicates to fetch a resource from SoundCloud if applicable", group=SOURCE_GROUP),
    Keyword("SPOTIFY", "Indicates to fetch a resource from Spotify if applicable", group=SOURCE_GROUP),
    Keyword("YOUTUBE", "Indicates to fetch a resource from YouTube if applicable", group=SOURCE_GROUP),
    Keyword("PLAYLIST", "Indicates to fetch songs from a playlist given a query", group=TYPE_GROUP),
    Keyword("ALBUM", "Indicates to fetch songs from an album given a query", group=TYPE_GROUP),
    Keyword("ARTIST", "Indicates to fetch songs for an artist given the query", group=TYPE_GROUP),
    Keyword("LIKES", "Indicates to fetch liked songs", group=TYPE_GROUP),
    Keyword("TRACKS", "Indicates to fetch SoundCloud tracks", group=TYPE_GROUP),
    Keyword("NEXT", "Indicates to place fetched tracks at the top of the queue"),
    Keyword("SHUFFLE", "Indicates to shuffle the fetched tracks", aliases=("shuffle", "shuffled")),
)

_DEFAULT_PATTERNS = (
    Pattern(
        "ARG",
        "Used for when keywords just won't cut it.",
        priority=6,
        matcher=match_arg,
        usage=("{ arg1; arg2; arg3 }",),
        slash_usage="arg1; arg2; arg3",
    ),
    Pattern(
        "URL",
        "Indicates that you may specify a URI to a resource from YouTube, Spotify, or SoundCloud.",
        priority=5,
        matcher=match_url,
        usage=(
            "https://open.spotify.com/album/3cWA6fj7NEfoGuGRYGxsam",
            "soundcloud.com/kayfluxx/timbaland-apologize-ft-one-republic-kayfluxx-remix",
            "spotify:album:3cWA6fj7NEfoGuGRYGxsam",
            "https://www.youtube.com/watch?v=FRjOSmc01-M",
        ),
        slash_usage="https://www.youtube.com/watch?v=FRjOSmc01-M",
        option_group=INPUT_GROUP,
    ),
    Pattern(
        "IDENTIFIER",
        "Used for referring to an identifier (a shortcut) for some resource such as a playlist.",
        priority=3,
        matcher=match_identifier,
        usage=("[my identifier]", "[music playlist #2]"),
        slash_usage="my identifier",
        option_group=INPUT_GROUP,
    ),
    Pattern(
        "SEARCH",
        "Used for searching",
        priority=3,
        matcher=match_search,
        usage=("(what is love)", "(deadmau5)"),
        traditional_usage="what is love",
        slash_usage="what is love",
        option_group=INPUT_GROUP,
    ),
    Pattern(
        "TOP",
        "Indicates to fetch the range of tracks starting from the beginning in the list",
        priority=2,
        matcher=range_matcher("top"),
        group=RANGE_GROUP,
        usage=("top 100", "top 4:10", "top 5:-5"),
        traditional_usage="-top 100",
        slash_usage="4:10",
    ),
    Pattern(
        "BOTTOM",
        "Indicates to fetch the range of tracks starting from the end of the list",
        priority=2,
        matcher=range_matcher("bottom"),
        group=RANGE_GROUP,
        usage=("bottom 100", "bottom 4:10", "bottom 5:-5"),
        traditional_usage="-bottom 100",
        slash_usage="4:10",
    ),
    Pattern(
        "NUMBER",
        "Used for providing numbers",
        priority=1,
        matcher=match_number,
        usage=("1", "2 3"),
        slash_usage="2",
    ),
)


def build_default_catalog() -> DirectiveCatalog:
    """Assemble the process-wide catalog of built-in keywords and patterns."""

    return DirectiveCatalog(_DEFAULT_KEYWORDS, _DEFAULT_PATTERNS, _DEFAULT_GROUPS)


__all__ = [
    "Directive",
    "DirectiveCatalog",
    "DirectiveGroup",
    "Keyword",
    "Matcher",
    "Pattern",
    "build_default_catalog",
    "INCREMENT_GROUP",
    "INPUT_GROUP",
    "RANGE_GROUP",
    "SOURCE_GROUP",
    "SWITCH_GROUP",
    "TYPE_GROUP",
]
