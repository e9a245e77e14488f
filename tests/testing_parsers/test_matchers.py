import pytest

from directives.parser_utils import drop_empty_delimiters
from directives.parsers.delimited import match_arg, match_identifier, match_search
from directives.parsers.keywords import match_keyword
from directives.parsers.numbers import match_number
from directives.parsers.ranges import range_matcher
from directives.parsers.urls import detect_source, match_url
from directives.types import RangeArgument, Source, SyntaxType

top = range_matcher("top")


def test_keyword_matches_whole_words_only():
    assert match_keyword(("spotify",), "spotify playlist").matched
    assert not match_keyword(("spotify",), "spotifyplaylist").matched
    assert not match_keyword(("my",), "mystery").matched


def test_keyword_strips_every_occurrence_and_reports_first_position():
    result = match_keyword(("shuffle", "shuffled"), "play shuffled and shuffle it")
    assert result.matched
    assert result.payload is True
    assert result.remainder == "play and it"
    assert result.position == 5


def test_keyword_is_case_insensitive():
    result = match_keyword(("next",), "NEXT song")
    assert result.matched
    assert result.remainder == "song"


def test_traditional_keyword_requires_dash_flag():
    assert not match_keyword(("spotify",), "spotify", SyntaxType.TRADITIONAL).matched
    result = match_keyword(("spotify",), "-spotify retrowave", SyntaxType.TRADITIONAL)
    assert result.matched
    assert result.remainder == "retrowave"


def test_keyword_syntax_also_strips_leading_dash():
    result = match_keyword(("spotify",), "-spotify retrowave")
    assert result.remainder == "retrowave"


def test_range_parses_start_and_stop():
    assert top("top 10").payload == RangeArgument(10)
    assert top("top 4:10").payload == RangeArgument(4, 10)
    assert top("list top 5:-5 now").payload == RangeArgument(5, -5)
    assert top("list top 5:-5 now").remainder == "list now"


@pytest.mark.parametrize("text", ["top", "top abc", "top 4:", "top 4:x", "stop 5"])
def test_malformed_range_is_no_match(text):
    result = top(text)
    assert not result.matched
    assert result.remainder == text


def test_range_syntax_variants():
    assert top("-top 3", SyntaxType.TRADITIONAL).payload == RangeArgument(3)
    assert not top("top 3", SyntaxType.TRADITIONAL).matched
    assert top("4:10", SyntaxType.SLASH).payload == RangeArgument(4, 10)
    assert top("top 7", SyntaxType.SLASH).payload == RangeArgument(7)
    assert not top("4:10 extra", SyntaxType.SLASH).matched


def test_url_detects_source():
    result = match_url("https://open.spotify.com/album/3cWA6fj7NEfoGuGRYGxsam next")
    assert result.matched
    assert result.payload.source == Source.SPOTIFY
    assert result.remainder == "next"

    assert detect_source("https://www.youtube.com/watch?v=FRjOSmc01-M") == Source.YOUTUBE
    assert detect_source("https://youtu.be/FRjOSmc01-M") == Source.YOUTUBE
    assert detect_source("soundcloud.com/kayfluxx/remix") == Source.SOUNDCLOUD
    assert detect_source("spotify:album:3cWA6fj7NEfoGuGRYGxsam") == Source.SPOTIFY
    assert detect_source("https://example.com/track") == Source.UNKNOWN


def test_url_supports_schemeless_and_uri_forms():
    assert match_url("soundcloud.com/kayfluxx/remix").payload.value == "soundcloud.com/kayfluxx/remix"
    assert match_url("spotify:album:3cWA6fj7NEfoGuGRYGxsam").payload.value == "spotify:album:3cWA6fj7NEfoGuGRYGxsam"


def test_url_stops_at_other_delimiters_and_trailing_punctuation():
    result = match_url("https://example.com/path[retro]")
    assert result.payload.value == "https://example.com/path"
    assert result.remainder == "[retro]"

    assert match_url("see https://example.com/path.").payload.value == "https://example.com/path"


def test_search_identifier_and_arg_delimiters():
    search = match_search("spotify playlist ( retrowave  mix )")
    assert search.payload == "retrowave mix"
    assert search.remainder == "spotify playlist"

    identifier = match_identifier("[retro] shuffle")
    assert identifier.payload == "retro"
    assert identifier.remainder == "shuffle"

    arg = match_arg("{ sort; botCount ; }")
    assert arg.payload == ["sort", "botCount"]
    assert arg.remainder == ""


def test_delimiters_do_not_nest():
    assert not match_arg("{a [b]}").matched
    assert not match_search("(a {b})").matched
    assert not match_identifier("[]").matched


def test_search_is_not_delimited_in_traditional_syntax():
    assert not match_search("(retrowave)", SyntaxType.TRADITIONAL).matched


def test_slash_values_are_taken_whole():
    assert match_search("retrowave", SyntaxType.SLASH).payload == "retrowave"
    assert match_identifier("[retro]", SyntaxType.SLASH).payload == "retro"
    assert match_arg("a; b", SyntaxType.SLASH).payload == ["a", "b"]
    assert not match_search("   ", SyntaxType.SLASH).matched


def test_numbers_collect_standalone_integers():
    result = match_number("page 2 of 10 v2")
    assert result.payload == [2, 10]
    assert result.remainder == "page of v2"
    assert match_number("-3").payload == [-3]


@pytest.mark.parametrize(
    "matcher, text",
    [
        (lambda text: match_keyword(("shuffle", "shuffled"), text), "shuffle shuffled please"),
        (top, "top 4 top 5"),
        (match_url, "https://example.com/a https://example.com/b"),
        (match_search, "(a) (b)"),
        (match_identifier, "[a] [b]"),
        (match_arg, "{a} {b}"),
        (match_number, "1 2 3"),
        (match_search, "(a (b) c)"),
        (match_identifier, "[a [b] c]"),
        (top, "top top 5 5"),
    ],
)
def test_stripping_is_idempotent(matcher, text):
    first = matcher(text)
    assert first.matched
    second = matcher(first.remainder)
    assert not second.matched
    assert second.remainder == first.remainder


def test_nested_delimiters_keep_the_inner_payload_and_strip_everything():
    result = match_search("(a (b) c)")
    assert result.payload == "b"
    assert result.position == 3
    assert result.remainder == ""

    ranged = top("top top 5 5")
    assert ranged.payload == RangeArgument(5)
    assert ranged.remainder == ""


def test_drop_empty_delimiters():
    assert drop_empty_delimiters("( ) [ ] {} lofi ([])") == "lofi"
    assert drop_empty_delimiters("(lofi)") == "(lofi)"
