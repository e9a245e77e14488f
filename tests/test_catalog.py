import pytest

from directives.catalog import (
    INPUT_GROUP,
    RANGE_GROUP,
    SOURCE_GROUP,
    DirectiveCatalog,
    Keyword,
    Pattern,
    build_default_catalog,
)
from directives.parsers.numbers import match_number
from directives.types import Permission, SyntaxType


def test_patterns_are_ordered_by_descending_priority():
    catalog = build_default_catalog()
    names = [pattern.name for pattern in catalog.all_patterns()]
    assert names == ["ARG", "URL", "IDENTIFIER", "SEARCH", "TOP", "BOTTOM", "NUMBER"]


def test_lookup_is_case_insensitive_and_absent_for_unknown_names():
    catalog = build_default_catalog()
    assert catalog.lookup("spotify") is catalog.keyword("SPOTIFY")
    assert catalog.pattern(" top ").name == "TOP"
    assert catalog.lookup("nope") is None
    assert catalog.keyword("TOP") is None
    assert catalog.pattern("SPOTIFY") is None


def test_default_permissions_and_groups():
    catalog = build_default_catalog()
    assert catalog.keyword("ENABLE").permission == Permission.OWNER
    assert catalog.keyword("CLEAR").permission == Permission.USER
    assert [d.name for d in catalog.group_members(SOURCE_GROUP)] == ["SOUNDCLOUD", "SPOTIFY", "YOUTUBE"]
    assert [d.name for d in catalog.group_members(RANGE_GROUP)] == ["TOP", "BOTTOM"]
    assert catalog.group(SOURCE_GROUP).details
    assert catalog.keyword("SHUFFLE").aliases == ("shuffle", "shuffled")


def test_duplicate_directive_names_are_rejected():
    with pytest.raises(ValueError):
        DirectiveCatalog(
            keywords=(Keyword("NUMBER", "clash"),),
            patterns=(Pattern("NUMBER", "numbers", priority=1, matcher=match_number),),
        )


def test_examples_follow_syntax():
    catalog = build_default_catalog()
    spotify = catalog.keyword("SPOTIFY")
    assert spotify.example() == "spotify"
    assert spotify.example(SyntaxType.TRADITIONAL) == "-spotify"
    assert spotify.example(SyntaxType.SLASH) == "source: spotify"
    assert catalog.keyword("NEXT").example(SyntaxType.SLASH) == "next: True"

    top = catalog.pattern("TOP")
    assert top.example() == "top 100"
    assert top.example(SyntaxType.TRADITIONAL) == "-top 100"
    assert top.example(SyntaxType.SLASH) == "top: 4:10"


def test_input_option_is_shared_by_url_identifier_and_search():
    catalog = build_default_catalog()
    assert [d.name for d in catalog.group_members(INPUT_GROUP)] == ["URL", "IDENTIFIER", "SEARCH"]
    assert catalog.pattern("URL").group is None
    assert catalog.pattern("TOP").slash_option == RANGE_GROUP
