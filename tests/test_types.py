import pytest

from directives.types import MatchResult, Permission, SyntaxType


def test_permission_ordering_and_parsing():
    assert Permission.USER < Permission.ADMIN < Permission.OWNER
    assert Permission.parse("admin") is Permission.ADMIN
    assert Permission.parse(2) is Permission.OWNER
    assert Permission.parse(Permission.USER) is Permission.USER
    with pytest.raises(ValueError):
        Permission.parse("superuser")


def test_syntax_parsing():
    assert SyntaxType.parse(" Traditional ") is SyntaxType.TRADITIONAL
    with pytest.raises(ValueError):
        SyntaxType.parse(7)


def test_miss_keeps_text():
    result = MatchResult.miss("spotify")
    assert not result.matched
    assert result.remainder == "spotify"
    assert result.payload is None
    assert result.position == -1
