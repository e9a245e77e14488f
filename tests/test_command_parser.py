from pathlib import Path

import pytest

from directives.catalog import build_default_catalog
from directives.command_parser import CommandParser, build_command_parser, remove_mentions
from directives.commands import load_command_registry
from directives.errors import ConflictingInput, UnknownCommand
from directives.types import Permission, RangeArgument, SyntaxType

REPO_COMMANDS = Path(__file__).resolve().parents[1] / "config" / "commands.yml"


@pytest.fixture()
def parser() -> CommandParser:
    catalog = build_default_catalog()
    return CommandParser(catalog, load_command_registry(REPO_COMMANDS, catalog))


def test_remove_mentions():
    assert remove_mentions("<@123> play <@!456> lofi <@&789> <#42>") == "play  lofi"
    assert remove_mentions("") == ""


def test_message_invokes_bot_with_default_and_server_prefix(parser):
    assert parser.message_invokes_bot("!play lofi")
    assert not parser.message_invokes_bot("play lofi")
    assert not parser.message_invokes_bot("")
    assert parser.message_invokes_bot("$play lofi", prefix="$")
    assert parser.strip_prefix("!play lofi") == "play lofi"


def test_parse_command_resolves_options(parser):
    parsed = parser.parse_command("PLAY spotify playlist (retrowave)", Permission.USER)
    assert parsed.command.name == "play"
    assert parsed.options == {"SPOTIFY": True, "PLAYLIST": True, "SEARCH": "retrowave"}


def test_parse_command_strips_mentions(parser):
    parsed = parser.parse_command("<@!123> list bottom 10", Permission.USER)
    assert parsed.command.name == "list"
    assert parsed.options == {"BOTTOM": RangeArgument(10)}


def test_parse_command_with_traditional_syntax(parser):
    parsed = parser.parse_command("play -youtube -next lofi beats", Permission.USER, SyntaxType.TRADITIONAL)
    assert parsed.options == {"YOUTUBE": True, "NEXT": True, "SEARCH": "lofi beats"}


def test_simple_commands_receive_tokens(parser):
    parsed = parser.parse_command("config prefix $", Permission.ADMIN)
    assert parsed.options == {"ARG": ["prefix", "$"]}
    assert parser.parse_command("help", Permission.USER).options == {}


@pytest.mark.parametrize("message", ["", "dance now", "servers", "config prefix $"])
def test_unknown_or_forbidden_commands_raise(parser, message):
    with pytest.raises(UnknownCommand):
        parser.parse_command(message, Permission.USER)


def test_resolver_errors_propagate(parser):
    with pytest.raises(ConflictingInput):
        parser.parse_command("identify https://open.spotify.com/album/3cWA6fj7NEfoGuGRYGxsam (lofi)", Permission.USER)


def test_parse_structured(parser):
    parsed = parser.parse_structured("volume", {"increment": "more"}, Permission.USER)
    assert parsed.options == {"MORE": True}
    assert parser.parse_structured("config", {"name": "volume", "value": "50"}, Permission.ADMIN).options == {
        "ARG": ["volume", "50"]
    }
    with pytest.raises(UnknownCommand):
        parser.parse_structured("nightcore", {"switch": "enable"}, Permission.ADMIN)


def test_build_command_parser_reads_environment(tmp_path: Path):
    config_path = tmp_path / "commands.yml"
    config_path.write_text("commands:\n  - name: ping\n", encoding="utf-8")

    parser = build_command_parser(
        {"DIRECTIVES_COMMANDS": str(config_path), "DIRECTIVES_PREFIX": "$", "DIRECTIVES_SYNTAX": "traditional"}
    )
    assert parser.message_invokes_bot("$ping")
    assert not parser.message_invokes_bot("!ping")
    assert parser.parse_command("ping a b", Permission.USER).options == {"ARG": ["a", "b"]}
