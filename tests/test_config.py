import logging
from pathlib import Path

import pytest

from directives.config import (
    get_command_config_path,
    get_command_prefix,
    get_default_syntax,
    get_log_level,
)
from directives.types import SyntaxType


@pytest.mark.parametrize(
    "env, expected",
    [({}, "!"), ({"DIRECTIVES_PREFIX": "$"}, "$"), ({"DIRECTIVES_PREFIX": " ? "}, "?"), ({"DIRECTIVES_PREFIX": "!!"}, "!")],
)
def test_command_prefix(env, expected):
    assert get_command_prefix(env) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("traditional", SyntaxType.TRADITIONAL),
        ("KEYWORD", SyntaxType.KEYWORD),
        ("slash", SyntaxType.KEYWORD),
        ("bogus", SyntaxType.KEYWORD),
    ],
)
def test_default_syntax(value, expected):
    assert get_default_syntax({"DIRECTIVES_SYNTAX": value}) == expected
    assert get_default_syntax({}) == SyntaxType.KEYWORD


def test_command_config_path():
    assert get_command_config_path({}) == Path("config/commands.yml")
    assert get_command_config_path({"DIRECTIVES_COMMANDS": "/tmp/cmds.yml"}) == Path("/tmp/cmds.yml")


def test_log_level():
    assert get_log_level({}) == logging.WARNING
    assert get_log_level({"DIRECTIVES_LOG_LEVEL": "debug"}) == logging.DEBUG
    assert get_log_level({"DIRECTIVES_LOG_LEVEL": "chatty"}) == logging.WARNING


def test_os_environ_is_used_by_default(monkeypatch):
    monkeypatch.setenv("DIRECTIVES_PREFIX", "%")
    assert get_command_prefix() == "%"
