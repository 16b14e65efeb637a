import io

import pytest

from fortysh.environment import (
    Environment,
    env_command,
    is_name_char,
    lookup,
    matches_name,
    setenv_command,
    unsetenv_command,
    validate_setenv,
)


def test_get_returns_value():
    env = Environment(["HOME=/home/user", "PATH=/bin:/usr/bin"])
    assert env.get("HOME") == "/home/user"
    assert env.get("PATH") == "/bin:/usr/bin"


def test_get_missing_is_none():
    assert Environment(["A=b"]).get("HOME") is None


def test_environment_from_mapping():
    env = Environment({"A": "1", "B": "2"})
    assert env.lines() == ["A=1", "B=2"]


def test_lookup_uses_first_match():
    assert lookup("X", ["X=first", "X=second"]) == "first"


def test_set_appends_new_variable():
    env = Environment(["A=b"])
    env.set("C", "d")
    assert env.lines() == ["A=b", "C=d"]


def test_set_replaces_in_place():
    env = Environment(["A=b", "C=d"])
    env.set("A", "z")
    assert env.lines() == ["A=z", "C=d"]


def test_unset_removes_only_named():
    env = Environment(["A=b", "C=d"])
    assert env.unset("A") is True
    assert env.lines() == ["C=d"]
    assert env.unset("A") is False
    assert env.lines() == ["C=d"]


def test_as_dict_splits_on_first_equal():
    env = Environment(["A=b=c", "D="])
    assert env.as_dict() == {"A": "b=c", "D": ""}


def test_matches_name():
    assert matches_name("HOME", "HOME=/x", "=")
    assert not matches_name("HOM", "HOME=/x", "=")
    assert matches_name("abc", "abc", "")
    assert not matches_name("abc", "abcd", "")


@pytest.mark.parametrize(
    "char, position, expected",
    [("a", 0, True), ("Z", 0, True), ("1", 0, False), ("_", 0, False),
     ("1", 1, True), ("_", 2, True), ("-", 1, False)],
)
def test_is_name_char(char, position, expected):
    assert is_name_char(char, position) is expected


def test_validate_setenv_messages():
    assert validate_setenv(["setenv", "GOOD", "value"]) == []
    assert validate_setenv(["setenv", "1abc"]) == [
        "setenv: Variable name must begin with a letter."
    ]
    assert validate_setenv(["setenv", "a-b"]) == [
        "setenv: Variable name must contain alphanumeric characters."
    ]
    assert validate_setenv(["setenv", "a(b"]) == ["Too many ('s."]
    assert validate_setenv(["setenv", "a)b"]) == ["Too many )'s."]


def test_setenv_rejects_single_bad_word():
    env = Environment(["A=b"])
    out = io.StringIO()
    assert setenv_command(env, ["setenv", "1abc", "x"], out) is False
    assert env.lines() == ["A=b"]
    assert out.getvalue() == "setenv: Variable name must begin with a letter.\n"


def test_setenv_sets_value_and_empty_value():
    env = Environment()
    out = io.StringIO()
    assert setenv_command(env, ["setenv", "FOO", "bar"], out) is True
    assert setenv_command(env, ["setenv", "EMPTY"], out) is True
    assert env.get("FOO") == "bar"
    assert env.get("EMPTY") == ""
    assert out.getvalue() == ""


def test_setenv_without_arguments_lists():
    env = Environment(["A=b", "C=d"])
    out = io.StringIO()
    assert setenv_command(env, ["setenv"], out) is True
    assert out.getvalue() == "A=b\nC=d\n"


def test_setenv_too_many_arguments():
    env = Environment()
    out = io.StringIO()
    assert setenv_command(env, ["setenv", "A", "b", "c"], out) is False
    assert out.getvalue() == "setenv: Too many arguments.\n"
    assert env.lines() == []


def test_unsetenv_too_few():
    out = io.StringIO()
    assert unsetenv_command(Environment(["A=b"]), ["unsetenv"], out) is False
    assert out.getvalue() == "unsetenv: Too few arguments.\n"


def test_unsetenv_removes_each():
    env = Environment(["A=b", "C=d", "E=f"])
    assert unsetenv_command(env, ["unsetenv", "A", "E"], io.StringIO()) is True
    assert env.lines() == ["C=d"]


def test_env_command_writes_lines():
    env = Environment(["A=b", "C=d"])
    out = io.StringIO()
    env_command(env, out)
    assert out.getvalue().splitlines() == env.lines()