"""The exported environment and the ``setenv``, ``unsetenv`` and ``env`` builtins."""

import string
from collections.abc import Mapping

_LETTERS = frozenset(string.ascii_letters)
_NAME_TAIL = frozenset(string.ascii_letters + string.digits + "_")


class BuiltinError(Exception):
    """A builtin command refused its arguments."""


def matches_name(name, entry, stop):
    """Tell whether ``entry`` names ``name``, reading ``entry`` up to ``stop``.

    With an empty ``stop`` the two strings must be equal.  Otherwise the part
    of ``entry`` before ``stop`` must be a prefix of ``name``.
    """
    if not stop:
        return name == entry
    head = entry.split(stop, 1)[0]
    return name.startswith(head)


def lookup(name, entries):
    """Return the value of the first entry starting with ``name``, or None."""
    for entry in entries:
        if entry.startswith(name):
            return entry[len(name) + 1:]
    return None


class Environment:
    """Ordered ``NAME=value`` entries passed on to started programs."""

    def __init__(self, entries=None):
        if isinstance(entries, Mapping):
            entries = (f"{key}={value}" for key, value in entries.items())
        self.entries = list(entries or ())

    def get(self, name):
        """Return the value of ``name``, or None when it is not set."""
        return lookup(name, self.entries)

    def set(self, name, value):
        """Replace the entry for ``name`` or append a new one."""
        entry = f"{name}={value}"
        for index, existing in enumerate(self.entries):
            if matches_name(name, existing, "="):
                self.entries[index] = entry
                return
        self.entries.append(entry)

    def unset(self, name):
        """Remove the first entry for ``name``; return whether one was removed."""
        for index, existing in enumerate(self.entries):
            if matches_name(name, existing, "="):
                del self.entries[index]
                return True
        return False

    def lines(self):
        """Return the entries in order."""
        return list(self.entries)

    def as_dict(self):
        """Return the entries as a mapping suitable for starting programs."""
        result = {}
        for entry in self.entries:
            key, _, value = entry.partition("=")
            result[key] = value
        return result


def is_name_char(char, position):
    """Tell whether ``char`` may stand at ``position`` of a variable name."""
    if char in _LETTERS:
        return True
    return position != 0 and char in _NAME_TAIL


def _setenv_problem(word, is_name):
    if not word:
        return None
    for char in word:
        if char in "()":
            return f"Too many {char}'s."
    if is_name:
        if not is_name_char(word[0], 0):
            return "setenv: Variable name must begin with a letter."
        if not all(is_name_char(char, 1) for char in word):
            return "setenv: Variable name must contain alphanumeric characters."
    return None


def validate_setenv(words):
    """Return the complaints about a ``setenv`` command's arguments."""
    if len(words) not in (2, 3):
        return []
    problems = (
        _setenv_problem(word, position == 1)
        for position, word in enumerate(words[1:], start=1)
    )
    return [problem for problem in problems if problem]


def env_command(env, out):
    """Run ``env``: write every entry on its own line."""
    for entry in env.lines():
        out.write(entry + "\n")
    return True


def setenv_command(env, words, out):
    """Run ``setenv``: list, add or replace a variable; return success."""
    problems = validate_setenv(words)
    for problem in problems:
        out.write(problem + "\n")
    if len(problems) == 1:
        return False
    if len(words) == 1:
        return env_command(env, out)
    if len(words) >= 4:
        out.write("setenv: Too many arguments.\n")
        return False
    env.set(words[1], words[2] if len(words) == 3 else "")
    return not problems


def unsetenv_command(env, words, out):
    """Run ``unsetenv``: remove each named variable; return success."""
    if len(words) == 1:
        out.write("unsetenv: Too few arguments.\n")
        return False
    for name in words[1:]:
        env.unset(name)
    return True