"""Shell-local variables handled by the ``set`` and ``unset`` builtins."""

import os
import string
from dataclasses import dataclass, field

_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_.=")


class VariableError(ValueError):
    """A ``set`` or ``unset`` argument was rejected."""


def _digits(number):
    return str(number) if number else ""


@dataclass
class LocalVariables:
    """Ordered list of variables stored as ``name<TAB>value`` lines."""

    entries: list = field(default_factory=list)

    def __init__(self, entries=None):
        self.entries = []
        for entry in entries or ():
            self.add(entry)

    @classmethod
    def with_process_ids(cls):
        """Return variables preset with PID, GID and PGID."""
        return cls(
            [
                "PID=" + _digits(os.getpid()),
                "GID=" + _digits(os.getgid()),
                "PGID=" + _digits(os.getpgid(0)),
            ]
        )

    def add(self, entry):
        """Append ``entry``, its ``=`` signs turned into tabs."""
        if "=" in entry:
            entry = entry.replace("=", "\t")
        else:
            entry += "\t"
        self.entries.append(entry)

    def remove(self, name):
        """Remove the first variable called ``name``; return whether one was."""
        for index, entry in enumerate(self.entries):
            if entry.rpartition("\t")[0] == name:
                del self.entries[index]
                return True
        return False

    def lines(self):
        """Return the stored lines in order."""
        return list(self.entries)

    def display(self, out):
        """Write every variable on its own line."""
        for entry in self.entries:
            out.write(entry + "\n")


def check_parentheses(words):
    """Reject any word holding a parenthesis."""
    for word in words:
        for char in word:
            if char in "()":
                raise VariableError(f"Too many {char}'s.")


def check_begins_with_letter(words):
    """Reject any word that does not start with a letter."""
    for word in words:
        if not word or word[0] not in string.ascii_letters:
            raise VariableError("set: Variable name must begin with a letter.")


def check_alphanumeric(words):
    """Reject any word holding characters outside letters, digits, ``_.=``."""
    for word in words:
        if any(char not in _NAME_CHARS for char in word):
            raise VariableError(
                "set: Variable name must contain alphanumeric characters."
            )


def set_command(variables, words, out):
    """Run ``set``: list variables or add the given ones; return success."""
    if len(words) < 2:
        variables.display(out)
        return True
    try:
        check_parentheses(words)
        check_begins_with_letter(words)
        check_alphanumeric(words)
    except VariableError as error:
        out.write(f"{error}\n")
        return False
    for word in words[1:]:
        variables.add(word)
    return True


def unset_command(variables, words, out):
    """Run ``unset``: remove each named variable; return success."""
    if len(words) < 2:
        out.write("unset: Too few arguments.\n")
        return False
    try:
        check_parentheses(words)
    except VariableError as error:
        out.write(f"{error}\n")
        return False
    for name in words[1:]:
        variables.remove(name)
    return True