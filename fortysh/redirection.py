"""Parsing and opening of ``<``, ``<<``, ``>`` and ``>>`` redirections."""

import os
import sys
import tempfile
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass

from fortysh.environment import matches_name
from fortysh.textutil import join_words, split_words, squeeze_blanks

_OPERATORS = frozenset("<>")
_FILE_MODE = 0o666


class RedirectionError(Exception):
    """A redirection could not be set up."""


@dataclass(frozen=True)
class Redirection:
    """One redirection: ``operator`` is ``<`` or ``>``, ``double`` for ``<<``/``>>``."""

    operator: str
    double: bool
    target: str


def count_redirections(text):
    """Return how many redirection characters ``text`` holds."""
    return sum(1 for char in text if char in _OPERATORS)


def parse_redirections(words):
    """Split a command into its remaining words and its redirections."""
    text = join_words(words)

    def at(position):
        return text[position] if position < len(text) else ""

    command = []
    redirections = []
    target = []
    operator = None
    double = False
    active = False
    index = 0
    while index < len(text):
        if text[index] in _OPERATORS:
            operator = text[index]
            double = at(index + 1) == operator
            index += 2 if double else 1
            target = []
            active = True
            if index >= len(text):
                break
        char = text[index]
        if active:
            target.append(char)
            following = at(index + 1)
            if (following in _OPERATORS or following == ""
                    or (len(target) > 1 and char == " ")):
                redirections.append(
                    Redirection(operator, double, squeeze_blanks("".join(target)))
                )
                active = False
        if not active and char not in _OPERATORS:
            command.append(char)
        index += 1
    remaining = "".join(command)
    if redirections and not squeeze_blanks(remaining):
        raise RedirectionError("Invalid null command.")
    return split_words(remaining), redirections


def read_here_document(delimiter, source, prompt=None):
    """Read lines from ``source`` until the delimiter line; return the text."""
    lines = []
    while True:
        if prompt is not None:
            prompt.write("?")
            prompt.flush()
        line = source.readline()
        if not line or matches_name(delimiter, line, "\n"):
            break
        lines.append(line)
    return "".join(lines)


def _open_output(target, append):
    if os.path.isdir(target):
        raise RedirectionError(f"{target}: Is a directory.")
    if not target:
        raise RedirectionError("Missing name for redirect.")
    flags = os.O_RDWR | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)
    return os.fdopen(os.open(target, flags, _FILE_MODE), "wb")


def _open_input(target):
    if not os.path.exists(target):
        raise RedirectionError(f"{target}: No such file or directory.")
    return open(target, "rb")


def _here_document(delimiter, source, prompt):
    if not delimiter:
        raise RedirectionError("Missing name for redirect.")
    text = read_here_document(delimiter, source, prompt)
    buffer = tempfile.TemporaryFile()
    buffer.write(text.encode())
    buffer.seek(0)
    return buffer


@contextmanager
def open_redirections(redirections, source=None, prompt=None):
    """Open every redirection in order and yield ``(stdin, stdout)`` files.

    A later redirection of the same stream replaces an earlier one.  Streams
    that are not redirected are yielded as None.  All files are closed on exit.
    """
    source = sys.stdin if source is None else source
    with ExitStack() as stack:
        stdin = stdout = None
        for redirection in redirections:
            if redirection.operator == ">":
                stdout = stack.enter_context(
                    _open_output(redirection.target, redirection.double)
                )
            elif redirection.double:
                stdin = stack.enter_context(
                    _here_document(redirection.target, source, prompt)
                )
            else:
                stdin = stack.enter_context(_open_input(redirection.target))
        yield stdin, stdout