"""String helpers used to tokenise shell input."""

import re

BLANKS = " \t"


def count_space(text):
    """Return the number of blank-separated slots: blanks plus one."""
    return sum(1 for char in text if char in BLANKS) + 1


def count_double_dot(text):
    """Return the number of colon-separated slots: colons plus one."""
    return text.count(":") + 1


def count(text, char):
    """Return the number of ``char``-separated slots: occurrences plus one."""
    return text.count(char) + 1


def squeeze_blanks(text):
    """Return ``text`` with every space and tab removed."""
    return "".join(char for char in text if char not in BLANKS)


def trim_edges(text):
    """Drop a single leading space and a single trailing space."""
    if text.startswith(" "):
        text = text[1:]
    if text.endswith(" "):
        text = text[:-1]
    return text


def split_on(text, separators):
    """Split ``text`` on any of ``separators``, dropping empty tokens."""
    if not separators:
        return [text] if text else []
    pattern = "[" + re.escape(separators) + "]"
    return [token for token in re.split(pattern, text) if token]


def split_words(text):
    """Split a command into words separated by spaces and tabs."""
    return split_on(text, BLANKS)


def split_path(text):
    """Split a PATH-like value into its directories."""
    return split_on(text, ":")


def split_commands(line):
    """Split a line on ``;`` into word lists, skipping blank commands."""
    return [
        split_words(segment)
        for segment in line.split(";")
        if squeeze_blanks(segment)
    ]


def join_words(words):
    """Join words back into a command, each one followed by a space."""
    return "".join(word + " " for word in words)