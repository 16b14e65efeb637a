"""Splitting of a command into the stages of a pipeline."""

from fortysh.textutil import count, join_words, split_on, split_words, squeeze_blanks


class PipelineError(Exception):
    """A pipeline is malformed."""


def has_pipe(text):
    """Tell whether ``text`` holds a ``|``."""
    return "|" in text


def split_pipeline(words):
    """Return the word lists of each pipeline stage.

    A command without ``|`` is a single stage.  An empty stage raises
    PipelineError.
    """
    text = join_words(words)
    if not has_pipe(text):
        return [list(words)]
    stages = [split_words(segment) for segment in split_on(text, "|")
              if squeeze_blanks(segment)]
    if len(stages) != count(text, "|"):
        raise PipelineError("Invalid null command.")
    return stages