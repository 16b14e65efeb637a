import pytest

from fortysh.pipeline import PipelineError, has_pipe, split_pipeline


def test_has_pipe():
    assert has_pipe("ls | wc")
    assert not has_pipe("ls -l")


def test_split_two_stages():
    assert split_pipeline(["ls", "-l", "|", "wc", "-l"]) == [["ls", "-l"], ["wc", "-l"]]


def test_split_attached_pipes():
    assert split_pipeline(["ls|grep", "a|wc"]) == [["ls"], ["grep", "a"], ["wc"]]


def test_no_pipe_is_single_stage():
    words = ["echo", "hello"]
    assert split_pipeline(words) == [words]


def test_stages_keep_all_words():
    words = ["cat", "f", "|", "sort", "-r", "|", "uniq"]
    stages = split_pipeline(words)
    assert [word for stage in stages for word in stage] == [w for w in words if w != "|"]
    assert len(stages) == words.count("|") + 1


@pytest.mark.parametrize(
    "words",
    [["ls", "|"], ["|", "wc"], ["ls", "||", "wc"], ["ls", "|", "|", "wc"]],
)
def test_null_command(words):
    with pytest.raises(PipelineError, match="Invalid null command."):
        split_pipeline(words)