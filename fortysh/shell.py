"""The interactive shell: reading lines, builtins and starting programs."""

import errno
import io
import os
import re
import signal
import subprocess
import sys

from fortysh.environment import (
    Environment,
    env_command,
    setenv_command,
    unsetenv_command,
)
from fortysh.localvars import LocalVariables, set_command, unset_command
from fortysh.pipeline import PipelineError, has_pipe, split_pipeline
from fortysh.redirection import (
    RedirectionError,
    count_redirections,
    open_redirections,
    parse_redirections,
)
from fortysh.textutil import join_words, split_commands, split_path

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_PROMPT_START = "\033[34;01m["
_PROMPT_END = "]$>\033[00m"


def _atoi(text):
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _fileno(stream):
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def _flush(stream):
    try:
        stream.flush()
    except (AttributeError, OSError, ValueError):
        pass


def _listdir(directory):
    try:
        return os.listdir(directory)
    except OSError:
        return []


class Shell:
    """A small interactive shell with ``;``, pipes and redirections."""

    def __init__(self, environ=None, stdin=None, stdout=None, stderr=None):
        self.stdin = sys.stdin if stdin is None else stdin
        self.stdout = sys.stdout if stdout is None else stdout
        self.stderr = sys.stderr if stderr is None else stderr
        self.environment = Environment(os.environ if environ is None else environ)
        self.path_dirs = split_path(self.environment.get("PATH") or "")
        self.home = self.environment.get("HOME")
        self.variables = LocalVariables.with_process_ids()
        self.status = 0
        self._previous_dir = None

    def _error(self, message):
        self.stderr.write(message + "\n")

    def prompt(self):
        """Write the prompt showing the current directory."""
        self.stdout.write(_PROMPT_START + os.getcwd()[1:] + _PROMPT_END)
        _flush(self.stdout)

    def read_line(self):
        """Return the next input line without its newline, or None at end of input."""
        line = self.stdin.readline()
        if not line:
            return None
        return line[:-1] if line.endswith("\n") else line

    def run_line(self, line):
        """Run every ``;``-separated command of ``line``; return False on ``exit``."""
        if line == "exit":
            return False
        for words in split_commands(line):
            self.execute(words)
        return True

    def execute(self, words):
        """Run one command given as a list of words."""
        if not words:
            return
        if has_pipe(join_words(words)):
            try:
                stages = split_pipeline(words)
            except PipelineError as error:
                self._error(str(error))
                self.status = 1
                return
            self._run_pipeline(stages)
            return
        name = words[0]
        if name == "set":
            set_command(self.variables, words, self.stdout)
        elif name == "unset":
            unset_command(self.variables, words, self.stdout)
        elif name == "which":
            if len(words) < 2:
                self._error("which: Too few arguments.")
                self.status = 1
            else:
                self.which(words[1])
        elif name == "repeat":
            self._repeat(words)
        else:
            self._run_command(words, None, self.stdout)

    def _repeat(self, words):
        if len(words) < 3:
            self._error("repeat: Too few arguments.")
            self.status = 1
            return
        times = max(_atoi(words[1]), 1)
        command = [words[2]]
        for _ in range(times):
            self._run_command(command, None, self.stdout)

    def _run_pipeline(self, stages):
        data = None
        for position, stage in enumerate(stages):
            if position == len(stages) - 1:
                self._run_command(stage, data, self.stdout)
                continue
            buffer = io.BytesIO()
            out = io.TextIOWrapper(buffer, encoding="utf-8", write_through=True)
            self._run_command(stage, data, out)
            out.flush()
            data = buffer.getvalue()
            out.detach()

    def _run_command(self, words, stdin, stdout):
        if not count_redirections(join_words(words)):
            self._dispatch(words, stdin, stdout)
            return
        try:
            command, redirections = parse_redirections(words)
            with open_redirections(redirections, self.stdin, self.stdout) as (rin, rout):
                out = stdout
                if rout is not None:
                    out = io.TextIOWrapper(rout, encoding="utf-8", write_through=True)
                try:
                    self._dispatch(command, stdin if rin is None else rin, out)
                finally:
                    if rout is not None:
                        out.flush()
                        out.detach()
        except RedirectionError as error:
            self._error(str(error))
            self.status = 1

    def _dispatch(self, words, stdin, stdout):
        if not words:
            return
        name = words[0]
        if name == "cd":
            self.change_directory(words)
            return
        if name == "setenv":
            if not setenv_command(self.environment, words, stdout):
                self.status = 1
            return
        if name == "env":
            env_command(self.environment, stdout)
            return
        if name == "unsetenv":
            if not unsetenv_command(self.environment, words, stdout):
                self.status = 1
            return
        if os.path.isdir(name):
            if "/" not in name:
                self._error(f"{name}: Command not found.")
            else:
                self._error(f"{name}: Permission denied.")
                self.status = 1
            return
        path = self.find_executable(name)
        if path is None:
            self._error(f"{name}: Command not found.")
            self.status = 1
            return
        self._spawn(path, words, stdin, stdout)

    def _spawn(self, path, words, stdin, stdout):
        _flush(stdout)
        _flush(self.stderr)
        options = {}
        if isinstance(stdin, bytes):
            options["input"] = stdin
        elif stdin is not None:
            options["stdin"] = stdin
        elif _fileno(self.stdin) is not None:
            options["stdin"] = self.stdin
        else:
            options["stdin"] = subprocess.DEVNULL
        out_fd = _fileno(stdout)
        err_fd = _fileno(self.stderr)
        options["stdout"] = subprocess.PIPE if out_fd is None else out_fd
        options["stderr"] = subprocess.PIPE if err_fd is None else err_fd
        try:
            result = subprocess.run(
                words,
                executable=path,
                env=self.environment.as_dict(),
                check=False,
                **options,
            )
        except OSError as error:
            if error.errno == errno.ENOEXEC:
                self._error(f"{path}: Exec format error. Wrong Architecture.")
                self.status = 1
            else:
                self.status = 0
            return
        if out_fd is None and result.stdout:
            stdout.write(result.stdout.decode(errors="replace"))
        if err_fd is None and result.stderr:
            self.stderr.write(result.stderr.decode(errors="replace"))
        if result.returncode == -signal.SIGSEGV:
            self.stdout.write("Segmentation fault\n")
            self.status = 139
        elif result.returncode < 0:
            self.status = 0
        else:
            self.status = result.returncode

    def change_directory(self, words):
        """Run ``cd``: no argument or ``~`` goes home, ``-`` goes back."""
        if self._previous_dir is None:
            self._previous_dir = os.getcwd()
        current = os.getcwd()
        count = len(words)
        target = words[1] if count == 2 else None
        if count >= 3:
            self.stdout.write("cd: Too many arguments.\n")
            self.status = 1
        if target is not None and target not in ("-", "~") and not os.path.exists(target):
            self.stdout.write(f"{target}: No such file or directory.\n")
            self.status = 1
        try:
            if count == 1 or target in ("~", " "):
                if self.home is not None:
                    os.chdir(self.home)
            elif target == "-":
                os.chdir(self._previous_dir)
            elif target is not None:
                os.chdir(target)
        except NotADirectoryError:
            self.stdout.write(f"{target}: Not a directory.\n")
            self.status = 1
        except OSError:
            pass
        self._previous_dir = current

    def which(self, name):
        """Print and return every path directory entry called ``name``."""
        found = []
        for directory in self.path_dirs:
            candidate = os.path.join(directory, name)
            if os.path.exists(candidate):
                self.stdout.write(candidate + "\n")
                found.append(candidate)
        return found

    def find_executable(self, name):
        """Return the program to start for ``name``, or None when there is none."""
        for directory in self.path_dirs:
            direct = os.access(name, os.X_OK)
            if not direct and name not in _listdir(directory):
                continue
            if direct:
                return name
            candidate = os.path.join(directory, name)
            if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
                return candidate
        return None

    def run(self):
        """Read and run lines until ``exit`` or end of input; return the status."""
        while True:
            self.prompt()
            line = self.read_line()
            if line is None:
                self.stdout.write("exit\n")
                _flush(self.stdout)
                return self.status
            if not self.run_line(line):
                return 0


def main(argv=None):
    """Start the shell on the process's standard streams."""
    args = sys.argv[1:] if argv is None else argv
    if args:
        return 84
    return Shell().run()