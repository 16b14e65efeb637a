# fortysh

A small interactive shell for POSIX systems. It reads one line at a time,
shows the current directory in its prompt, and starts the programs it finds
in the directories of your `PATH`.

## Installing

```
pip install .
```

## Running the shell

```
fortysh
```

The shell takes no arguments; given any, it exits with status 84 at once.
`exit` ends it with status 0. At end of input it prints `exit` and returns
the status of the last command.

What it understands:

- Several commands on one line, separated by `;`. Blank commands are skipped.
- Pipelines: `ls | grep py | wc -l`. An empty stage is reported as
  `Invalid null command.`
- Redirections: `>` (truncate), `>>` (append), `<` (read a file) and
  here-documents with `<<`, which prompt with `?` until the delimiter line.
- Environment builtins: `env`, `setenv` (no argument lists the environment,
  `setenv NAME [VALUE]` adds or replaces a variable) and `unsetenv NAME...`.
- Shell-local variable builtins: `set` (no argument lists them, one per line
  as `name<TAB>value`), `set NAME=VALUE...` and `unset NAME...`. At start-up
  they hold `PID`, `GID` and `PGID`.
- `cd` with no argument or `~` (go to `HOME`), `-` (go back to the previous
  directory) or a path.
- `which NAME`, which prints every directory entry of that name on `PATH`.
- `repeat COUNT COMMAND`, which runs the command (its first word only) COUNT
  times, at least once.

A program killed by a segmentation fault is reported as `Segmentation fault`
with status 139.

## Using it from Python

```python
import io
from fortysh.shell import Shell

out = io.StringIO()
shell = Shell(environ={"PATH": "/bin:/usr/bin", "HOME": "/tmp"},
              stdin=io.StringIO("setenv GREETING hello\nenv\n"),
              stdout=out, stderr=io.StringIO())
status = shell.run()
```

`Shell.run_line` runs one line and `Shell.execute` runs one command given as
a list of words. The helper modules can be used on their own:

- `fortysh.textutil` splits and cleans command lines (`split_words`,
  `split_commands`, `split_path`, `join_words`, ...).
- `fortysh.environment` has the `Environment` type and `setenv_command`,
  `unsetenv_command` and `env_command`.
- `fortysh.localvars` has `LocalVariables`, `set_command` and `unset_command`.
- `fortysh.redirection` has `parse_redirections`, `open_redirections` and
  `read_here_document`.
- `fortysh.pipeline` has `split_pipeline`.

## What it does not do

The shell does no quoting, escaping, globbing or `$VARIABLE` expansion:
words are split on spaces and tabs only. There is no `&&`, `||`, job
control, background execution or command history.

## The lidar driving client

The package also ships a client that steers a simulated car. It writes
commands on standard output, reads one answer line per command on standard
input, echoes each answer to standard error, and turns the wheels according
to the lidar readings:

```
fortysh-racer
```

It stops with status 0 when the simulator stops answering, or with status 1
when the simulator's answer signals the end of the track.
`fortysh.racer.steering_command` gives the wheel command for a pair of side
distances on its own.

## Tests

```
pip install .[test]
pytest
```