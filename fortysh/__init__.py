"""A small interactive shell with builtins, pipes, redirections and local variables, and a lidar car client."""

__version__ = "0.1.0"