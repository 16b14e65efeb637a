[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "fortysh"
version = "0.1.0"
description = "A small interactive Unix-style shell with builtins, pipes, redirections and local variables"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "command-line", "pipes", "redirection", "environment"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fortysh = "fortysh.shell:main"
fortysh-racer = "fortysh.racer:main"

[tool.setuptools.packages.find]
include = ["fortysh*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
