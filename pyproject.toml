[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minitools"
version = "0.1.0"
description = "A toy-language front end (lexer, syntax checker, reverse Polish translator), a toy command shell and a rectangle calculator"
requires-python = ">=3.10"
dependencies = []
keywords = ["lexer", "parser", "reverse polish notation", "compiler", "shell", "tokenizer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minitools-lexdump = "minitools.lang.lexdump:main"
minitools-syntax = "minitools.lang.syntax:main"
minitools-translate = "minitools.lang.translator:main"
minitools-tokenize = "minitools.shell.tokenizer:main"
minitools-shell = "minitools.shell.main:main"
minitools-rect = "minitools.rectangle:main"

[tool.hatch.build.targets.wheel]
packages = ["minitools"]

[tool.pytest.ini_options]
addopts = "-ra"
