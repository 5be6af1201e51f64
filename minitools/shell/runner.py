"""Parsing and running of pipelines with redirections."""

from __future__ import annotations

import os
import subprocess
import sys
from contextlib import ExitStack
from dataclasses import dataclass, field
from itertools import takewhile
from typing import Optional, Sequence

_OPEN_FLAGS = {
    ">": os.O_CREAT | os.O_WRONLY | os.O_TRUNC,
    ">>": os.O_APPEND | os.O_WRONLY,
    "<": os.O_RDONLY,
}


@dataclass(frozen=True)
class Redirection:
    """A ``>``, ``>>`` or ``<`` redirection of one stage."""

    operator: str
    path: str

    def __post_init__(self) -> None:
        if self.operator not in _OPEN_FLAGS:
            raise ValueError(f"unknown redirection {self.operator!r}")

    @property
    def is_input(self) -> bool:
        return self.operator == "<"

    def _open(self) -> Optional[int]:
        try:
            return os.open(self.path, _OPEN_FLAGS[self.operator], 0o666)
        except OSError as exc:
            print(f"{self.path}: {exc.strerror}", file=sys.stderr)
            return None


@dataclass
class Stage:
    """One command of a pipeline."""

    argv: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)


def parse_pipeline(words: Sequence[str]) -> list[Stage]:
    """Split words into pipeline stages; ``&`` ends the command.

    Empty words are skipped.  Raises ``ValueError`` when a redirection has
    no file name.
    """
    stages = [Stage()]
    items = iter(words)
    for word in items:
        if word in _OPEN_FLAGS:
            target = next(items, "")
            if not target:
                raise ValueError(f"missing file name after {word}")
            stages[-1].redirections.append(Redirection(word, target))
        elif word == "|":
            stages.append(Stage())
        elif word == "&":
            break
        elif word:
            stages[-1].argv.append(word)
    return stages


def change_directory(words: Sequence[str]) -> bool:
    """Run the ``cd`` builtin; go home without an argument.

    Returns whether the directory was changed.
    """
    if not words or words[0] != "cd":
        raise ValueError("not a cd command")
    target = words[1] if len(words) > 1 and words[1] else os.environ.get("HOME")
    if not target:
        return False
    try:
        os.chdir(target)
    except OSError:
        return False
    return True


def run_pipeline(
    stages: Sequence[Stage], background: bool = False
) -> list[subprocess.Popen]:
    """Start the stages connected by pipes and return their processes.

    Stages after the first one without a command are not run.  Unless
    ``background`` is set, every process is waited for.  An ``OSError``
    from starting a command propagates after the started ones are reaped.
    """
    runnable = list(takewhile(lambda stage: bool(stage.argv), stages))
    processes: list[subprocess.Popen] = []
    upstream = None
    try:
        for position, stage in enumerate(runnable):
            piped = position < len(runnable) - 1
            with ExitStack() as opened:
                stdin = upstream
                stdout = None
                for redirection in stage.redirections:
                    fd = redirection._open()
                    if fd is None:
                        continue
                    opened.callback(os.close, fd)
                    if redirection.is_input:
                        stdin = fd
                    else:
                        stdout = fd
                if piped:
                    stdout = subprocess.PIPE
                process = subprocess.Popen(stage.argv, stdin=stdin, stdout=stdout)
            if upstream is not None:
                upstream.close()
            upstream = process.stdout if piped else None
            processes.append(process)
    except OSError:
        if upstream is not None:
            upstream.close()
        for process in processes:
            process.wait()
        raise
    if not background:
        for process in processes:
            process.wait()
    return processes