"""Interactive shell with pipelines, redirections, background jobs and
conditional command lists."""

from __future__ import annotations

import os
import signal
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Optional, Sequence

from minitools.shell.jobs import JobTable
from minitools.shell.runner import change_directory, parse_pipeline, run_pipeline
from minitools.shell.tokenizer import QUOTE_ERROR, read_lines

AMPERSAND_ERROR = "Error: & not at the end of the line"
OPEN_ERROR = "Error:file doesn't open"


class Condition(Enum):
    """How a command segment is joined to the one after it."""

    NONE = ""
    SEQUENCE = ";"
    OR = "||"
    AND = "&&"


_OPERATORS = frozenset(c.value for c in Condition if c is not Condition.NONE)


@dataclass
class CommandSegment:
    """Words of one command of a list, with the operator that ends it.

    ``background`` is set when the segment ends with ``&``;
    ``misplaced_ampersand`` when an ``&`` is followed by more words.
    """

    words: list[str] = field(default_factory=list)
    condition: Condition = Condition.NONE
    background: bool = False
    misplaced_ampersand: bool = False


def split_segments(words: Sequence[str]) -> list[CommandSegment]:
    """Split a line's words at ``&&``, ``||`` and ``;``.

    The last segment always has ``Condition.NONE``.
    """
    items = list(words)
    segments: list[CommandSegment] = []
    current = CommandSegment()
    for word, following in zip(items, [*items[1:], ""]):
        if word == "&":
            if following:
                current.misplaced_ampersand = True
            else:
                current.background = True
        if word in _OPERATORS:
            current.condition = Condition(word)
            segments.append(current)
            current = CommandSegment()
        else:
            current.words.append(word)
    segments.append(current)
    return segments


def should_continue(condition: Condition, returncode: int) -> bool:
    """Whether the command after ``condition`` runs, given the exit status."""
    if condition is Condition.SEQUENCE:
        return True
    if condition is Condition.OR:
        return returncode != 0
    if condition is Condition.AND:
        return returncode == 0
    return False


def run_line(words: Sequence[str], jobs: JobTable) -> int:
    """Run one tokenized line and return the status of its last command.

    The status of a pipeline is that of its first command.  A command that
    cannot be started counts as a success, after an error message.
    """
    if not words:
        return 0
    if words[0] == "cd":
        change_directory(words)
        return 0
    returncode = 0
    for segment in split_segments(words):
        if segment.misplaced_ampersand:
            print(AMPERSAND_ERROR, file=sys.stderr)
        try:
            stages = parse_pipeline(segment.words)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        sys.stdout.flush()
        try:
            processes = run_pipeline(stages, segment.background)
        except OSError as exc:
            name = exc.filename or (stages[0].argv[0] if stages[0].argv else "")
            print(f"{name}: {exc.strerror}", file=sys.stderr)
            processes = []
        if segment.background:
            if processes:
                print(f'[{processes[0].pid}] Run "{words[0]}" in background')
                jobs.add(processes[0])
            return 0
        returncode = processes[0].returncode if processes else 0
        if not should_continue(segment.condition, returncode):
            break
    return returncode


def _open_input(args: Sequence[str]) -> Optional[IO[str]]:
    stream: IO[str] = sys.stdin
    for flag, path in zip(args, [*args[1:], None]):
        if flag != "-i":
            continue
        if stream is not sys.stdin:
            stream.close()
        if path is None:
            return None
        try:
            stream = open(path, encoding="utf-8")
        except OSError:
            return None
    return stream


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Read command lines from standard input, or the file after ``-i``."""
    args = list(sys.argv[1:] if argv is None else argv)
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        stream = _open_input(args)
        if stream is None:
            sys.stderr.write(OPEN_ERROR)
            return 0
        jobs = JobTable()
        try:
            for line in read_lines(stream, redirect_special=True):
                print(f"{os.getcwd()}> ", end="", flush=True)
                run_line(line.words, jobs)
                if line.unbalanced:
                    print(QUOTE_ERROR, file=sys.stderr)
                for status in jobs.report():
                    print(status)
        finally:
            if stream is not sys.stdin:
                stream.close()
    finally:
        signal.signal(signal.SIGINT, previous)
    return 0


if __name__ == "__main__":
    sys.exit(main())