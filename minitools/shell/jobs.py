"""Bookkeeping of commands started in the background."""

from __future__ import annotations

from typing import Optional, Protocol


class _Process(Protocol):
    pid: int

    def poll(self) -> Optional[int]: ...


def format_status(pid: int, returncode: Optional[int]) -> str:
    """Describe the state of a background process.

    ``returncode`` follows the ``subprocess`` convention: ``None`` while the
    process runs, a negative signal number when a signal killed it.
    """
    if returncode is None:
        return f"[{pid}] Still working"
    if returncode < 0:
        return (
            f"[{pid}] Done   Exit status: 0\n"
            f"[{pid}] Process killed by signal {-returncode}"
        )
    return f"[{pid}] Done   Exit status: {returncode}"


class JobTable:
    """Background processes that have not been reported as finished yet."""

    def __init__(self) -> None:
        self._jobs: list[_Process] = []

    def add(self, process: _Process) -> None:
        """Track ``process`` unless it has already finished."""
        if process.poll() is None:
            self._jobs.append(process)

    def report(self) -> list[str]:
        """Return a status for every tracked job and forget the finished ones."""
        lines = []
        running = []
        for process in self._jobs:
            returncode = process.poll()
            lines.append(format_status(process.pid, returncode))
            if returncode is None:
                running.append(process)
        self._jobs = running
        return lines

    def __len__(self) -> int:
        return len(self._jobs)