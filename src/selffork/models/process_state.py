"""Terminal state of a reaped child process."""

import signal as _signal
from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessState:
    """Exit information captured by ``Function.wait()``.

    ``returncode`` follows the ``subprocess`` convention: a negative value
    is the number of the signal that killed the child (POSIX only).
    """

    pid: int
    returncode: int

    @property
    def exited(self) -> bool:
        """True when the child exited on its own rather than by signal."""
        return self.returncode >= 0

    @property
    def exit_code(self) -> int:
        """The exit status, or -1 when the child was killed by a signal."""
        return self.returncode if self.exited else -1

    @property
    def signal(self) -> int | None:
        return None if self.exited else -self.returncode

    @property
    def success(self) -> bool:
        return self.returncode == 0

    def __str__(self) -> str:
        if self.exited:
            return f"exit status {self.returncode}"
        signum = -self.returncode
        try:
            description = _signal.strsignal(signum)
        except ValueError:
            description = None
        return f"signal: {(description or f'signal {signum}').lower()}"
