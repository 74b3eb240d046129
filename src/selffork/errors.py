"""Exceptions raised by selffork."""

from __future__ import annotations


class ForkError(Exception):
    """Base class for every selffork error."""


class ArgumentError(ForkError):
    """Arguments are not call-compatible with the target's signature."""


class ArityError(ArgumentError):
    def __init__(self, signature: str, expected: str, got: int) -> None:
        self.signature = signature
        self.expected = expected
        self.got = got
        super().__init__(
            f"incorrect argument count for {signature}: expected {expected}, got {got}"
        )


class KindMismatchError(ArgumentError):
    def __init__(self, position: int, expected: str, got: str, detail: str = "") -> None:
        self.position = position
        self.expected = expected
        self.got = got
        message = f"argument mismatch at position {position}: expected {expected}, got {got}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class ChannelError(ForkError):
    """The argument file could not be created, written or read."""


class StartError(ForkError):
    """The child process could not be started."""


class WaitError(ForkError):
    """The child process could not be waited on."""


class UnknownTargetError(ForkError, LookupError):
    """No callable is registered under the requested routing name."""
