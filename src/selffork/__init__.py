"""Run a function of this program in a re-executed copy of itself."""

from selffork.bootstrap import bootstrap, is_fork_child
from selffork.constants import ARGS_VAR, NAME_VAR
from selffork.errors import (
    ArgumentError,
    ArityError,
    ChannelError,
    ForkError,
    KindMismatchError,
    StartError,
    UnknownTargetError,
    WaitError,
)
from selffork.fork import Function, new_fork
from selffork.models import ProcAttrs, ProcessState
from selffork.registry import Registry, default_registry, lookup, register

__version__ = "0.1.0"

__all__ = [
    "ARGS_VAR",
    "NAME_VAR",
    "ArgumentError",
    "ArityError",
    "ChannelError",
    "ForkError",
    "Function",
    "KindMismatchError",
    "ProcAttrs",
    "ProcessState",
    "Registry",
    "StartError",
    "UnknownTargetError",
    "WaitError",
    "bootstrap",
    "default_registry",
    "is_fork_child",
    "lookup",
    "new_fork",
    "register",
]
