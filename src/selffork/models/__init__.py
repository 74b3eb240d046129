"""Model package for selffork."""

from selffork.models.fork_config import ForkConfig
from selffork.models.launch_config import LaunchConfig
from selffork.models.proc_attrs import ProcAttrs
from selffork.models.process_state import ProcessState

__all__ = [
    "ForkConfig",
    "LaunchConfig",
    "ProcAttrs",
    "ProcessState",
]
