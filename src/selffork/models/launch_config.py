"""Launch model for one forked child process."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class LaunchConfig:
    """How to start the re-executed program for one fork."""

    executable: str
    command: list[str]
    env: dict[str, str]
    stdin: Any = None
    stdout: Any = None
    stderr: Any = None
    attrs: dict[str, Any] = field(default_factory=dict)
    cleanup_paths: list[str] = field(default_factory=list)
