"""OS-specific process attributes for a forked child."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict


class ProcAttrs(BaseModel):
    """Process attributes handed to ``subprocess.Popen`` as they are.

    The common POSIX and Windows knobs are declared for discoverability;
    any other ``Popen`` keyword can be set as an extra field. Only fields
    that were explicitly set are forwarded, so the platform defaults apply
    to everything else.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    cwd: str | Path | None = None
    start_new_session: bool | None = None
    process_group: int | None = None
    user: str | int | None = None
    group: str | int | None = None
    extra_groups: list[str | int] | None = None
    umask: int | None = None
    pass_fds: tuple[int, ...] | None = None
    close_fds: bool | None = None
    preexec_fn: Callable[[], Any] | None = None
    creationflags: int | None = None

    def popen_kwargs(self) -> dict[str, Any]:
        kwargs = {name: getattr(self, name) for name in self.model_fields_set}
        kwargs.update(self.model_extra or {})
        return kwargs
