"""Child-side half of the fork protocol.

Every program that forks itself must call ``bootstrap()`` when it starts,
after its fork targets are registered and before it does anything else:

    @selffork.register("worker")
    def worker(a: int, b: str) -> None:
        ...

    if __name__ == "__main__":
        selffork.bootstrap()
        main()

In an ordinary run ``bootstrap()`` returns at once. In a forked child it
runs the requested target and exits, so the program's own ``main()`` never
starts.
"""

import logging
import os
from collections.abc import Mapping

from selffork.channel import read_channel
from selffork.constants import ARGS_VAR, NAME_VAR
from selffork.errors import ChannelError
from selffork.registry import Registry, default_registry

log = logging.getLogger(__name__)


def is_fork_child(environ: Mapping[str, str] | None = None) -> bool:
    """Return whether this process was started by ``Function.fork()``."""
    environ = os.environ if environ is None else environ
    return NAME_VAR in environ


def run_target(registry: Registry, name: str, path: str) -> int:
    """Run the target registered as ``name`` with the arguments stored at ``path``.

    The argument file is removed whether or not it could be read. Returns
    the exit status for the child: the target's integer return value, or 0.
    """
    if not path:
        raise ChannelError(f"{ARGS_VAR} is not set")
    try:
        args = read_channel(path)
    finally:
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass

    fn = registry.get(name)
    log.debug("running fork target %r with %d argument(s)", name, len(args))
    result = fn(*args)
    if isinstance(result, int) and not isinstance(result, bool):
        return result
    return 0


def bootstrap(registry: Registry | None = None) -> None:
    """Run the fork target and exit if this process is a forked child."""
    if not is_fork_child():
        return
    # Children that fork again must not inherit their own routing.
    name = os.environ.pop(NAME_VAR)
    path = os.environ.pop(ARGS_VAR, "")
    raise SystemExit(run_target(registry or default_registry, name, path))
