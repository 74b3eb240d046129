"""One-shot argument channel from a parent to its forked child.

The parent pickles each argument, in order, into a fresh temporary file and
tells the child where it is through two environment variables. The child
reads the file once and deletes it; the parent only deletes it when the
child never started.
"""

import logging
import os
import pickle
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from selffork.constants import ARGS_VAR, NAME_VAR
from selffork.errors import ChannelError
from selffork.models import ForkConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Channel:
    name: str
    path: str

    def environ(self) -> dict[str, str]:
        """Variables that route the child to its target and arguments."""
        return {NAME_VAR: self.name, ARGS_VAR: self.path}

    def discard(self) -> None:
        try:
            os.unlink(self.path)
        except FileNotFoundError:
            pass


def open_channel(name: str, args: Sequence[Any], config: ForkConfig | None = None) -> Channel:
    """Write ``args`` to a new argument file and return its channel."""
    config = config or ForkConfig()
    try:
        f = tempfile.NamedTemporaryFile(
            mode="wb", prefix=config.temp_prefix, dir=config.temp_dir, delete=False
        )
    except OSError as e:
        raise ChannelError(f"cannot create argument file: {e}") from e

    channel = Channel(name=name, path=os.path.abspath(f.name))
    try:
        with f:
            for position, value in enumerate(args):
                try:
                    pickle.dump(value, f, protocol=config.pickle_protocol)
                except (pickle.PicklingError, TypeError, AttributeError) as e:
                    raise ChannelError(
                        f"cannot serialize argument {position} ({type(value).__qualname__}): {e}"
                    ) from e
    except (ChannelError, OSError) as e:
        channel.discard()
        if isinstance(e, ChannelError):
            raise
        raise ChannelError(f"cannot write argument file {channel.path}: {e}") from e

    log.debug("wrote %d argument(s) for %s to %s", len(args), name, channel.path)
    return channel


def read_channel(path: str) -> list[Any]:
    """Return the arguments stored at ``path``, in the order they were written."""
    args: list[Any] = []
    try:
        with open(path, "rb") as f:
            while True:
                try:
                    args.append(pickle.load(f))
                except EOFError:
                    break
    except OSError as e:
        raise ChannelError(f"cannot read argument file {path}: {e}") from e
    return args
