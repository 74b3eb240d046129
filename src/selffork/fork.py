"""Launch descriptors: re-execute this program and run one function in the child.

A ``Function`` binds a routing name to a callable. ``fork(*args)`` checks the
arguments against the callable's signature, writes them to an argument
channel and starts a new interpreter running the same program. That program
must call ``selffork.bootstrap()`` first thing; in the child it finds the
routing name in its environment, runs the registered callable with the
arguments and exits.

    worker = Function("worker", worker_main)
    worker.fork(3, "x")
    state = worker.wait()
"""

import logging
import os
import shlex
import subprocess
import sys
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from selffork.channel import open_channel
from selffork.config import load_config
from selffork.errors import ForkError, StartError, WaitError
from selffork.models import ForkConfig, LaunchConfig, ProcAttrs, ProcessState
from selffork.signature import Signature

log = logging.getLogger(__name__)


def resolve_executable() -> str:
    """Return the absolute path of the running interpreter, or "" if unknown."""
    if not sys.executable:
        return ""
    return os.path.abspath(sys.executable)


def resolve_entry() -> list[str]:
    """Return the interpreter arguments that selected the running program.

    ``sys.orig_argv`` is the interpreter's whole command line. Dropping the
    interpreter itself and the program arguments (``sys.argv[1:]``) leaves
    the options plus the script path, ``-m module`` or ``-c command``.
    """
    if getattr(sys, "frozen", False):
        return []
    orig = list(getattr(sys, "orig_argv", []))
    if not orig:
        return []
    extra = max(len(sys.argv) - 1, 0)
    return orig[1 : len(orig) - extra]


def _inherited_environ() -> Mapping[str, str]:
    return os.environ.copy()


def _remove_paths(paths: Iterable[str]) -> None:
    for path in paths:
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass


def _popen(launch: LaunchConfig) -> subprocess.Popen:
    if not launch.executable:
        raise StartError("cannot determine the path of the running executable")
    try:
        return subprocess.Popen(
            launch.command,
            executable=launch.executable,
            env=launch.env,
            stdin=launch.stdin,
            stdout=launch.stdout,
            stderr=launch.stderr,
            **launch.attrs,
        )
    except (OSError, TypeError, ValueError, subprocess.SubprocessError) as e:
        raise StartError(f"cannot start {launch.executable}: {e}") from e


class Function:
    """A forkable unit: one named target and the process that runs it.

    Streams default to ``None``, which makes the child inherit the parent's
    stdin, stdout and stderr; any value ``subprocess.Popen`` accepts works.
    ``attrs`` holds OS-specific process attributes and ``env`` holds
    variables layered over the inherited environment.

    ``process`` is set by a successful ``fork()``/``refork()`` and ``state``
    by a successful ``wait()``. One descriptor governs one live child at a
    time.
    """

    def __init__(
        self,
        name: str,
        fn: Callable[..., Any],
        *argv: str,
        executable: str | None = None,
        entry: Iterable[str] | None = None,
        environ: Callable[[], Mapping[str, str]] | None = None,
        config: ForkConfig | None = None,
    ) -> None:
        if not callable(fn):
            raise TypeError(f"fork target must be callable, not {type(fn).__name__}")
        self.name = name
        self._fn = fn
        self._signature = Signature.from_callable(fn)

        self.argv: list[str] = list(argv) if argv else (sys.argv[:1] or [""])
        self.executable = resolve_executable() if executable is None else executable
        self.entry = resolve_entry() if entry is None else [os.fspath(e) for e in entry]
        self.environ = environ or _inherited_environ
        self.config = config if config is not None else load_config()

        self.stdin: Any = None
        self.stdout: Any = None
        self.stderr: Any = None
        self.attrs = ProcAttrs()
        self.env: dict[str, str] = {}

        self._launch: LaunchConfig | None = None
        self._process: subprocess.Popen | None = None
        self._state: ProcessState | None = None

    @property
    def fn(self) -> Callable[..., Any]:
        return self._fn

    @property
    def signature(self) -> Signature:
        return self._signature

    @property
    def process(self) -> subprocess.Popen | None:
        return self._process

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process is not None else None

    @property
    def state(self) -> ProcessState | None:
        return self._state

    @property
    def launch_config(self) -> LaunchConfig | None:
        """Configuration of the most recent successful launch."""
        return self._launch

    def fork(self, *args: Any) -> None:
        """Check ``args`` against the target, then start a child to run it."""
        self._signature.validate(args, strict=self.config.strict)
        self._start(args)

    def refork(self, *args: Any) -> None:
        """Start a new child with this descriptor's configuration and fresh ``args``.

        Nothing from the previous launch carries over except ``argv``, the
        stream bindings, ``attrs`` and ``env``. The arguments are not checked
        against the signature.
        """
        self._start(args)

    def wait(self) -> ProcessState:
        """Block until the child exits and record its terminal state."""
        if self._process is None:
            raise WaitError(f"{self.name}: process not started")
        if self._state is not None:
            raise WaitError(f"{self.name}: wait already called")
        try:
            returncode = self._process.wait()
        except OSError as e:
            raise WaitError(f"{self.name}: wait failed: {e}") from e
        self._state = ProcessState(pid=self._process.pid, returncode=returncode)
        log.debug("%s (pid %d) finished: %s", self.name, self._process.pid, self._state)
        return self._state

    def kill(self) -> None:
        self._require_process().kill()

    def terminate(self) -> None:
        self._require_process().terminate()

    def _require_process(self) -> subprocess.Popen:
        if self._process is None:
            raise ForkError(f"{self.name}: process not started")
        return self._process

    def _build_launch(self) -> LaunchConfig:
        env = dict(self.environ())
        env.update(self.env)
        return LaunchConfig(
            executable=self.executable,
            command=[self.executable, *self.entry, *self.argv[1:]],
            env=env,
            stdin=self.stdin,
            stdout=self.stdout,
            stderr=self.stderr,
            attrs=self.attrs.popen_kwargs(),
        )

    def _start(self, args: tuple[Any, ...]) -> None:
        launch = self._build_launch()
        channel = open_channel(self.name, args, self.config)
        launch.env.update(channel.environ())
        launch.cleanup_paths.append(channel.path)

        try:
            process = _popen(launch)
        except BaseException:
            _remove_paths(launch.cleanup_paths)
            raise

        self._launch = launch
        self._process = process
        self._state = None
        log.debug("forked %s as pid %d: %s", self.name, process.pid, shlex.join(launch.command))

    def __repr__(self) -> str:
        return f"<Function {self.name!r} pid={self.pid}>"


def new_fork(name: str, fn: Any, *argv: str, **kwargs: Any) -> Function | None:
    """Build a ``Function``, or return None when ``fn`` is not callable."""
    if not callable(fn):
        log.debug("new_fork(%r): target %r is not callable", name, fn)
        return None
    return Function(name, fn, *argv, **kwargs)
