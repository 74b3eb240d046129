"""Name-to-callable table consulted by forked children."""

import logging
from collections.abc import Callable
from typing import Any

from selffork.errors import UnknownTargetError
from selffork.fork import Function

log = logging.getLogger(__name__)


class Registry:
    """Callables that a forked child may be asked to run, by routing name."""

    def __init__(self) -> None:
        self._targets: dict[str, Callable[..., Any]] = {}

    def add(self, name: str, fn: Callable[..., Any]) -> None:
        if not callable(fn):
            raise TypeError(f"cannot register {type(fn).__name__} {name!r}: not callable")
        existing = self._targets.get(name)
        # A program run as __main__ and also imported by name registers twice.
        if existing is not None and existing is not fn and _qualname(existing) != _qualname(fn):
            raise ValueError(f"{name!r} is already registered to {_qualname(existing)}")
        self._targets[name] = fn
        log.debug("registered %s as %r", _qualname(fn), name)

    def register(self, name: str | Callable[..., Any] | None = None) -> Any:
        """Decorator registering a function, under its qualified name by default.

        Works both bare (``@register``) and called (``@register("worker")``).
        """
        if callable(name):
            fn = name
            self.add(fn.__qualname__, fn)
            return fn

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self.add(name or fn.__qualname__, fn)
            return fn

        return decorator

    def get(self, name: str) -> Callable[..., Any]:
        try:
            return self._targets[name]
        except KeyError:
            raise UnknownTargetError(f"no fork target registered as {name!r}") from None

    def names(self) -> list[str]:
        return sorted(self._targets)

    def new_fork(self, name: str, *argv: str, **kwargs: Any) -> Function:
        """Build a ``Function`` for the callable registered as ``name``."""
        return Function(name, self.get(name), *argv, **kwargs)

    def __contains__(self, name: object) -> bool:
        return name in self._targets

    def __len__(self) -> int:
        return len(self._targets)


def _qualname(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or type(fn).__qualname__


default_registry = Registry()
register = default_registry.register
lookup = default_registry.get
