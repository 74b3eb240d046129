"""Shallow signature checks for fork targets.

The parent and the child never share type identity: the child rebuilds its
arguments from a file. Checking coarse kinds before a launch catches gross
misuse (wrong count, a string where an int goes) without pretending to be a
type checker.
"""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from selffork.errors import ArityError, KindMismatchError
from selffork.kinds import ANY_KINDS, Kind, describe_kinds, kind_of_class, kind_of_value
from selffork.kinds import kinds_of_annotation

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Parameter:
    name: str
    kinds: frozenset[Kind]
    annotation: Any = inspect.Parameter.empty
    has_default: bool = False

    def accepts(self, value: Any) -> bool:
        return kind_of_value(value) in self.kinds

    def __str__(self) -> str:
        text = f"{self.name}: {describe_kinds(self.kinds)}"
        if self.has_default:
            text += " = ..."
        return text


def _parameter(param: inspect.Parameter) -> Parameter:
    return Parameter(
        name=param.name,
        kinds=kinds_of_annotation(param.annotation),
        annotation=param.annotation,
        has_default=param.default is not inspect.Parameter.empty,
    )


def _inspect(fn: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(fn, eval_str=True)
    except (NameError, SyntaxError, TypeError) as e:
        log.debug("could not evaluate annotations of %r: %s", fn, e)
    except ValueError:
        return None
    try:
        return inspect.signature(fn)
    except ValueError:
        return None


class Signature:
    """Ordered parameter kinds of one callable, captured once."""

    def __init__(
        self,
        name: str,
        parameters: Sequence[Parameter] = (),
        variadic: Parameter | None = None,
        keyword_only: Sequence[str] = (),
    ) -> None:
        self.name = name
        self.parameters = tuple(parameters)
        self.variadic = variadic
        self.keyword_only = tuple(keyword_only)

    @classmethod
    def from_callable(cls, fn: Callable[..., Any]) -> "Signature":
        name = getattr(fn, "__qualname__", None) or type(fn).__qualname__
        sig = _inspect(fn)
        if sig is None:
            # Builtins without introspectable signatures accept anything.
            log.debug("no signature for %s; arguments will not be checked", name)
            return cls(name, variadic=Parameter("args", ANY_KINDS))

        parameters: list[Parameter] = []
        variadic = None
        keyword_only: list[str] = []
        for param in sig.parameters.values():
            if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
                parameters.append(_parameter(param))
            elif param.kind is param.VAR_POSITIONAL:
                variadic = _parameter(param)
            elif param.kind is param.KEYWORD_ONLY and param.default is param.empty:
                keyword_only.append(param.name)
        return cls(name, parameters, variadic, keyword_only)

    @property
    def minimum(self) -> int:
        return sum(1 for p in self.parameters if not p.has_default)

    @property
    def maximum(self) -> int | None:
        return None if self.variadic is not None else len(self.parameters)

    def expected_count(self) -> str:
        minimum, maximum = self.minimum, self.maximum
        if maximum is None:
            return f"at least {minimum}"
        if minimum == maximum:
            return str(minimum)
        return f"{minimum} to {maximum}"

    def describe(self) -> str:
        parts = [str(p) for p in self.parameters]
        if self.variadic is not None:
            parts.append(f"*{self.variadic}")
        elif self.keyword_only:
            parts.append("*")
        parts.extend(self.keyword_only)
        return f"{self.name}({', '.join(parts)})"

    def validate(self, args: Sequence[Any], strict: bool = False) -> None:
        """Raise ArgumentError unless ``args`` fit this signature positionally."""
        count = len(args)
        if self.keyword_only:
            # Only positional values cross the channel.
            raise ArityError(
                self.describe(),
                f"{self.expected_count()} with no required keyword-only "
                f"({', '.join(self.keyword_only)})",
                count,
            )
        maximum = self.maximum
        if count < self.minimum or (maximum is not None and count > maximum):
            raise ArityError(self.describe(), self.expected_count(), count)

        for position, value in enumerate(args):
            if position < len(self.parameters):
                param = self.parameters[position]
            else:
                assert self.variadic is not None
                param = self.variadic
            got = kind_of_value(value)
            if got not in param.kinds:
                raise KindMismatchError(position, describe_kinds(param.kinds), str(got))
            if strict:
                self._check_struct(position, param, value)

    def _check_struct(self, position: int, param: Parameter, value: Any) -> None:
        annotation = param.annotation
        if typing.get_origin(annotation) is not None or not isinstance(annotation, type):
            return
        if getattr(annotation, "_is_protocol", False):
            return
        if kind_of_class(annotation) is not Kind.STRUCT:
            return
        if not isinstance(value, annotation):
            raise KindMismatchError(
                position,
                annotation.__qualname__,
                type(value).__qualname__,
                detail="strict",
            )

    def __repr__(self) -> str:
        return f"<Signature {self.describe()}>"
