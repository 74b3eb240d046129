"""Unit tests for selffork.registry."""

import pytest

from selffork.errors import UnknownTargetError
from selffork.fork import Function
from selffork.models import ForkConfig
from selffork.registry import Registry


def compute(n: int) -> int:
    return n * 2


class TestRegister:
    def test_bare_decorator_uses_qualified_name(self):
        registry = Registry()

        @registry.register
        def job(a: int) -> None:
            pass

        assert "TestRegister.test_bare_decorator_uses_qualified_name.<locals>.job" in registry

    def test_named_decorator_returns_function_unchanged(self):
        registry = Registry()
        decorated = registry.register("compute")(compute)

        assert decorated is compute
        assert registry.get("compute") is compute
        assert registry.names() == ["compute"]
        assert len(registry) == 1

    def test_same_function_can_register_twice(self):
        registry = Registry()
        registry.add("compute", compute)
        registry.add("compute", compute)
        assert registry.get("compute") is compute

    def test_different_function_under_taken_name_raises(self):
        registry = Registry()
        registry.add("compute", compute)
        with pytest.raises(ValueError, match="already registered"):
            registry.add("compute", print)

    def test_non_callable_raises(self):
        with pytest.raises(TypeError):
            Registry().add("x", 42)


class TestLookup:
    def test_unknown_name_raises(self):
        with pytest.raises(UnknownTargetError, match="'missing'"):
            Registry().get("missing")

    def test_unknown_target_is_a_lookup_error(self):
        with pytest.raises(LookupError):
            Registry().get("missing")

    def test_new_fork_builds_function_for_registered_target(self, tmp_path):
        registry = Registry()
        registry.add("compute", compute)

        fork = registry.new_fork("compute", "app", config=ForkConfig(temp_dir=str(tmp_path)))

        assert isinstance(fork, Function)
        assert fork.name == "compute"
        assert fork.fn is compute
        assert fork.argv == ["app"]
