# tests/test_global_registry.py
"""
Tests for the global declaration registry.
"""

from globalscope.analyzer.global_registry import GlobalRegistry
from globalscope.analyzer.model import FunctionRef, SourceLocation
from tests.conftest import MAIN, var


class TestTrack:

    def test_new_variable_has_no_references(self):
        registry = GlobalRegistry()
        variable = registry.track("id-counter", "counter", SourceLocation(MAIN, 1, 5))
        assert variable.referencing_functions == set()
        assert "id-counter" in registry
        assert len(registry) == 1

    def test_track_is_idempotent(self):
        registry = GlobalRegistry()
        first = registry.track("id", "counter", SourceLocation(MAIN, 1, 5))
        first.add_reference(FunctionRef("f", "f"))
        again = registry.track("id", "counter", SourceLocation(MAIN, 7, 5))
        assert again is first
        assert again.referencing_functions == {FunctionRef("f", "f")}
        assert again.location.line == 1
        assert len(registry) == 1

    def test_same_name_different_identity(self):
        registry = GlobalRegistry()
        registry.track(("ns1", "x"), "x", SourceLocation(MAIN, 1, 5))
        registry.track(("ns2", "x"), "x", SourceLocation(MAIN, 4, 5))
        assert len(registry) == 2
        assert [v.name for v in registry.all()] == ["x", "x"]

    def test_get_unknown(self):
        assert GlobalRegistry().get("missing") is None


class TestConsider:

    def test_global_is_tracked(self):
        registry = GlobalRegistry()
        assert registry.consider(var("counter", 1)) is not None
        assert ("var", "counter") in registry

    def test_header_global_never_tracked(self):
        registry = GlobalRegistry()
        assert registry.consider(var("flag", 1, in_header=True)) is None
        assert len(registry) == 0

    def test_local_never_tracked(self):
        registry = GlobalRegistry()
        assert registry.consider(var("tmp", 4, global_storage=False)) is None
        assert len(registry) == 0

    def test_local_with_global_name_is_separate(self):
        registry = GlobalRegistry()
        registry.consider(var("value", 1, identity="global-value"))
        registry.consider(var("value", 5, identity="local-value", global_storage=False))
        assert "global-value" in registry
        assert "local-value" not in registry
