"""Tests for the immutable converter registry."""

import pytest

from question_pipeline.converters.registry import ConverterRegistry
from question_pipeline.core.exceptions import (
    ConverterError,
    DuplicateConverterError,
    UnknownConverterError,
)


@pytest.fixture
def base_registry():
    return ConverterRegistry({"int": int})


class TestRegister:
    """Tests for register()."""

    def test_returns_new_registry(self, base_registry):
        """register() returns a new registry with the added binding."""
        extended = base_registry.register("upper", str.upper)

        assert extended is not base_registry
        assert extended.has("upper")
        assert extended.has("int")

    def test_original_unaffected(self, base_registry):
        """The receiver keeps its original bindings."""
        base_registry.register("upper", str.upper)

        assert not base_registry.has("upper")
        assert len(base_registry) == 1

    def test_duplicate_name_rejected(self, base_registry):
        """Registering an existing name raises DuplicateConverterError."""
        with pytest.raises(DuplicateConverterError) as exc_info:
            base_registry.register("int", float)

        assert exc_info.value.name == "int"
        assert isinstance(exc_info.value, ConverterError)

    def test_duplicate_leaves_first_registry_valid(self):
        """After a failed duplicate registration the first registry still works."""
        first = ConverterRegistry().register("double", lambda v: v * 2)

        with pytest.raises(DuplicateConverterError):
            first.register("double", lambda v: v * 3)

        assert first.invoke("double", 4) == 8

    def test_rejects_non_callable(self, base_registry):
        with pytest.raises(TypeError):
            base_registry.register("bad", 42)

    def test_constructor_copies_mapping(self):
        """Mutating the source dict does not change the registry."""
        source = {"int": int}
        registry = ConverterRegistry(source)
        source["float"] = float

        assert not registry.has("float")


class TestImmutability:
    """The registry object cannot be modified in place."""

    def test_cannot_set_attributes(self, base_registry):
        with pytest.raises(AttributeError):
            base_registry.extra = 1

    def test_cannot_replace_bindings(self, base_registry):
        with pytest.raises(AttributeError):
            base_registry._registry = {}


class TestInvoke:
    """Tests for invoke()."""

    def test_by_name(self, base_registry):
        assert base_registry.invoke("int", "42") == 42

    def test_direct_callable(self, base_registry):
        """A callable is invoked directly without lookup."""
        assert base_registry.invoke(len, "four") == 4

    def test_unknown_name(self, base_registry):
        with pytest.raises(UnknownConverterError) as exc_info:
            base_registry.invoke("missing", "x")

        assert "'missing' is not registered" in str(exc_info.value)

    def test_forwards_options(self):
        """Keyword options are passed through to the converter."""
        registry = ConverterRegistry({"echo": lambda value, **opts: (value, opts)})

        assert registry.invoke("echo", "v", strict=True) == ("v", {"strict": True})

    def test_rejects_other_types(self, base_registry):
        with pytest.raises(TypeError):
            base_registry.invoke(42, "x")


def test_membership_and_names(base_registry):
    """has(), `in` and names() agree."""
    registry = base_registry.register("bool", bool)

    assert "bool" in registry
    assert "float" not in registry
    assert registry.names() == ["bool", "int"]
    assert sorted(registry) == ["bool", "int"]
