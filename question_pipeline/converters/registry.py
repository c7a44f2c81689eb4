"""Immutable converter registry.

Maps converter names to conversion functions. Registering a converter never
mutates an existing registry: ``register`` returns a new registry with the
extra binding, so a registry can be shared freely between questions.
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Union

import structlog

from question_pipeline.core.exceptions import DuplicateConverterError, UnknownConverterError

log = structlog.get_logger(__name__)

Converter = Callable[..., Any]
ConverterRef = Union[str, Converter]


class ConverterRegistry:
    """Read-only collection of named conversions.

    Example:
        registry = ConverterRegistry({"int": int})
        registry = registry.register("upper", str.upper)
        registry.invoke("upper", "yes")      # "YES"
        registry.invoke(len, "four")         # 4, callables are used directly
    """

    __slots__ = ("_registry",)

    def __init__(self, converters: Optional[Mapping[str, Converter]] = None):
        """
        Args:
            converters: Initial name -> converter bindings (copied)
        """
        object.__setattr__(
            self, "_registry", MappingProxyType(dict(converters or {}))
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def register(self, name: str, converter: Converter) -> "ConverterRegistry":
        """Return a new registry with ``name`` bound to ``converter``.

        Args:
            name: Converter name
            converter: Callable taking the input value and optional keyword
                options (such as ``strict``)

        Returns:
            New registry; this registry is left unchanged

        Raises:
            DuplicateConverterError: ``name`` is already registered
        """
        if name in self._registry:
            raise DuplicateConverterError(name)
        if not callable(converter):
            raise TypeError(f"Converter for {name!r} must be callable")

        bindings: Dict[str, Converter] = dict(self._registry)
        bindings[name] = converter
        log.debug("converter_registered", name=name, total=len(bindings))
        return type(self)(bindings)

    def has(self, name: str) -> bool:
        """Check if a converter is registered under ``name``."""
        return name in self._registry

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def __iter__(self) -> Iterator[str]:
        return iter(self._registry)

    def names(self) -> list[str]:
        return sorted(self._registry)

    def resolve(self, key: ConverterRef) -> Converter:
        """Resolve a converter reference to a callable.

        Args:
            key: Registered converter name, or a callable used as-is

        Raises:
            UnknownConverterError: ``key`` is a name that is not registered
            TypeError: ``key`` is neither a name nor a callable
        """
        if isinstance(key, str):
            try:
                return self._registry[key]
            except KeyError:
                raise UnknownConverterError(key) from None
        if callable(key):
            return key
        raise TypeError(
            f"Converter must be a registered name or a callable, got {type(key).__name__}"
        )

    def invoke(self, key: ConverterRef, value: Any, **options: Any) -> Any:
        """Convert ``value`` with the converter referenced by ``key``.

        Keyword options are forwarded to the converter, e.g.
        ``registry.invoke("range", "1-10", strict=True)``.
        """
        converter = self.resolve(key)
        return converter(value, **options)

    def __repr__(self) -> str:
        return f"ConverterRegistry({self.names()!r})"
