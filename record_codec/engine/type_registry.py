"""Type registry — concrete factories for polymorphic record fields.

A field annotated with an abstract base class or a ``Protocol`` cannot
be instantiated directly before its setter runs.  The owning package
registers a factory for the abstract type at process start::

    from record_codec.engine.type_registry import register_type

    register_type(Shape, Circle)          # keyed by Shape.__qualname__
    register_type("Shape", lambda: Circle(radius=0))

The engine only reads the registry; a missing entry is an immediate
``IndirectionError`` at allocation time.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from record_codec.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

_TYPE_REGISTRY: dict[str, Callable[[], Any]] = {}
_REGISTRY_LOCK = threading.Lock()


def _key(type_or_name: type | str) -> str:
    if isinstance(type_or_name, str):
        key = type_or_name.strip()
    else:
        key = type_or_name.__qualname__
    if not key:
        msg = "Type registry key must not be empty"
        raise ConfigurationError(msg)
    return key


def register_type(type_or_name: type | str, factory: Callable[[], Any]) -> None:
    """Register *factory* as the concrete allocator for an abstract type.

    Args:
        type_or_name: The abstract type, or its ``__qualname__``.
        factory: Zero-argument callable returning a fresh concrete value
            (a concrete class works).

    Raises:
        ConfigurationError: If *factory* is not callable or the key is empty.
    """
    if not callable(factory):
        msg = f"Factory for {type_or_name!r} must be callable"
        raise ConfigurationError(msg)
    key = _key(type_or_name)
    with _REGISTRY_LOCK:
        _TYPE_REGISTRY[key] = factory
    logger.debug("Registered type factory for '%s'", key)


def get_type_factory(type_or_name: type | str) -> Callable[[], Any] | None:
    """Return the registered factory, or ``None`` when nothing is registered."""
    return _TYPE_REGISTRY.get(_key(type_or_name))


def unregister_type(type_or_name: type | str) -> None:
    """Remove a registration (no-op when absent)."""
    with _REGISTRY_LOCK:
        _TYPE_REGISTRY.pop(_key(type_or_name), None)


def clear_type_registry() -> None:
    """Remove every registration (test isolation helper)."""
    with _REGISTRY_LOCK:
        _TYPE_REGISTRY.clear()


def list_types() -> list[str]:
    """Return a sorted list of registered type names."""
    return sorted(_TYPE_REGISTRY)
