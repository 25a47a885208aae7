"""Structure registry: register and create prefix-sum structures by name."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

T = TypeVar("T", bound=type)

_REGISTRY: dict[str, type] = {}


def register(name: str) -> Callable[[T], T]:
    """Decorator to register a prefix-sum structure class under *name*.

    Registered classes are constructed as ``cls(size, dtype=...)`` and must
    provide ``add``, ``prefix_sum`` and ``total``.
    """

    def wrapper(cls: T) -> T:
        if name in _REGISTRY:
            raise ValueError(f"Structure '{name}' is already registered")
        _REGISTRY[name] = cls
        return cls

    return wrapper


def create_structure(name: str, size: int, **kwargs: Any) -> Any:
    """Instantiate a registered structure by name, passing *kwargs* (such as
    ``dtype``) through to its constructor."""
    try:
        cls = _REGISTRY[name]
    except KeyError:
        available = ", ".join(sorted(_REGISTRY)) or "(none)"
        raise ValueError(f"Unknown structure '{name}'. Available: {available}") from None
    return cls(size, **kwargs)


def available_structures() -> list[str]:
    """Return sorted list of registered structure names."""
    return sorted(_REGISTRY)
