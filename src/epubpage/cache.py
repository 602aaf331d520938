"""Memoisation of the last generated tree."""

from __future__ import annotations

from typing import Generic, TypeVar


T = TypeVar("T")


class GenerationCache(Generic[T]):
    """Single cached value guarded by a dirty flag.

    The cache starts dirty. `store` records a value and marks it clean;
    `invalidate` marks it dirty again without discarding the previous value.
    """

    __slots__ = ("_dirty", "_value")

    def __init__(self) -> None:
        self._value: T | None = None
        self._dirty = True

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def value(self) -> T | None:
        """Return the cached value while clean, ``None`` otherwise."""
        if self._dirty:
            return None
        return self._value

    def store(self, value: T) -> T:
        self._value = value
        self._dirty = False
        return value

    def invalidate(self) -> None:
        self._dirty = True


__all__ = ["GenerationCache"]
