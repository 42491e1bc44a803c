"""
Lazily recomputed values for derived G-code fields.

A CachedValue is either stale or holds a computed value. Reading a stale
value runs the compute function; callers invalidate it whenever the field
it derives from changes.
"""

from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class CachedValue(Generic[T]):
    """Two-state cell: stale, or holding the last computed value."""

    def __init__(self, compute: Callable[[], T]):
        self._compute = compute
        self._value: T | None = None
        self._stale = True

    @property
    def stale(self) -> bool:
        return self._stale

    def invalidate(self) -> None:
        self._stale = True
        self._value = None

    def get(self) -> T:
        if self._stale:
            self._value = self._compute()
            self._stale = False
        return self._value  # type: ignore[return-value]
