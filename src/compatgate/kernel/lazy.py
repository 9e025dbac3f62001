"""Compute-once value holder."""

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class LazyValue(Generic[T]):
    """Value produced by calling ``producer`` on the first ``get()``.

    Every later ``get()`` returns the stored value, even when the producer
    returned ``None``. Not synchronized: a run is single-threaded. If the
    producer raises, nothing is stored and the next ``get()`` calls it again.
    """

    def __init__(self, producer: Callable[[], T]):
        self._producer = producer
        self._value = _UNSET

    def get(self) -> T:
        if self._value is _UNSET:
            self._value = self._producer()
        return self._value

    @property
    def resolved(self) -> bool:
        """True once the producer has returned."""
        return self._value is not _UNSET
