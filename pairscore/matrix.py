"""Square numeric matrix holding pairwise scores."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple, Union

import numpy as np

from pairscore.errors import ConfigurationError

ArrayLike = Union[np.ndarray, Sequence[Sequence[float]]]


class Matrix:
    """An N x N matrix of float64 values.

    The constructor copies its input, so later changes to the source array
    are not seen here. Dimensions are fixed at construction.
    """

    def __init__(self, values: ArrayLike):
        arr = np.array(values, dtype=float)
        if arr.ndim < 2 and arr.size == 0:
            arr = np.zeros((0, 0), dtype=float)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ConfigurationError(
                f"Matrix must be square, got shape {arr.shape}"
            )
        self._value = arr

    @classmethod
    def zeros(cls, n: int) -> "Matrix":
        return cls(np.zeros((n, n), dtype=float))

    @property
    def height(self) -> int:
        return self._value.shape[0]

    @property
    def width(self) -> int:
        return self._value.shape[1]

    @property
    def values(self) -> np.ndarray:
        """A read-only copy of the underlying array."""
        out = self._value.copy()
        out.setflags(write=False)
        return out

    def get_value(self, i: int, j: int) -> float:
        return float(self._value[i, j])

    def set_value(self, i: int, j: int, value: float) -> None:
        self._value[i, j] = value

    def get_row(self, i: int) -> np.ndarray:
        return self._value[i].copy()

    def copy(self) -> "Matrix":
        return Matrix(self._value)

    def find_min_max(self) -> Optional[Tuple[float, float]]:
        """Return ``(min, max)`` over all values, or None if empty."""
        if self._value.size == 0:
            return None
        return float(self._value.min()), float(self._value.max())

    def reverse_range(self, max_to_zero: bool) -> None:
        """Flip the value range in place.

        With *max_to_zero* each value x becomes ``max - x``, so the maximum
        maps to zero. Otherwise x becomes ``min + max - x``, which swaps the
        minimum and maximum and keeps the overall range.
        """
        min_max = self.find_min_max()
        if min_max is None:
            return
        subtract_from = min_max[1] if max_to_zero else min_max[0] + min_max[1]
        np.subtract(subtract_from, self._value, out=self._value)

    def multiply(self, by: float) -> None:
        self._value *= by

    def total(self) -> float:
        return float(self._value.sum())

    def equals(self, other: Optional["Matrix"], delta: float) -> bool:
        """True if *other* has the same shape and every value is within *delta*."""
        if other is None or self._value.shape != other._value.shape:
            return False
        return bool(np.all(np.abs(self._value - other._value) <= delta))

    def __repr__(self) -> str:
        return f"Matrix({self._value.tolist()!r})"
