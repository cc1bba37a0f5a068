"""Fixed-capacity ring of feature vectors."""

import numpy as np


class FeatureRing:
    """FIFO of at most `capacity` vectors; pushing onto a full ring overwrites the oldest."""

    def __init__(self, capacity: int, width: int, dtype: type = np.float32):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self.width = width
        self.dtype = dtype
        self._data = np.zeros((capacity, width), dtype=dtype)
        self._write_idx = 0
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def push(self, vector: np.ndarray) -> bool:
        """Append a vector. Returns True if the oldest vector was evicted."""
        evicted = self._count == self.capacity
        self._data[self._write_idx] = vector
        self._write_idx = (self._write_idx + 1) % self.capacity
        self._count = min(self._count + 1, self.capacity)
        return evicted

    def get_all(self) -> np.ndarray:
        """Return stored vectors oldest first, shape (len, width)."""
        if self._count == 0:
            return np.zeros((0, self.width), dtype=self.dtype)
        if self._count < self.capacity:
            return self._data[: self._count].copy()
        return np.roll(self._data, -self._write_idx, axis=0)

    def clear(self) -> None:
        """Reset ring."""
        self._write_idx = 0
        self._count = 0
