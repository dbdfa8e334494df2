"""
Random samples used as benchmark inputs.
"""

import numpy as np
from typing import Iterator, Optional


class RandomSamples:
    """`count` uniformly distributed numbers in [low, high]"""

    def __init__(self, low, high, count: int, dtype=np.float32, seed: Optional[int] = None):
        self.low = low
        self.high = high
        self.count = count
        self.dtype = np.dtype(dtype)
        self.rng = np.random.RandomState(seed)

    def __len__(self) -> int:
        return self.count

    def vector(self) -> np.ndarray:
        """Draw all the samples at once"""
        if np.issubdtype(self.dtype, np.integer):
            # randint excludes its upper bound
            values = self.rng.randint(self.low, self.high + 1, size=self.count, dtype=np.int64)
        else:
            values = self.rng.uniform(self.low, self.high, size=self.count)
        return values.astype(self.dtype)

    def __iter__(self) -> Iterator:
        return iter(self.vector().tolist())
