from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import List, Tuple, Optional, Sequence

import numpy as np

from .io import load_cities


class DistanceMatrix:
    """Symmetric table of rounded Euclidean distances, zero on the diagonal.

    Rows are stored as tuples so the table cannot be mutated after it is built.
    """

    def __init__(self, rows: Sequence[Sequence[int]]):
        self._rows = tuple(tuple(int(v) for v in row) for row in rows)
        n = len(self._rows)
        for row in self._rows:
            if len(row) != n:
                raise ValueError("distance matrix must be square")

    @classmethod
    def from_coords(cls, coords: Sequence[Tuple[int, int]]) -> "DistanceMatrix":
        n = len(coords)
        if n == 0:
            return cls([])
        pts = np.asarray(coords, dtype=np.int64).reshape(n, 2)
        D = np.zeros((n, n), dtype=np.int64)
        # upper triangle only, mirrored below the diagonal
        iu, ju = np.triu_indices(n, k=1)
        diff = pts[iu] - pts[ju]
        sq = diff[:, 0] * diff[:, 0] + diff[:, 1] * diff[:, 1]
        d = np.floor(np.sqrt(sq) + 0.5).astype(np.int64)
        D[iu, ju] = d
        D[ju, iu] = d
        return cls(D.tolist())

    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, i: int) -> Tuple[int, ...]:
        return self._rows[i]

    def __iter__(self):
        return iter(self._rows)

    def tour_cost(self, order: Sequence[int]) -> int:
        """Recompute the length of the closed tour visiting `order`."""
        n = len(order)
        total = 0
        for k in range(n):
            i, j = order[k], order[(k + 1) % n]
            total += self._rows[i][j]
        return total


@dataclass
class TSPInstance:
    coords: List[Tuple[int, int]]
    name: str = "euclidean_tsp"

    @staticmethod
    def random_euclidean(n: int, seed: Optional[int] = None, square_size: int = 1000, name: str = "random_euclidean"):
        rng = random.Random(seed)
        coords = [(rng.randint(0, square_size), rng.randint(0, square_size)) for _ in range(n)]
        return TSPInstance(coords=coords, name=name)

    @staticmethod
    def from_file(path: str) -> "TSPInstance":
        return TSPInstance(coords=load_cities(path), name=str(path))

    def n_cities(self) -> int:
        return len(self.coords)

    def distance(self, i: int, j: int) -> int:
        (x1, y1), (x2, y2) = self.coords[i], self.coords[j]
        return int(math.floor(math.hypot(x1 - x2, y1 - y2) + 0.5))

    def distance_matrix(self) -> DistanceMatrix:
        return DistanceMatrix.from_coords(self.coords)
