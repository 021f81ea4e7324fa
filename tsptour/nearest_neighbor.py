from __future__ import annotations
import logging
import math
from typing import List, Optional, Tuple

from .deadline import Deadline
from .solver_base import SolverConfig, Tour
from .tsp import DistanceMatrix

logger = logging.getLogger(__name__)


class MultiStartNearestNeighbor:
    """Nearest-neighbor tours from several start cities; the cheapest one wins.

    Small instances try every city as a start. Larger ones try every
    `n // nn_starts`-th city. The deadline is checked after each city is
    appended, and an attempt cut short by it is thrown away.
    """

    def __init__(self, dist_matrix: DistanceMatrix, cfg: Optional[SolverConfig] = None,
                 deadline: Optional[Deadline] = None):
        self.D = dist_matrix
        self.n = len(dist_matrix)
        self.cfg = cfg or SolverConfig()
        self.deadline = deadline or Deadline.started(self.cfg.time_limit)

    def stride(self) -> int:
        if self.n < self.cfg.exhaustive_below:
            return 1
        return max(1, self.n // self.cfg.nn_starts)

    def _grow_path(self, start: int) -> Optional[Tuple[List[int], int]]:
        """Greedy path from `start`; None if the deadline hit before it closed."""
        D, n = self.D, self.n
        visited = [False] * n
        visited[start] = True
        path = [start]
        cost = 0
        current = start
        for _ in range(n - 1):
            row = D[current]
            nxt, best = -1, math.inf
            for k in range(n):
                # strict '<' keeps the first city found at the minimum distance
                if not visited[k] and row[k] < best:
                    nxt, best = k, row[k]
            path.append(nxt)
            cost += best
            visited[nxt] = True
            current = nxt
            if self.deadline.expired():
                return None
        cost += D[current][start]
        return path, cost

    def run(self) -> Tuple[Tour, bool]:
        """Return the best completed tour and whether the deadline cut the search short."""
        if self.n <= 1:
            return Tour(order=list(range(self.n)), cost=0), False

        logger.info("Defining initial path ...")
        best = Tour()
        jump = self.stride()
        attempts = 0
        for start in range(0, self.n, jump):
            grown = self._grow_path(start)
            if grown is None:
                logger.info("Time limit reached (%s seconds).", self.deadline.limit)
                return best, True
            path, cost = grown
            attempts += 1
            if cost < best.cost:
                best = Tour(order=path, cost=cost)
                logger.debug("start %d: new best cost %d", start, cost)
        logger.info("Done. %d starts tried, best cost %s.", attempts, best.cost)
        return best, False
