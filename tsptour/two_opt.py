from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional

from .deadline import Deadline
from .solver_base import SolverConfig, Tour
from .tsp import DistanceMatrix

logger = logging.getLogger(__name__)


@dataclass
class OptimizeStats:
    passes: int = 0
    swaps: int = 0
    converged: bool = False
    timed_out: bool = False


class TwoOptOptimizer:
    """Best-improvement 2-opt: each pass applies only the single best swap.

    The edge closing the tour (last city back to the first) is never a
    candidate. The deadline is checked once per full pass, so one pass may
    overrun the budget.
    """

    def __init__(self, dist_matrix: DistanceMatrix, cfg: Optional[SolverConfig] = None,
                 deadline: Optional[Deadline] = None):
        self.D = dist_matrix
        self.n = len(dist_matrix)
        self.cfg = cfg or SolverConfig()
        self.deadline = deadline or Deadline.started(self.cfg.time_limit)
        # per-pass history for visualization
        self.history_costs: List[float] = []
        self.history_tours: List[List[int]] = []

    def best_move(self, order: List[int]):
        """Scan every non-adjacent edge pair; return (gain, i, j) of the best swap or None."""
        D, n = self.D, self.n
        improve = 0
        move = None
        for i in range(n - 2):
            a, b = order[i], order[i + 1]
            row_a, row_b = D[a], D[b]
            d_ab = row_a[b]
            for j in range(i + 2, n - 1):
                c, e = order[j], order[j + 1]
                check = (d_ab + D[c][e]) - (row_a[c] + row_b[e])
                if check > improve:
                    improve = check
                    move = (i, j)
        if move is None:
            return None
        return improve, move[0], move[1]

    @staticmethod
    def apply_move(tour: Tour, gain: int, i: int, j: int):
        # reverse positions i+1..j, e.g. A-(D-C-B)-E becomes A-(B-C-D)-E
        tour.order[i + 1:j + 1] = tour.order[i + 1:j + 1][::-1]
        tour.cost -= gain

    def run(self, tour: Tour) -> OptimizeStats:
        """Improve `tour` in place until no swap helps or the deadline passes."""
        if len(tour.order) != self.n:
            raise ValueError(f"tour visits {len(tour.order)} cities, matrix has {self.n}")

        logger.info("Optimizing locally ...")
        stats = OptimizeStats()
        self.history_costs = [tour.cost]
        self.history_tours = [list(tour.order)] if self.cfg.record_tours else []

        while True:
            found = self.best_move(tour.order)
            stats.passes += 1
            if found is not None:
                gain, i, j = found
                self.apply_move(tour, gain, i, j)
                stats.swaps += 1
                self.history_costs.append(tour.cost)
                if self.cfg.record_tours:
                    self.history_tours.append(list(tour.order))
                logger.debug("pass %d: reversed %d..%d, gain %d, cost %s",
                             stats.passes, i + 1, j, gain, tour.cost)
            else:
                stats.converged = True

            if self.deadline.expired():
                logger.info("Time limit reached (%s seconds).", self.deadline.limit)
                stats.timed_out = True
                return stats
            if stats.converged:
                break

        logger.info("Done. %d swaps in %d passes, cost %s.", stats.swaps, stats.passes, tour.cost)
        return stats
