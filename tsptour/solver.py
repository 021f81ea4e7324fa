from __future__ import annotations
import logging
from typing import Optional, Union

from .deadline import Deadline
from .nearest_neighbor import MultiStartNearestNeighbor
from .solver_base import SolverConfig, SolveResult, Tour
from .tsp import DistanceMatrix, TSPInstance
from .two_opt import TwoOptOptimizer

logger = logging.getLogger(__name__)


class TourSolver:
    """Nearest-neighbor construction followed by 2-opt, sharing one deadline."""

    def __init__(self, problem: Union[TSPInstance, DistanceMatrix], cfg: Optional[SolverConfig] = None,
                 deadline: Optional[Deadline] = None):
        self.cfg = cfg or SolverConfig()
        # the clock starts before the matrix is built
        self.deadline = deadline or Deadline.started(self.cfg.time_limit)
        if isinstance(problem, TSPInstance):
            logger.info("Calculating distances between %d cities ...", problem.n_cities())
            self.D = problem.distance_matrix()
        else:
            self.D = problem
        self.n = len(self.D)

    def run(self) -> SolveResult:
        constructor = MultiStartNearestNeighbor(self.D, self.cfg, self.deadline)
        tour, timed_out = constructor.run()

        if not tour.is_complete(self.n):
            logger.warning("No nearest-neighbor tour completed in time; using the identity order.")
            order = list(range(self.n))
            tour = Tour(order=order, cost=self.D.tour_cost(order))

        initial_cost = tour.cost
        converged = False
        history_costs = [tour.cost]
        history_tours = None
        if not timed_out:
            optimizer = TwoOptOptimizer(self.D, self.cfg, self.deadline)
            stats = optimizer.run(tour)
            timed_out = stats.timed_out
            converged = stats.converged
            history_costs = optimizer.history_costs
            if self.cfg.record_tours:
                history_tours = optimizer.history_tours

        elapsed = self.deadline.elapsed()
        logger.info("Calculations completed in %.3f seconds.", elapsed)
        return SolveResult(tour=tour.order, cost=tour.cost, initial_cost=initial_cost,
                           timed_out=timed_out, converged=converged, history_costs=history_costs,
                           config=self.cfg, elapsed_sec=elapsed, history_tours=history_tours)
