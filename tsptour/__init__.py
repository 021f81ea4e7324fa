from .tsp import TSPInstance, DistanceMatrix
from .deadline import Deadline
from .solver_base import SolverConfig, SolveResult, Tour
from .nearest_neighbor import MultiStartNearestNeighbor
from .two_opt import TwoOptOptimizer, OptimizeStats
from .solver import TourSolver
from .io import load_cities, write_tour
from .experiments import run_parameter_sweep, run_repeated_trials
