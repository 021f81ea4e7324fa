from __future__ import annotations
import itertools, statistics, os
from typing import Dict, Any, List, Optional
from dataclasses import asdict
import csv
from .tsp import TSPInstance
from .solver_base import SolverConfig
from .solver import TourSolver


def run_repeated_trials(n_cities: int, cfg: SolverConfig, n_runs: int = 10, base_seed: int = 42,
                        square_size: int = 1000):
    """Solve `n_runs` random instances (seeds base_seed, base_seed+1, ...) and summarise the costs."""
    costs = []
    initial_costs = []
    times = []
    timeouts = 0
    details = []
    for r in range(n_runs):
        inst = TSPInstance.random_euclidean(n_cities, seed=base_seed + r, square_size=square_size,
                                            name=f"random{n_cities}_{base_seed + r}")
        res = TourSolver(inst, cfg).run()
        costs.append(res.cost)
        initial_costs.append(res.initial_cost)
        times.append(res.elapsed_sec)
        timeouts += int(res.timed_out)
        details.append((res.cost, res.elapsed_sec, res.tour))
    improvement = [(i - c) / i if i else 0.0 for i, c in zip(initial_costs, costs)]
    stats = {
        "mean_cost": statistics.mean(costs),
        "std_cost": statistics.stdev(costs) if len(costs) > 1 else 0.0,
        "min_cost": min(costs),
        "max_cost": max(costs),
        "median_cost": statistics.median(costs),
        "mean_initial_cost": statistics.mean(initial_costs),
        "mean_improvement": statistics.mean(improvement),
        "mean_time": statistics.mean(times),
        "timeouts": timeouts,
        "n_cities": n_cities,
        "n_runs": n_runs,
    }
    return stats, details


def run_parameter_sweep(n_cities: int, param_grid: Dict[str, List[Any]],
                        base_cfg: Optional[SolverConfig] = None, n_runs: int = 5, base_seed: int = 100,
                        csv_path: Optional[str] = None):
    base_cfg = base_cfg or SolverConfig()
    keys = sorted(param_grid.keys())
    rows = []
    for values in itertools.product(*[param_grid[k] for k in keys]):
        cfg = SolverConfig(**{**asdict(base_cfg), **dict(zip(keys, values))})
        stats, _ = run_repeated_trials(n_cities, cfg, n_runs=n_runs, base_seed=base_seed)
        row = {**{k: getattr(cfg, k) for k in keys}, **stats}
        rows.append(row)
        if csv_path is not None:
            write_header = not os.path.exists(csv_path)
            with open(csv_path, "a", newline="") as f:
                w = csv.DictWriter(f, fieldnames=row.keys())
                if write_header:
                    w.writeheader()
                w.writerow(row)
    return rows
