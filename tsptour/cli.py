import argparse
import logging
import sys

from .deadline import Deadline
from .io import write_tour
from .solver import TourSolver
from .solver_base import SolverConfig
from .tsp import TSPInstance

logger = logging.getLogger("tsptour")


def setup_logging(level: str = "INFO"):
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('[%(asctime)s][%(name)s][%(levelname)s]: %(message)s',
                                           datefmt='%Y-%m-%d %H:%M:%S'))
    root = logging.getLogger("tsptour")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper()))


def build_parser():
    ap = argparse.ArgumentParser(prog="tsptour",
                                 description="Nearest-neighbor + 2-opt tour for whitespace-delimited (id x y) cities.")
    ap.add_argument("input", nargs="?", help="city file; the tour is written to <input>.tour")
    ap.add_argument("--time-limit", type=float, default=None, help="seconds before the search stops (default 300)")
    ap.add_argument("--nn-starts", type=int, default=None, help="sampled start cities on large instances (default 35)")
    ap.add_argument("--config", default=None, help="YAML file with solver settings")
    ap.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap


def load_config(args) -> SolverConfig:
    overrides = {"time_limit": args.time_limit, "nn_starts": args.nn_starts}
    if args.config:
        return SolverConfig.from_yaml(args.config, **overrides)
    return SolverConfig(**{k: v for k, v in overrides.items() if v is not None})


def main(argv=None) -> int:
    ap = build_parser()
    args, extra = ap.parse_known_args(argv)
    setup_logging(args.log_level)

    if args.input is None or extra:
        ap.print_usage(sys.stderr)
        logger.error("Program requires exactly one input file as command line entry%s.",
                     f" (unexpected: {' '.join(extra)})" if extra else "")
        return 1

    try:
        cfg = load_config(args)
    except (OSError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    deadline = Deadline.started(cfg.time_limit)
    try:
        instance = TSPInstance.from_file(args.input)
    except OSError as e:
        logger.error("Unable to open input file %s: %s", args.input, e)
        return 1

    result = TourSolver(instance, cfg, deadline).run()
    logger.info("Program has evaluated %s for pseudo optimal TSP solution (cost %s%s).",
                args.input, result.cost, ", timed out" if result.timed_out else "")
    write_tour(args.input, result.tour, result.cost)
    return 0


if __name__ == "__main__":
    sys.exit(main())
