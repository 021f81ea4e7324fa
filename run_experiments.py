# run_experiments.py
import os, json, argparse, tempfile, shutil
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import imageio

from tsptour import TSPInstance, SolverConfig, TourSolver
from tsptour.experiments import run_repeated_trials, run_parameter_sweep

OUTDIR = os.path.dirname(os.path.abspath(__file__))


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def plot_scatter(details_by_size, save_path):
    plt.figure()
    sizes = list(details_by_size.keys())
    for i, n in enumerate(sizes, start=1):
        costs = [c for (c, t, tour) in details_by_size[n]]
        x = np.random.normal(loc=i, scale=0.03, size=len(costs))
        plt.plot(x, costs, "o")
    plt.xticks(range(1, len(sizes) + 1), [str(n) for n in sizes])
    plt.xlabel("Cities")
    plt.ylabel("Final tour cost")
    plt.title("Tour costs across random instances")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_convergence(inst, cfg, save_path):
    res = TourSolver(inst, cfg).run()
    plt.figure()
    plt.plot(res.history_costs)
    plt.xlabel("2-opt pass")
    plt.ylabel("Tour cost")
    plt.title(f"2-opt convergence ({inst.n_cities()} cities)")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def make_gif(inst, cfg, save_gif, step=5, frames_dir=None, keep_frames=False):
    """Render the tour after every `step`-th 2-opt pass into a GIF. Frames go to a temp folder by default."""
    cfg = SolverConfig(time_limit=cfg.time_limit, nn_starts=cfg.nn_starts,
                       exhaustive_below=cfg.exhaustive_below, record_tours=True)
    res = TourSolver(inst, cfg).run()
    coords = inst.coords
    history = res.history_tours or [res.tour]

    tmpdir_was_auto = False
    if frames_dir is None:
        frames_dir = tempfile.mkdtemp(prefix="two_opt_frames_")
        tmpdir_was_auto = True
    else:
        os.makedirs(frames_dir, exist_ok=True)

    frames = []
    passes = list(range(0, len(history), step))
    if passes[-1] != len(history) - 1:
        passes.append(len(history) - 1)
    cx = [c[0] for c in coords]
    cy = [c[1] for c in coords]
    for it in passes:
        tour = history[it]
        L = res.history_costs[it]
        xs = [coords[i][0] for i in tour] + [coords[tour[0]][0]]
        ys = [coords[i][1] for i in tour] + [coords[tour[0]][1]]

        plt.figure(figsize=(5, 5))
        plt.plot(cx, cy, "o")
        plt.plot(xs, ys, "-")
        plt.title(f"2-opt\npass={it} cost={L}")
        plt.axis("equal")
        plt.tight_layout()
        frame_path = os.path.join(frames_dir, f"two_opt_{it:04d}.png")
        plt.savefig(frame_path, dpi=120, bbox_inches="tight")
        plt.close()
        frames.append(frame_path)

    ensure(save_gif)
    with imageio.get_writer(save_gif, mode="I", duration=0.6) as w:
        for fp in frames:
            w.append_data(imageio.v2.imread(fp))

    if not keep_frames and tmpdir_was_auto:
        shutil.rmtree(frames_dir, ignore_errors=True)
    elif keep_frames:
        print("Frames saved in:", frames_dir)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--sizes", type=int, nargs="+", default=[50, 100, 200])
    ap.add_argument("--square", type=int, default=1000)
    ap.add_argument("--runs", type=int, default=5)
    ap.add_argument("--time-limit", type=float, default=30.0)
    ap.add_argument("--sweep-n", type=int, default=300, help="instance size for the nn_starts sweep")
    ap.add_argument("--visualize", action="store_true", help="save a 2-opt GIF for the smallest size")
    ap.add_argument("--keep-frames", action="store_true", help="keep the PNG frames used for the GIF")
    ap.add_argument("--frames-dir", default=None, help="where to store frames (if keeping them)")
    args = ap.parse_args()

    cfg = SolverConfig(time_limit=args.time_limit)

    # repeated trials per size
    records = []
    details_by_size = {}
    for n in args.sizes:
        stats, details = run_repeated_trials(n, cfg, n_runs=args.runs, square_size=args.square)
        print(n, json.dumps(stats, indent=2))
        records.append(stats)
        details_by_size[n] = details

    df_summary = pd.DataFrame.from_records(records)
    summary_csv = os.path.join(OUTDIR, "results_summary.csv")
    df_summary.to_csv(summary_csv, index=False)
    plot_scatter(details_by_size, os.path.join(OUTDIR, "results_distribution.png"))

    inst = TSPInstance.random_euclidean(n=min(args.sizes), seed=123, square_size=args.square,
                                        name=f"demo{min(args.sizes)}")
    plot_convergence(inst, cfg, os.path.join(OUTDIR, "convergence_two_opt.png"))

    # sampled starts only matter above the exhaustive threshold
    rows = run_parameter_sweep(
        args.sweep_n, {"nn_starts": [5, 35, 70]}, base_cfg=cfg,
        n_runs=3, base_seed=500, csv_path=os.path.join(OUTDIR, "nn_starts_sweep.csv")
    )
    print("Sweep evaluated:", len(rows))

    if args.visualize:
        gif_path = os.path.join(OUTDIR, "two_opt_convergence.gif")
        make_gif(inst, cfg, gif_path, step=5, frames_dir=args.frames_dir, keep_frames=args.keep_frames)
        print("Saved GIF:", gif_path)


if __name__ == "__main__":
    main()
