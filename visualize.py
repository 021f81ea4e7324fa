import os, argparse
import matplotlib.pyplot as plt
import imageio

from tsptour import TSPInstance, SolverConfig, TourSolver


def plot_tour(coords, tour, title, save_path):
    xs = [coords[i][0] for i in tour] + [coords[tour[0]][0]]
    ys = [coords[i][1] for i in tour] + [coords[tour[0]][1]]
    plt.figure(figsize=(5,5))
    plt.plot([c[0] for c in coords], [c[1] for c in coords], "o")
    plt.plot(xs, ys, "-")
    plt.title(title)
    plt.axis("equal")
    plt.tight_layout()
    plt.savefig(save_path, dpi=120, bbox_inches="tight")
    plt.close()


def visualize(inst, cfg, outdir, step=5, gif=False):
    os.makedirs(outdir, exist_ok=True)
    res = TourSolver(inst, cfg).run()
    coords = inst.coords
    name = os.path.basename(inst.name)

    final_path = os.path.join(outdir, f"{name}_tour.png")
    status = "timed out" if res.timed_out else "converged"
    plot_tour(coords, res.tour, f"{name}\ncost={res.cost} ({status})", final_path)
    print("Saved:", final_path)

    if not gif or not res.history_tours:
        return

    frames = []
    for it in range(0, len(res.history_tours), step):
        frame_path = os.path.join(outdir, f"{name}_frame_{it:04d}.png")
        plot_tour(coords, res.history_tours[it], f"2-opt pass {it}\ncost={res.history_costs[it]}", frame_path)
        frames.append(frame_path)

    gif_path = os.path.join(outdir, f"{name}_two_opt.gif")
    with imageio.get_writer(gif_path, mode="I", duration=0.6) as writer:
        for fp in frames + [final_path]:
            writer.append_data(imageio.v2.imread(fp))

    print("Saved:", gif_path)

def main():
    p = argparse.ArgumentParser()
    p.add_argument("input", nargs="?", help="city file (id x y per city); random instance if omitted")
    p.add_argument("--n", type=int, default=60, help="number of random cities")
    p.add_argument("--square", type=int, default=1000)
    p.add_argument("--seed", type=int, default=321)
    p.add_argument("--time-limit", type=float, default=60.0)
    p.add_argument("--outdir", default="viz")
    p.add_argument("--step", type=int, default=5, help="frame every k passes")
    p.add_argument("--gif", action="store_true")
    args = p.parse_args()

    if args.input:
        inst = TSPInstance.from_file(args.input)
    else:
        inst = TSPInstance.random_euclidean(n=args.n, seed=args.seed, square_size=args.square, name=f"viz{args.n}")
    cfg = SolverConfig(time_limit=args.time_limit, record_tours=args.gif)
    visualize(inst, cfg, args.outdir, step=args.step, gif=args.gif)

if __name__ == "__main__":
    main()
