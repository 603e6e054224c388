# visualize.py
import os
import matplotlib.pyplot as plt

LEVEL_ORDER = ["L1", "L2", "L3", "RAM"]


def _ensure_dir(outpath):
    dirname = os.path.dirname(outpath)
    if dirname:
        os.makedirs(dirname, exist_ok=True)


def plot_metrics_history(runs, outpath):
    """Miss rate and CPI over the last recorded steps of every run."""
    _ensure_dir(outpath)
    fig, (ax_miss, ax_cpi) = plt.subplots(2, 1, figsize=(9, 6), sharex=True)
    for key, run in sorted(runs.items()):
        history = run["history"]
        steps = [m["total_accesses"] for m in history]
        style = "-" if run["optimized"] else "--"
        ax_miss.plot(steps, [m["miss_rate"] for m in history], style, linewidth=1, label=key)
        ax_cpi.plot(steps, [m["cpi"] for m in history], style, linewidth=1, label=key)
    ax_miss.set_ylabel("L1 miss rate (%)")
    ax_cpi.set_ylabel("CPI")
    ax_cpi.set_xlabel("Access")
    ax_miss.grid(True)
    ax_cpi.grid(True)
    ax_miss.legend(fontsize="x-small", ncol=2)
    fig.suptitle("Metrics History")
    fig.tight_layout()
    fig.savefig(outpath)
    plt.close(fig)


def plot_pattern_comparison(summary, outpath):
    _ensure_dir(outpath)
    patterns = list(summary["patterns"])
    baseline = [summary["patterns"][p]["baseline"]["metrics"]["cpi"] for p in patterns]
    optimized = [summary["patterns"][p]["optimized"]["metrics"]["cpi"] for p in patterns]
    xs = range(len(patterns))
    width = 0.4
    plt.figure(figsize=(8, 4))
    plt.bar([x - width / 2 for x in xs], baseline, width, label="baseline")
    plt.bar([x + width / 2 for x in xs], optimized, width, label="optimized")
    plt.xticks(list(xs), patterns)
    plt.ylabel("CPI")
    plt.title("CPI by Access Pattern")
    plt.legend()
    plt.grid(True, axis="y")
    plt.tight_layout()
    plt.savefig(outpath)
    plt.close()


def plot_hit_levels(hit_levels, title, outpath):
    _ensure_dir(outpath)
    labels = [level for level in LEVEL_ORDER if hit_levels.get(level)]
    sizes = [hit_levels[level] for level in labels]
    plt.figure(figsize=(4, 4))
    plt.pie(sizes, labels=labels, autopct='%1.1f%%')
    plt.title(title)
    plt.tight_layout()
    plt.savefig(outpath)
    plt.close()
