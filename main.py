# main.py
import os
import sys
from benchmark import BenchmarkRunner
from config import load_config, SimulatorError, PATTERN_DESCRIPTIONS
from visualize import plot_metrics_history, plot_pattern_comparison, plot_hit_levels


def main(config_path="config.json"):
    if not os.path.exists(config_path):
        print(f"error: config file not found: {config_path}", file=sys.stderr)
        sys.exit(2)
    cfg = load_config(config_path)
    try:
        runner = BenchmarkRunner(cfg)
    except SimulatorError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)
    print("Starting benchmark with config:", cfg.get("benchmark", {}))
    summary, runs = runner.run()
    out_cfg = cfg.get("output", {})
    results_path = runner.save_results(summary, out_cfg)
    for pattern, result in summary["patterns"].items():
        print("{:<30} baseline CPI {:.3f}  optimized CPI {:.3f}  speedup x{:.2f}".format(
            PATTERN_DESCRIPTIONS[pattern]["name"], result["baseline"]["metrics"]["cpi"],
            result["optimized"]["metrics"]["cpi"], result["speedup"]))
    print("Results saved to:", results_path)

    # Plots
    plot_metrics_history(runs, out_cfg.get("history_plot", "results/metrics_history.png"))
    plot_pattern_comparison(summary, out_cfg.get("comparison_plot", "results/pattern_comparison.png"))
    first = runner.patterns[0]
    plot_hit_levels(summary["patterns"][first]["baseline"]["hit_levels"],
                    f"Hit Levels: {PATTERN_DESCRIPTIONS[first]['name']}",
                    out_cfg.get("hit_level_plot", "results/hit_levels.png"))
    print("Plots saved in", out_cfg.get("results_dir", "results") + "/")
    return summary


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "config.json")
