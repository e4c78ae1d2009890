"""
Plotting utilities for solve logs.

Purpose: Generate matplotlib charts comparing mazes: frames spent,
    decision breakdown, and DFS path efficiency.

Inputs:
    - CSV log files from data/logs/
    - Output directory (docs/img/)

Outputs:
    - PNG plots

Params:
    input_pattern: str - Glob pattern for CSV files
    output_dir: str - Output directory for plots
"""

import argparse
import glob
import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd


DECISION_COLUMNS = ["accepted", "backtracks", "rejected_out", "rejected_wall", "rejected_seen"]


def load_logs(input_pattern):
    """Load CSV logs matching pattern."""
    csv_files = sorted(glob.glob(input_pattern))

    if not csv_files:
        print(f"No CSV files found matching {input_pattern}")
        return None

    dfs = []
    for csv_file in csv_files:
        try:
            dfs.append(pd.read_csv(csv_file))
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            print(f"Error loading {csv_file}: {e}")

    if not dfs:
        return None

    return pd.concat(dfs, ignore_index=True)


def summarize(df):
    """Mean of each metric per maze."""
    columns = ["frames"] + DECISION_COLUMNS + ["path_len", "solved", "efficiency"]
    return df.groupby("maze")[columns].mean().sort_index()


def plot_decisions(df, output_dir):
    """Stacked bar chart of decisions per maze. Returns the file path."""
    os.makedirs(output_dir, exist_ok=True)
    summary = summarize(df)

    fig, ax = plt.subplots(figsize=(10, 6))
    summary[DECISION_COLUMNS].plot(kind="bar", stacked=True, ax=ax)
    ax.set_xlabel("Maze")
    ax.set_ylabel("Decisions (mean per solve)")
    ax.set_title("DFS Decisions per Maze")
    ax.grid(True, alpha=0.3, axis='y')

    path = os.path.join(output_dir, "decisions.png")
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    print(f"Saved decisions plot to {path}")
    plt.close(fig)
    return path


def plot_efficiency(df, output_dir):
    """Bar chart of path efficiency (shortest / DFS) per solved maze. Returns the file path."""
    os.makedirs(output_dir, exist_ok=True)
    solved = df[df["solved"] == 1]
    summary = summarize(solved) if len(solved) else summarize(df)

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.bar(summary.index, summary["efficiency"], color="orange")
    ax.set_xlabel("Maze")
    ax.set_ylabel("Efficiency (shortest / DFS path)")
    ax.set_title("DFS Path Efficiency")
    ax.set_ylim([0, 1.05])
    ax.grid(True, alpha=0.3, axis='y')

    path = os.path.join(output_dir, "efficiency.png")
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    print(f"Saved efficiency plot to {path}")
    plt.close(fig)
    return path


def main(argv=None):
    """Main plotting function."""
    parser = argparse.ArgumentParser(description="Generate plots from solve logs")
    parser.add_argument('--in', '--input', dest='input_pattern',
                        default='data/logs/*.csv',
                        help='Input CSV file pattern (glob)')
    parser.add_argument('--out', '--output', dest='output_dir',
                        default='docs/img/',
                        help='Output directory for plots')

    args = parser.parse_args(argv)

    df = load_logs(args.input_pattern)

    if df is None:
        print("No data to plot")
        return 1

    print(f"Loaded {len(df)} log entries")

    plot_decisions(df, args.output_dir)
    plot_efficiency(df, args.output_dir)

    print(f"\nPlots saved to {args.output_dir}")
    return 0


if __name__ == "__main__":
    main()
