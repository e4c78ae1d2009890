"""
CSV logger for solve statistics.

Purpose: Log one row per solve to a CSV file with a fixed schema.

Inputs:
    - Maze name
    - Preset name
    - Metrics from SolveMetrics.finalize()

Outputs:
    - CSV file in data/logs/ (one file per maze and day)

Params:
    maze: str - Maze identifier
    preset: str - Config preset name
    log_dir: str - Output directory
"""

import csv
import os
from datetime import datetime


class SolveLogger:
    """CSV logger for solve statistics."""

    def __init__(self, maze: str, preset: str, log_dir: str = "data/logs"):
        """
        Initialize solve logger.

        Args:
            maze: Maze name (classic, corridor, ...)
            preset: Config preset (baseline, fast, slow)
            log_dir: Directory for CSV files
        """
        self.maze = maze
        self.preset = preset
        self.log_dir = str(log_dir)

        # Ensure logs directory exists
        os.makedirs(self.log_dir, exist_ok=True)

        # CSV schema
        self.csv_schema = [
            "timestamp",
            "maze",
            "preset",
            "frames",
            "accepted",
            "backtracks",
            "rejected_out",
            "rejected_wall",
            "rejected_seen",
            "path_len",
            "cpu_ms",
            "solved",
            "efficiency",
        ]

    def log(self, **metrics) -> str:
        """
        Append metrics to the CSV.

        Args:
            **metrics: Dictionary with metric values

        Returns:
            Path of the CSV file written
        """
        now = datetime.now()
        filename = os.path.join(self.log_dir, f"{self.maze}_{now.strftime('%Y%m%d')}.csv")

        row = {
            "timestamp": now.isoformat(timespec="seconds"),
            "maze": self.maze,
            "preset": self.preset,
        }
        for field in self.csv_schema[3:]:
            row[field] = metrics.get(field, 0)

        # Check if file exists to determine if we need headers
        file_exists = os.path.exists(filename)

        with open(filename, 'a', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=self.csv_schema)

            if not file_exists:
                writer.writeheader()

            writer.writerow(row)

        print(f"Logs saved to {filename}")
        return filename
