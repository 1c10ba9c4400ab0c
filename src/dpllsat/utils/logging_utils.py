"""
Logging utilities for the DPLL solver.

This module configures the package logger from the solver configuration and
provides a SearchTraceLogger that records search events (decisions,
conflicts, backtracks, results) in JSON Lines or CSV format, with a
NumpyJSONEncoder for the numpy values that come out of an Assignment.
"""

import csv
import json
import logging
import os
import time
from datetime import datetime
from typing import Any

import numpy as np

from .exceptions import ConfigurationError

PACKAGE_LOGGER = "dpllsat"


class NumpyJSONEncoder(json.JSONEncoder):
    """JSON encoder that can handle NumPy arrays and scalars."""

    def default(self, obj):
        """Convert numpy objects to standard Python types."""
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.bool_):
            return bool(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


def setup_logging(config=None) -> logging.Logger:
    """
    Configure the package logger from a SolverConfig.

    Args:
        config: SolverConfig to read ``logging.level`` and ``logging.format``
            from; the global configuration is used when omitted

    Returns:
        The configured package logger
    """
    if config is None:
        from ..solvers.config import get_config

        config = get_config()

    level_name = str(config.get("logging.level", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown logging level: {level_name}")

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(config.get("logging.format")))
        logger.addHandler(handler)

    return logger


class SearchTraceLogger:
    """
    A logger for structured search events.

    Each event type goes to its own file in the output directory, written as
    JSON Lines or CSV.
    """

    FORMAT_JSON = "json"
    FORMAT_CSV = "csv"

    def __init__(
        self,
        output_dir: str,
        run_name: str,
        format_type: str = "json",
    ):
        """
        Initialize the trace logger.

        Args:
            output_dir: Directory to save trace files in
            run_name: Name of the run (used in filenames)
            format_type: Format to save traces in ("json" or "csv")
        """
        if format_type not in (self.FORMAT_JSON, self.FORMAT_CSV):
            raise ConfigurationError(f"Unknown trace format: {format_type}")

        self.output_dir = output_dir
        self.run_name = run_name
        self.format_type = format_type

        os.makedirs(output_dir, exist_ok=True)

        self.files = {}
        self.write_counts = {}
        self.metadata = {
            "run_name": run_name,
            "start_time": datetime.now().isoformat(),
            "trace_files": {},
        }

    def _get_file(self, event_type: str) -> tuple:
        """
        Get the file handle for a given event type.

        Returns:
            Tuple of (file_handle, is_new)
        """
        if event_type not in self.files:
            ext = ".jsonl" if self.format_type == self.FORMAT_JSON else ".csv"
            filepath = os.path.join(self.output_dir, f"{self.run_name}_{event_type}{ext}")
            self.metadata["trace_files"][event_type] = filepath

            file = open(
                filepath,
                "w",
                newline="" if self.format_type == self.FORMAT_CSV else None,
            )
            self.files[event_type] = file
            self.write_counts[event_type] = 0
            return file, True

        return self.files[event_type], False

    def _write_event(self, event_type: str, data: dict[str, Any]):
        file, is_new = self._get_file(event_type)

        if self.format_type == self.FORMAT_JSON:
            file.write(json.dumps(data, cls=NumpyJSONEncoder) + "\n")
        else:
            writer = csv.DictWriter(file, fieldnames=list(data.keys()))
            if is_new:
                writer.writeheader()
            writer.writerow(data)
        file.flush()

        self.write_counts[event_type] += 1

    def log_decision(self, depth: int, variable: int, polarity: bool):
        """
        Log a branching decision.

        Args:
            depth: Decision depth of the search node
            variable: Variable branched on
            polarity: Polarity tried first
        """
        self._write_event(
            "decision",
            {
                "depth": depth,
                "variable": variable,
                "polarity": polarity,
                "timestamp": time.time(),
            },
        )

    def log_conflict(self, depth: int, num_clauses: int):
        """Log a conflict (an empty clause) found at a search node."""
        self._write_event(
            "conflict",
            {"depth": depth, "num_clauses": num_clauses, "timestamp": time.time()},
        )

    def log_backtrack(self, depth: int, variable: int):
        """Log the retry of ``variable`` with the opposite polarity."""
        self._write_event(
            "backtrack",
            {"depth": depth, "variable": variable, "timestamp": time.time()},
        )

    def log_result(
        self,
        status: str,
        runtime: float,
        assignment: np.ndarray | None = None,
        statistics: dict | None = None,
    ):
        """
        Log the outcome of a solve call.

        Args:
            status: Solver status value
            runtime: Wall time in seconds
            assignment: Raw assignment array (0 unassigned, 1 true, -1 false)
            statistics: Search statistics
        """
        data = {
            "status": status,
            "runtime": runtime,
            "assignment": assignment if assignment is not None else [],
            "statistics": statistics or {},
            "timestamp": time.time(),
        }
        if self.format_type == self.FORMAT_CSV:
            data["assignment"] = json.dumps(data["assignment"], cls=NumpyJSONEncoder)
            data["statistics"] = json.dumps(data["statistics"], cls=NumpyJSONEncoder)
        self._write_event("result", data)

    def close(self):
        """Close all open file handles."""
        for file in self.files.values():
            file.close()
        self.files = {}

    def finalize(self) -> str:
        """
        Close all files and write a metadata file with record counts.

        Returns:
            Path to the metadata file
        """
        self.close()

        self.metadata["end_time"] = datetime.now().isoformat()
        self.metadata["record_counts"] = self.write_counts

        metadata_path = os.path.join(self.output_dir, f"{self.run_name}_metadata.json")
        with open(metadata_path, "w") as f:
            json.dump(self.metadata, f, indent=2)

        return metadata_path


def create_trace_logger(
    run_name: str,
    output_dir: str = "logs",
    format_type: str = "json",
) -> SearchTraceLogger:
    """
    Create a search trace logger with default settings.

    Args:
        run_name: Name of the run
        output_dir: Directory to save traces in
        format_type: Format to save traces in ("json" or "csv")

    Returns:
        SearchTraceLogger instance
    """
    return SearchTraceLogger(
        output_dir=output_dir,
        run_name=run_name,
        format_type=format_type,
    )
