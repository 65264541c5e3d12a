"""
Logging utilities for the solver.

This module provides configure_logging() for the standard library logging
used throughout the package, a StructuredLogger that writes search events as
JSON Lines or CSV, and a SearchTracer that feeds the events of a DPLL search
into a StructuredLogger.
"""

import csv
import json
import logging
import os
import time
from datetime import datetime
from typing import Any

import numpy as np

from dpllsat.formula import Literal

PACKAGE_LOGGER = "dpllsat"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: int | str = logging.WARNING, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    Attach a stderr handler to the package logger.

    Calling it again replaces the handler instead of adding a second one.

    Args:
        level: Logging level (number or name such as "DEBUG")
        fmt: Format string for the handler

    Returns:
        The package logger
    """
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    return logger


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


class StructuredLogger:
    """
    A logger for structured data in various formats.

    This logger can output data in JSON Lines or CSV format.
    It maintains separate files for different event types.
    """

    FORMAT_JSON = "json"
    FORMAT_CSV = "csv"

    def __init__(self, output_dir: str, run_name: str, format_type: str = "json"):
        """
        Initialize the structured logger.

        Args:
            output_dir: Directory to save log files in
            run_name: Name of the run (used in filenames)
            format_type: Format to save logs in ("json" or "csv")
        """
        if format_type not in (self.FORMAT_JSON, self.FORMAT_CSV):
            raise ValueError(f"Unsupported log format: {format_type}")

        self.output_dir = output_dir
        self.run_name = run_name
        self.format_type = format_type

        os.makedirs(output_dir, exist_ok=True)

        self.files = {}
        self.write_counts = {}
        self.metadata = {
            "run_name": run_name,
            "start_time": datetime.now().isoformat(),
            "log_files": {},
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
            self.metadata["log_files"][event_type] = filepath

            file = open(
                filepath,
                "w",
                newline="" if self.format_type == self.FORMAT_CSV else None,
            )
            self.files[event_type] = file
            self.write_counts[event_type] = 0
            return file, True

        return self.files[event_type], False

    def log_event(self, event_type: str, data: dict[str, Any]) -> None:
        """
        Write an event to the log file of its type.

        Args:
            event_type: Type of event (used in the filename)
            data: Flat mapping of field names to values
        """
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

    def log_decision(self, step: int, variable: int, value: bool, depth: int) -> None:
        self.log_event(
            "decision",
            {
                "step": step,
                "variable": variable,
                "value": value,
                "depth": depth,
                "timestamp": time.time(),
            },
        )

    def log_backtrack(self, step: int, variable: int, value: bool, depth: int) -> None:
        self.log_event(
            "backtrack",
            {
                "step": step,
                "variable": variable,
                "value": value,
                "depth": depth,
                "timestamp": time.time(),
            },
        )

    def log_result(self, satisfiable: bool, statistics: dict[str, Any]) -> None:
        self.log_event(
            "result",
            {
                "satisfiable": satisfiable,
                **statistics,
                "timestamp": time.time(),
            },
        )

    def close(self):
        """Close all open file handles."""
        for file in self.files.values():
            file.close()
        self.files = {}

    def finalize(self) -> str:
        """
        Close all files and write a metadata file describing them.

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


class SearchTracer:
    """
    Search listener that records every decision, backtrack and the final
    verdict of a DPLL search in a StructuredLogger.
    """

    def __init__(self, structured_logger: StructuredLogger):
        self.structured_logger = structured_logger
        self.step = 0

    def on_decision(self, literal: Literal, depth: int) -> None:
        self.step += 1
        self.structured_logger.log_decision(self.step, literal.variable, not literal.negated, depth)

    def on_backtrack(self, literal: Literal, depth: int) -> None:
        self.step += 1
        self.structured_logger.log_backtrack(self.step, literal.variable, not literal.negated, depth)

    def on_result(self, satisfiable: bool, statistics: dict[str, Any]) -> None:
        self.structured_logger.log_result(satisfiable, statistics)


def create_tracer(run_name: str, output_dir: str, format_type: str = "json") -> SearchTracer:
    """
    Create a SearchTracer writing to a fresh StructuredLogger.

    Args:
        run_name: Name of the run (used in filenames)
        output_dir: Directory to save logs in
        format_type: Format to save logs in ("json" or "csv")

    Returns:
        SearchTracer instance
    """
    return SearchTracer(StructuredLogger(output_dir, run_name, format_type))
