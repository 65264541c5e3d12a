"""
Unit tests for logging and error handling components.

Tests the StructuredLogger, the SearchTracer and the exception classes.
"""

import csv
import json
import logging
import os
import shutil
import tempfile
import unittest

import numpy as np

from dpllsat.formula import Formula
from dpllsat.search import solve
from dpllsat.utils.exceptions import (
    ConfigurationError,
    DimacsParseError,
    InconsistentAssignmentError,
    InvalidClauseError,
    InvalidProblemLineError,
    NoUnassignedVariableError,
    SATBaseException,
    TooFewClausesError,
    TooManyClausesError,
)
from dpllsat.utils.logging_utils import (
    NumpyJSONEncoder,
    StructuredLogger,
    configure_logging,
    create_tracer,
)


class TestExceptions(unittest.TestCase):
    """Test cases for custom exception classes."""

    def test_parse_errors(self):
        error = InvalidProblemLineError()
        self.assertEqual(str(error), "Illegal problem line")
        self.assertIsInstance(error, DimacsParseError)
        self.assertIsInstance(error, ValueError)
        self.assertIsInstance(error, SATBaseException)

        error = InvalidProblemLineError("Unsupported format 'dnf'", line_number=3)
        self.assertEqual(str(error), "Unsupported format 'dnf' (line 3)")
        self.assertEqual(error.line_number, 3)

    def test_clause_count_errors(self):
        error = TooFewClausesError(2, 1)
        self.assertEqual(str(error), "Too few clauses (expected 2, found 1)")
        self.assertEqual(error.declared, 2)
        self.assertEqual(error.found, 1)

        error = TooManyClausesError(1, line_number=4)
        self.assertEqual(str(error), "Too many clauses (expected 1) (line 4)")

    def test_inconsistent_assignment_error(self):
        error = InconsistentAssignmentError()
        self.assertEqual(str(error), "Inconsistent variable assignment detected")

        error = InconsistentAssignmentError(variable=5)
        self.assertIn("variable 5", str(error))
        self.assertEqual(error.variable, 5)

    def test_invalid_clause_error(self):
        error = InvalidClauseError()
        self.assertEqual(str(error), "Invalid clause detected")

        error = InvalidClauseError(clause=[0, 1, 2])
        self.assertIn("[0, 1, 2]", str(error))
        self.assertEqual(error.clause, [0, 1, 2])

    def test_other_errors(self):
        self.assertEqual(str(NoUnassignedVariableError()), "No unassigned variable left")
        self.assertEqual(ConfigurationError("bad").message, "bad")


class TestStructuredLogger(unittest.TestCase):
    """Test cases for StructuredLogger and SearchTracer."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_logger_initialization(self):
        logger = StructuredLogger(output_dir=self.test_dir, run_name="test_run")
        self.assertEqual(logger.run_name, "test_run")
        self.assertEqual(logger.output_dir, self.test_dir)
        self.assertEqual(logger.format_type, "json")
        logger.close()

    def test_unsupported_format(self):
        with self.assertRaises(ValueError):
            StructuredLogger(self.test_dir, "bad", format_type="xml")

    def test_json_logging(self):
        logger = StructuredLogger(self.test_dir, "json_test", StructuredLogger.FORMAT_JSON)
        logger.log_decision(1, 3, True, 0)
        logger.log_result(False, {"nodes": np.int64(7)})
        logger.close()

        with open(os.path.join(self.test_dir, "json_test_decision.jsonl")) as f:
            decision = json.loads(f.readline())
        self.assertEqual(decision["step"], 1)
        self.assertEqual(decision["variable"], 3)
        self.assertTrue(decision["value"])
        self.assertEqual(decision["depth"], 0)

        with open(os.path.join(self.test_dir, "json_test_result.jsonl")) as f:
            result = json.loads(f.readline())
        self.assertFalse(result["satisfiable"])
        self.assertEqual(result["nodes"], 7)

    def test_csv_logging(self):
        logger = StructuredLogger(self.test_dir, "csv_test", StructuredLogger.FORMAT_CSV)
        logger.log_backtrack(2, 1, True, 0)
        logger.log_backtrack(4, 1, False, 0)
        logger.close()

        with open(os.path.join(self.test_dir, "csv_test_backtrack.csv")) as f:
            rows = list(csv.DictReader(f))

        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[0]["step"], "2")
        self.assertEqual(rows[0]["value"], "True")
        self.assertEqual(rows[1]["value"], "False")

    def test_finalize_writes_metadata(self):
        logger = StructuredLogger(self.test_dir, "meta")
        logger.log_decision(1, 1, True, 0)
        logger.log_decision(2, 2, False, 1)
        path = logger.finalize()

        with open(path) as f:
            metadata = json.load(f)
        self.assertEqual(metadata["run_name"], "meta")
        self.assertEqual(metadata["record_counts"], {"decision": 2})
        self.assertIn("end_time", metadata)

    def test_tracer_records_search(self):
        tracer = create_tracer("trace", self.test_dir)
        solve(Formula.from_dimacs([[1], [-1]], 1), listener=tracer)
        tracer.structured_logger.close()

        with open(os.path.join(self.test_dir, "trace_decision.jsonl")) as f:
            decisions = [json.loads(line) for line in f]
        with open(os.path.join(self.test_dir, "trace_backtrack.jsonl")) as f:
            backtracks = [json.loads(line) for line in f]
        with open(os.path.join(self.test_dir, "trace_result.jsonl")) as f:
            result = json.loads(f.readline())

        self.assertEqual([(d["step"], d["value"]) for d in decisions], [(1, True), (3, False)])
        self.assertEqual([(b["step"], b["value"]) for b in backtracks], [(2, True), (4, False)])
        self.assertFalse(result["satisfiable"])
        self.assertEqual(result["decisions"], 2)

    def test_numpy_encoder(self):
        data = {"a": np.int32(1), "b": np.float64(0.5), "c": np.array([1, 2]), "d": np.bool_(True)}
        self.assertEqual(
            json.loads(json.dumps(data, cls=NumpyJSONEncoder)),
            {"a": 1, "b": 0.5, "c": [1, 2], "d": True},
        )


class TestConfigureLogging(unittest.TestCase):
    """Test cases for configure_logging."""

    def tearDown(self):
        logger = logging.getLogger("dpllsat")
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    def test_single_handler(self):
        configure_logging("debug")
        logger = configure_logging(logging.INFO)
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.INFO)


if __name__ == "__main__":
    unittest.main()
