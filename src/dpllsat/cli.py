"""
dpllsat command line: solve a DIMACS CNF file and print the verdict.
"""
import argparse
import logging
import os
import sys
import time

from dpllsat.search import STRATEGIES
from dpllsat.solvers import SolverRegistry, get_config, load_config
from dpllsat.solvers.config import LOG_LEVELS
from dpllsat.utils.cnf import load_cnf_file
from dpllsat.utils.exceptions import ConfigurationError, DimacsParseError
from dpllsat.utils.logging_utils import configure_logging, create_tracer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dpllsat", description="Decide satisfiability of a DIMACS CNF formula"
    )
    parser.add_argument("input", help="path to the DIMACS CNF file")
    parser.add_argument(
        "--solver",
        choices=SolverRegistry.list_solvers(),
        help="solver to run (default: solver.name from the configuration)",
    )
    parser.add_argument("--strategy", choices=STRATEGIES, help="DPLL search engine")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--time", action="store_true", help="print the elapsed solve time")
    parser.add_argument("--trace-dir", help="write a structured search trace to this directory")
    parser.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper)
    return parser


def _error(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else get_config()
        configure_logging(
            args.log_level or config.get("logging.level"), config.get("logging.format")
        )
    except (ConfigurationError, ValueError) as e:
        return _error(f"Invalid configuration: {e}")

    try:
        formula, metadata = load_cnf_file(args.input)
    except OSError as e:
        return _error(f"Failed to open file: {e}")
    except DimacsParseError as e:
        return _error(f"Couldn't parse file: {e}")
    logger.info(
        f"Loaded {args.input}: {metadata['num_variables']} variables, "
        f"{metadata['num_clauses']} clauses"
    )

    solver_name = args.solver or config.get("solver.name")
    solver_kwargs = {"num_vars": formula.num_vars}
    if args.strategy:
        solver_kwargs["strategy"] = args.strategy

    tracer = None
    trace_dir = args.trace_dir or config.get("logging.trace_dir")
    if trace_dir:
        run_name = os.path.splitext(os.path.basename(args.input))[0]
        try:
            tracer = create_tracer(run_name, trace_dir, config.get("logging.trace_format"))
        except OSError as e:
            return _error(f"Failed to create trace directory: {e}")
        except ValueError as e:
            return _error(f"Invalid configuration: {e}")
        solver_kwargs["listener"] = tracer

    try:
        solver = SolverRegistry.create(solver_name, **solver_kwargs)
    except (ConfigurationError, ValueError) as e:
        if tracer is not None:
            tracer.structured_logger.close()
        return _error(f"Invalid configuration: {e}")

    solver.add_clauses(formula.to_dimacs())
    try:
        start_time = time.perf_counter()
        result = solver.solve()
        elapsed = time.perf_counter() - start_time
    except ConfigurationError as e:
        return _error(f"Invalid configuration: {e}")
    finally:
        if tracer is not None:
            tracer.structured_logger.finalize()

    print(result.to_output())
    if args.time:
        print(f"Elapsed: {elapsed:.6f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
