"""
Utilities for the dpllsat package: DIMACS I/O (``cnf``), the exception
hierarchy (``exceptions``) and logging helpers (``logging_utils``).
"""
