"""
Command line interface.
"""

from testrun_reporter.cli.cli import build_parser, main

__all__ = ["build_parser", "main"]
