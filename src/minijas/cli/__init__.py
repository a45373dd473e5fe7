"""
minijas Command-Line Interface
==============================

This package provides the command-line tool for minijas:

- **mjc**: compile a source file to Jasmin assembly

The tool is a Click-based CLI application with help text and consistent
exit codes (see minijas.cli.errors.ExitCode).
"""

__all__ = ["mjc"]
