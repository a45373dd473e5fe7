"""
minijas Error Hierarchy
=======================

This module defines the root of the exception hierarchy for minijas.
All exceptions inherit from MinijasError, allowing callers to catch every
compiler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
MinijasError (base)
└── LangError (see minijas.lang.errors)
    └── LangSyntaxError - lexical and syntax errors in source

Design Philosophy
-----------------
Each exception captures source location information (filename, line, column)
when applicable, so the command-line driver can print a single diagnostic
that points at the offending token:

    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class MinijasError(Exception):
    """
    Base exception for all minijas errors.

        try:
            compiler.compile_file("hello.mj")
        except MinijasError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
