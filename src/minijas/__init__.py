"""
minijas - Mini-language to Jasmin Compiler
==========================================

This package compiles a tiny procedural language into Jasmin assembly, the
textual JVM bytecode format accepted by the Jasmin assembler.

Main Components
---------------
- **lang**: lexer, single-pass code generator and compiler driver
- **cli**: the `mjc` command-line tool

Quick Start
-----------
Compile a string:
    >>> from minijas import compile_source
    >>> asm = compile_source('void main() { printf("hi"); }')

Or use the command-line tool:
    $ mjc hello.mj            # writes out.j
    $ java -jar jasmin.jar out.j
    $ java Aout
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from minijas.errors import MinijasError, SourceLocation
from minijas.lang import (
    Compiler,
    CompilerOptions,
    CompilerResult,
    compile_source,
    compile_file,
    LangError,
    LangSyntaxError,
)

__all__ = [
    "__version__",
    "Compiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_source",
    "compile_file",
    "MinijasError",
    "SourceLocation",
    "LangError",
    "LangSyntaxError",
]
