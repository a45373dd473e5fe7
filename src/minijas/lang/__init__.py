"""
minijas Compiler Core
=====================

Lexer and single-pass code generator for the minijas language: void
procedures with no-argument calls and a printf statement, translated
straight to Jasmin JVM assembly.

Pipeline
--------
    Source → Lexer ⇄ CodeGenerator → Assembly

The code generator pulls tokens from the lexer on demand; no token list
or syntax tree is built.

Usage
-----
>>> from minijas.lang import compile_source
>>> source = '''
... void greet() { printf("Hello!"); }
... void main() { greet(); }
... '''
>>> print(compile_source(source))

Language
--------
- void NAME() { ... }  declares a procedure (main is the program entry)
- NAME();              calls a procedure
- printf("text");      prints text verbatim
- # comment            runs to end of line
"""

from minijas.lang.compiler import (
    Compiler,
    CompilerOptions,
    CompilerResult,
    compile_source,
    compile_file,
)
from minijas.lang.errors import (
    LangError,
    LangSyntaxError,
    MissingIdentifierError,
    MissingTokenError,
    UnexpectedTokenError,
    UnterminatedStringError,
    UnclosedBlockError,
)
from minijas.lang.lexer import Lexer, Token, TokenKind
from minijas.lang.codegen import CodeGenerator

__all__ = [
    # Main API
    "Compiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_source",
    "compile_file",
    # Errors
    "LangError",
    "LangSyntaxError",
    "MissingIdentifierError",
    "MissingTokenError",
    "UnexpectedTokenError",
    "UnterminatedStringError",
    "UnclosedBlockError",
    # Lexer
    "Lexer",
    "Token",
    "TokenKind",
    # Code Generator
    "CodeGenerator",
]
