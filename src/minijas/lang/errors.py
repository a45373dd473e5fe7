"""
Compiler Error Hierarchy
========================

This module defines the exceptions raised by the lexer and code generator.
All of them are fatal: the first one raised ends the compilation, no
output is written, and the command-line driver reports it as a single
diagnostic.

Exception Hierarchy
-------------------
LangError (base for all compiler errors)
└── LangSyntaxError - lexer and generator syntax errors
    ├── MissingIdentifierError - 'void' not followed by a name
    ├── MissingTokenError - expected punctuation or string literal absent
    ├── UnexpectedTokenError - token cannot start a statement
    ├── UnterminatedStringError - missing closing quote
    └── UnclosedBlockError - end of input inside a block (strict mode)

Error Message Format
--------------------
    hello.mj:3:12: error: expected ';'
        foo()
             ^
    hint: statements end with ';'
"""

from typing import Optional

from minijas.errors import MinijasError, SourceLocation


# =============================================================================
# Base Compiler Exception
# =============================================================================

class LangError(MinijasError):
    """
    Base exception for all compiler errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    def summary(self) -> str:
        """
        Single-line form of the error, without source context.

            hello.mj:3:1: error: expected ';' after ')' (hint: found '}')
        """
        if self.location:
            line = f"{self.location}: error: {self.message}"
        else:
            line = f"error: {self.message}"
        if self.hint:
            line += f" (hint: {self.hint})"
        return line


# =============================================================================
# Syntax Errors (Lexer and Generator)
# =============================================================================

class LangSyntaxError(LangError):
    """
    Syntax error in source code.

    Raised when the lexer or code generator meets input that does not
    match one of the statement forms.
    """
    pass


class MissingIdentifierError(LangSyntaxError):
    """
    A 'void' keyword is not followed by a procedure name.

    Example:
        void () { }
    """

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            "expected identifier after 'void'",
            location=location,
            hint=f"found {found}; declarations look like 'void name() {{ ... }}'",
            source_line=source_line,
        )


class MissingTokenError(LangSyntaxError):
    """
    Required token is missing.

    Raised when a required token (like ';' or ')') is not found
    where the statement form expects it.
    """

    def __init__(
        self,
        expected: str,
        after: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.after = after
        self.found = found
        super().__init__(
            f"expected {expected} after '{after}'",
            location=location,
            hint=f"found {found}",
            source_line=source_line,
        )


class UnexpectedTokenError(LangSyntaxError):
    """
    Token cannot start a statement.

    Raised for punctuation, string literals and illegal characters that
    appear where a declaration, call or printf is expected.
    """

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"unexpected {found}",
            location=location,
            hint=hint or "expected 'void', 'printf', a procedure call or '}'",
            source_line=source_line,
        )


class UnterminatedStringError(LangSyntaxError):
    """
    Unterminated string literal.

    Raised when the end of input is reached before the closing quote.

    Example:
        printf("hello);
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated string literal",
            location=location,
            hint="add closing '\"' to complete the string",
            source_line=source_line,
        )


class UnclosedBlockError(LangSyntaxError):
    """
    End of input inside a '{ ... }' block.

    Only raised when strict block checking is enabled; by default the
    end of input closes every open block.
    """

    def __init__(
        self,
        procedure: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.procedure = procedure
        super().__init__(
            f"end of input inside body of '{procedure}'",
            location=location,
            hint="add '}' to close the block",
            source_line=source_line,
        )
