"""
Lexer (Tokenizer)
=================

This module implements the lexer for the minijas source language. Unlike a
batch tokenizer it is demand-driven: the code generator pulls one token at a
time with next_token(), so lexing and code generation happen in the same
single pass over the source.

Token Categories
----------------
- Keywords: void, printf
- Identifiers: procedure names (ASCII letters only, case-sensitive)
- Strings: "double quoted", taken verbatim (no escape sequences)
- Delimiters: ( ) { } ;
- Illegal: any other single character

Comments
--------
- Line comments start with '#' and run to the end of the line. A comment on
  the last line with no trailing newline runs to the end of input.

Example Usage
-------------
>>> from minijas.lang.lexer import Lexer
>>> lexer = Lexer('void main() { printf("hi"); }', "hello.mj")
>>> for token in lexer.tokenize():
...     print(token)
Token(VOID, 'void', 1:1)
Token(IDENTIFIER, 'main', 1:6)
Token(LPAREN, '(', 1:10)
Token(RPAREN, ')', 1:11)
Token(LBRACE, '{', 1:13)
Token(PRINTF, 'printf', 1:15)
Token(LPAREN, '(', 1:21)
Token(STRING, 'hi', 1:22)
Token(RPAREN, ')', 1:26)
Token(SEMICOLON, ';', 1:27)
Token(RBRACE, '}', 1:29)
Token(EOF, 1:30)
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator
import string

from minijas.errors import SourceLocation
from minijas.lang.errors import UnterminatedStringError


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """Closed set of token kinds produced by the lexer."""

    LPAREN = auto()         # (
    RPAREN = auto()         # )
    IDENTIFIER = auto()     # procedure names
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    SEMICOLON = auto()      # ;
    STRING = auto()         # "..."
    PRINTF = auto()         # printf
    VOID = auto()           # void
    EOF = auto()            # end of input
    ILLEGAL = auto()        # any other character


KEYWORDS: dict[str, TokenKind] = {
    "void": TokenKind.VOID,
    "printf": TokenKind.PRINTF,
}

PUNCTUATION: dict[str, TokenKind] = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ";": TokenKind.SEMICOLON,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single lexical unit.

    Tokens compare equal on kind and text only; the position fields are
    carried for diagnostics.

    Attributes:
        kind: The TokenKind classification
        text: The exact lexeme (empty for EOF)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    kind: TokenKind
    text: str
    line: int = field(default=1, compare=False)
    column: int = field(default=1, compare=False)
    filename: str = field(default="<input>", compare=False)

    def __repr__(self) -> str:
        if self.kind is TokenKind.EOF:
            return f"Token(EOF, {self.line}:{self.column})"
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def describe(self) -> str:
        """Human-readable description used in diagnostics."""
        if self.kind is TokenKind.EOF:
            return "end of input"
        if self.kind is TokenKind.STRING:
            return f'string "{self.text}"'
        if self.kind is TokenKind.ILLEGAL:
            return f"illegal character '{self.text}'"
        return f"'{self.text}'"


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Demand-driven tokenizer.

    The lexer keeps two cursors over the source: position (index of the last
    consumed character) and read_position (index of the next character to
    read). Both only move forward; there is no pushback.

    Usage:
        lexer = Lexer(source_text, filename)
        token = lexer.next_token()

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    WHITESPACE = " \t\n\r"
    COMMENT_CHAR = "#"
    WORD_CHARS = string.ascii_letters

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        self._pos = 0
        self._read_pos = 0

        # Line and column of the next character to read
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    @property
    def position(self) -> int:
        """Index of the most recently consumed character."""
        return self._pos

    @property
    def read_position(self) -> int:
        """Index of the next character to be read."""
        return self._read_pos

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Once the input is exhausted every call returns an EOF token.

        Raises:
            UnterminatedStringError: If a string literal reaches end of input
        """
        self._skip_whitespace_and_comments()

        start_line = self._line
        start_column = self._column
        start_line_pos = self._line_start_pos

        char = self._advance()

        if not char:
            return self._make_token(TokenKind.EOF, "", start_line, start_column)

        if char in self.WORD_CHARS:
            return self._scan_word(char, start_line, start_column)

        if char in PUNCTUATION:
            return self._make_token(PUNCTUATION[char], char, start_line, start_column)

        if char == '"':
            return self._scan_string(start_line, start_column, start_line_pos)

        return self._make_token(TokenKind.ILLEGAL, char, start_line, start_column)

    def tokenize(self) -> Iterator[Token]:
        """
        Yield tokens up to and including the first EOF token.

        Raises:
            UnterminatedStringError: If a string literal reaches end of input
        """
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return

    def line_text(self, line: int) -> str:
        """Return the text of a 1-indexed source line, without its terminator."""
        lines = self.source.split("\n")
        if 1 <= line <= len(lines):
            return lines[line - 1].rstrip("\r")
        return ""

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._read_pos >= len(self.source)

    def _peek(self) -> str:
        """Next unconsumed character, or an empty string at end of input."""
        if self._at_end():
            return ""
        return self.source[self._read_pos]

    def _advance(self) -> str:
        """
        Consume and return the next character.

        Returns an empty string, without moving either cursor, at end of input.
        """
        if self._at_end():
            return ""

        self._pos = self._read_pos
        self._read_pos += 1
        char = self.source[self._pos]

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._read_pos
        else:
            self._column += 1

        return char

    def _make_token(self, kind: TokenKind, text: str, line: int, column: int) -> Token:
        return Token(kind, text, line=line, column=column, filename=self.filename)

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char in self.WHITESPACE:
                self._advance()
                continue

            if char == self.COMMENT_CHAR:
                # Stops before the newline, or at end of input
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            break

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_word(self, first: str, start_line: int, start_column: int) -> Token:
        """Scan a maximal alphabetic run and classify it as keyword or identifier."""
        chars = [first]
        while self._peek() and self._peek() in self.WORD_CHARS:
            chars.append(self._advance())

        word = "".join(chars)
        kind = KEYWORDS.get(word, TokenKind.IDENTIFIER)
        return self._make_token(kind, word, start_line, start_column)

    def _scan_string(self, start_line: int, start_column: int, start_line_pos: int) -> Token:
        """
        Scan a string literal; the opening quote is already consumed.

        Characters are taken verbatim up to the closing quote, which is
        consumed but not included in the lexeme.
        """
        chars = []
        while self._peek() != '"':
            if self._at_end():
                line_end = self.source.find("\n", start_line_pos)
                if line_end == -1:
                    line_end = len(self.source)
                raise UnterminatedStringError(
                    location=SourceLocation(self.filename, start_line, start_column),
                    source_line=self.source[start_line_pos:line_end].rstrip("\r"),
                )
            chars.append(self._advance())

        self._advance()  # closing quote
        return self._make_token(TokenKind.STRING, "".join(chars), start_line, start_column)
