"""
Jasmin Code Generator
=====================

This module translates minijas source directly into Jasmin JVM assembly.
There is no syntax tree: the generator pulls tokens from the lexer, checks
them against the statement forms below and appends assembly text to an
output buffer as it goes.

Statement Forms
---------------
| Form                       | Emitted assembly                            |
|----------------------------|---------------------------------------------|
| void NAME() { ... }        | .method ... .limit ... body return .end     |
| NAME();                    | invokestatic CLASS/NAME()V                  |
| printf("text");            | getstatic / ldc "text" / invokevirtual      |

Blocks
------
A procedure body is generated by a recursive call to generate() that shares
the same lexer. The recursive call returns at the matching '}' (or at end of
input), so recursion depth always equals brace nesting depth.

End of input inside a block is accepted as closing every open block. With
strict_blocks enabled it is an error instead, as is a '}' at top level.

Generated Assembly Format
-------------------------
    .class public Aout
    .super java/lang/Object

    .method public <init>()V
        ...
    .end method

    .method public static main([Ljava/lang/String;)V
        .limit stack 2
        .limit locals 1
        getstatic java/lang/System/out Ljava/io/PrintStream;
        ldc "hi"
        invokevirtual java/io/PrintStream/print(Ljava/lang/String;)V
        return
    .end method

String literals are copied between the quotes of the ldc operand exactly as
written in the source; no escaping is applied.

Usage
-----
>>> from minijas.lang.lexer import Lexer
>>> from minijas.lang.codegen import CodeGenerator
>>> gen = CodeGenerator(Lexer('void main() { printf("hi"); }'))
>>> closing = gen.generate()
>>> print(gen.get_code())
"""

import logging
from typing import Optional

from minijas.lang.lexer import Lexer, Token, TokenKind
from minijas.lang.errors import (
    MissingIdentifierError,
    MissingTokenError,
    UnexpectedTokenError,
    UnclosedBlockError,
)

logger = logging.getLogger(__name__)


DEFAULT_CLASS_NAME = "Aout"

PREAMBLE = """\
.class public {class_name}
.super java/lang/Object

.method public <init>()V
    .limit stack 1
    .limit locals 1
    aload_0
    invokespecial java/lang/Object/<init>()V
    return
.end method

"""

ENTRY_POINT = "main"
ENTRY_SIGNATURE = "main([Ljava/lang/String;)V"

STACK_LIMIT = 2
LOCALS_LIMIT = 1


class CodeGenerator:
    """
    Single-pass generator of Jasmin assembly.

    The output buffer is append-only: text is only ever added to the end.

    Attributes:
        lexer: Token source for this compilation
        class_name: Output-unit name used by .class and invokestatic
        strict_blocks: Reject unclosed blocks and a '}' at top level
        procedures: Names of declared procedures, in source order
        token_count: Number of tokens pulled from the lexer
    """

    def __init__(
        self,
        lexer: Lexer,
        class_name: str = DEFAULT_CLASS_NAME,
        strict_blocks: bool = False,
        header_comment: Optional[str] = None,
    ):
        self.lexer = lexer
        self.class_name = class_name
        self.strict_blocks = strict_blocks
        self.procedures: list[str] = []
        self.token_count = 0

        self._code: list[str] = []
        self._depth = 0

        if header_comment:
            self._emit(f"; {header_comment}\n")
        self._emit(PREAMBLE.format(class_name=class_name))

    def get_code(self) -> str:
        """Return everything emitted so far."""
        return "".join(self._code)

    def generate(self) -> Token:
        """
        Consume statements until end of input or a closing brace.

        Returns:
            The token that ended this invocation (EOF or RBRACE)

        Raises:
            LangSyntaxError: On the first statement that does not match
        """
        while True:
            token = self._next()

            if token.kind is TokenKind.VOID:
                self._procedure()
            elif token.kind is TokenKind.IDENTIFIER:
                self._call(token)
            elif token.kind is TokenKind.PRINTF:
                self._printf(token)
            elif token.kind is TokenKind.EOF:
                return token
            elif token.kind is TokenKind.RBRACE:
                if self.strict_blocks and self._depth == 0:
                    raise UnexpectedTokenError(
                        token.describe(),
                        location=token.location,
                        source_line=self.lexer.line_text(token.line),
                        hint="no open block to close",
                    )
                return token
            else:
                raise UnexpectedTokenError(
                    token.describe(),
                    location=token.location,
                    source_line=self.lexer.line_text(token.line),
                )

    # =========================================================================
    # Statement Forms
    # =========================================================================

    def _procedure(self) -> None:
        """void NAME ( ) { body }"""
        name_token = self._next()
        if name_token.kind is not TokenKind.IDENTIFIER:
            raise MissingIdentifierError(
                name_token.describe(),
                location=name_token.location,
                source_line=self.lexer.line_text(name_token.line),
            )
        name = name_token.text

        self._expect(TokenKind.LPAREN, "'('", after=name)
        self._expect(TokenKind.RPAREN, "')'", after="(")
        self._expect(TokenKind.LBRACE, "'{'", after=")")

        if name == ENTRY_POINT:
            self._emit(f".method public static {ENTRY_SIGNATURE}\n")
        else:
            self._emit(f".method public static {name}()V\n")
        self._emit(f"    .limit stack {STACK_LIMIT}\n")
        self._emit(f"    .limit locals {LOCALS_LIMIT}\n")

        self.procedures.append(name)
        logger.debug(f"Procedure '{name}' at {name_token.location} (depth {self._depth})")

        self._depth += 1
        closing = self.generate()
        self._depth -= 1

        if closing.kind is TokenKind.EOF and self.strict_blocks:
            raise UnclosedBlockError(
                name,
                location=closing.location,
                source_line=self.lexer.line_text(closing.line),
            )

        self._emit("    return\n")
        self._emit(".end method\n\n")

    def _call(self, name_token: Token) -> None:
        """NAME ( ) ;"""
        self._expect(TokenKind.LPAREN, "'('", after=name_token.text)
        self._expect(TokenKind.RPAREN, "')'", after="(")
        self._expect(TokenKind.SEMICOLON, "';'", after=")")

        self._emit(f"    invokestatic {self.class_name}/{name_token.text}()V\n")

    def _printf(self, printf_token: Token) -> None:
        """printf ( "text" ) ;"""
        self._expect(TokenKind.LPAREN, "'('", after=printf_token.text)
        literal = self._expect(TokenKind.STRING, "a string literal", after="(")
        self._expect(TokenKind.RPAREN, "')'", after=f'"{literal.text}"')
        self._expect(TokenKind.SEMICOLON, "';'", after=")")

        self._emit("    getstatic java/lang/System/out Ljava/io/PrintStream;\n")
        self._emit(f'    ldc "{literal.text}"\n')
        self._emit("    invokevirtual java/io/PrintStream/print(Ljava/lang/String;)V\n")

    # =========================================================================
    # Helpers
    # =========================================================================

    def _next(self) -> Token:
        self.token_count += 1
        return self.lexer.next_token()

    def _expect(self, kind: TokenKind, expected: str, after: str) -> Token:
        """Pull the next token and require it to be of the given kind."""
        token = self._next()
        if token.kind is not kind:
            raise MissingTokenError(
                expected,
                after,
                token.describe(),
                location=token.location,
                source_line=self.lexer.line_text(token.line),
            )
        return token

    def _emit(self, text: str) -> None:
        self._code.append(text)
