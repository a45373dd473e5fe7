"""
Compiler Main Module
====================

This module provides the compiler interface. It wires one Lexer to one
CodeGenerator per compilation and runs the single fused pass:

    Source → (Lexer ⇄ CodeGenerator) → Jasmin assembly

Usage
-----
Command line:
    $ mjc hello.mj -o hello.j

Programmatic:
    >>> from minijas.lang import compile_source
    >>> asm = compile_source('void main() { printf("hi"); }')

Error Handling
--------------
Compilation stops at the first error. The error propagates to the caller
as a LangError subclass and no assembly is returned, so a failed compile
never produces partial output.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from minijas.lang.lexer import Lexer
from minijas.lang.codegen import CodeGenerator, DEFAULT_CLASS_NAME

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    The defaults reproduce the reference output byte-for-byte.

    Attributes:
        class_name: Output-unit name used in '.class' and 'invokestatic'
        strict_blocks: Reject end of input inside a block and a '}' at
                       top level instead of treating them as terminators
        output_comments: Start the output with a '; source: FILE' comment
    """
    class_name: str = DEFAULT_CLASS_NAME
    strict_blocks: bool = False
    output_comments: bool = False


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename
        success: True if compilation succeeded
        assembly: Generated Jasmin assembly
        procedures: Declared procedure names, in source order
        token_count: Number of tokens consumed
    """
    filename: str = ""
    success: bool = False
    assembly: str = ""
    procedures: list[str] = field(default_factory=list)
    token_count: int = 0


class Compiler:
    """
    Compiler front end.

    Example:
        compiler = Compiler()
        result = compiler.compile_file("hello.mj")
        print(result.assembly)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile source text to assembly.

        Args:
            source: Program text
            filename: Source filename for error messages

        Returns:
            CompilerResult containing the assembly

        Raises:
            LangError: If the source is malformed
        """
        header = f"source: {filename}" if self.options.output_comments else None

        lexer = Lexer(source, filename)
        generator = CodeGenerator(
            lexer,
            class_name=self.options.class_name,
            strict_blocks=self.options.strict_blocks,
            header_comment=header,
        )
        generator.generate()

        result = CompilerResult(
            filename=filename,
            success=True,
            assembly=generator.get_code(),
            procedures=list(generator.procedures),
            token_count=generator.token_count,
        )
        logger.debug(
            f"Compiled {filename}: {len(result.procedures)} procedures, "
            f"{result.token_count} tokens, {len(result.assembly)} characters"
        )
        return result

    def compile_file(self, filepath: str | Path) -> CompilerResult:
        """
        Compile a source file to assembly.

        Raises:
            LangError: If the source is malformed
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_bytes().decode("utf-8")
        return self.compile_source(source, str(filepath))


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_source(
    source: str,
    filename: str = "<input>",
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Compile source text and return the Jasmin assembly.

    Raises:
        LangError: If the source is malformed
    """
    return Compiler(options).compile_source(source, filename).assembly


def compile_file(
    filepath: str | Path,
    output_path: str | Path | None = None,
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Compile a source file, optionally writing the assembly to output_path.

    The output file is only written after the whole source compiled.

    Example:
        >>> asm = compile_file("hello.mj", "out.j")
    """
    result = Compiler(options).compile_file(filepath)

    if output_path:
        Path(output_path).write_text(result.assembly, encoding="utf-8", newline="")

    return result.assembly
