"""
mjc - minijas Compiler Command-Line Interface
=============================================

This module implements the command-line interface for the minijas compiler.

Usage Examples
--------------
Basic compilation (writes out.j):
    $ mjc hello.mj

With output file:
    $ mjc hello.mj -o hello.j

Reject unclosed blocks:
    $ mjc --strict hello.mj

Full pipeline to a running program:
    $ mjc hello.mj && java -jar jasmin.jar out.j && java Aout

Inspect the token stream:
    $ mjc --tokens hello.mj
"""

import logging
from pathlib import Path
from typing import Optional

import click

from minijas import __version__
from minijas.cli.errors import handle_cli_exception
from minijas.lang import Compiler, CompilerOptions, Lexer
from minijas.lang.codegen import DEFAULT_CLASS_NAME

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = Path("out.j")


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
        force=True,
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_OUTPUT,
    show_default=True,
    help="Output Jasmin assembly file",
)
@click.option(
    "--class-name",
    default=DEFAULT_CLASS_NAME,
    show_default=True,
    help="Name of the generated class",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Reject unclosed blocks and unmatched '}'",
)
@click.option(
    "--comments",
    is_flag=True,
    help="Start the output with a comment naming the source file",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="mjc")
def main(
    input_file: Path,
    output: Path,
    class_name: str,
    strict: bool,
    comments: bool,
    tokens: bool,
    verbose: bool,
) -> None:
    """
    Compile a minijas program to Jasmin assembly.

    INPUT_FILE is the source file to compile.

    \b
    Examples:
        mjc hello.mj                 # Outputs out.j
        mjc hello.mj -o hello.j      # Specify output file
        mjc --tokens hello.mj        # Dump tokens

    \b
    Language:
        void name() { ... }          # procedure (main is the entry point)
        name();                      # call
        printf("text");              # print text
        # comment
    """
    setup_logging(verbose)

    options = CompilerOptions(
        class_name=class_name,
        strict_blocks=strict,
        output_comments=comments,
    )

    try:
        if verbose:
            click.echo(f"Compiling {input_file}...")
            click.echo(f"Class name: {class_name}")

        # No newline translation: string literals keep their line endings
        source = input_file.read_bytes().decode("utf-8")

        if tokens:
            lexer = Lexer(source, str(input_file))
            for token in lexer.tokenize():
                click.echo(repr(token))
            return

        result = Compiler(options).compile_source(source, str(input_file))

        output.write_text(result.assembly, encoding="utf-8", newline="")

        if verbose:
            click.echo(f"Wrote {len(result.assembly)} bytes to {output}")
            click.echo(f"Consumed {result.token_count} tokens")
            click.echo(f"Declared {len(result.procedures)} procedures")

        click.echo(f"Compiled {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
