# =============================================================================
# test_cli.py - mjc Command-Line Tests
# =============================================================================
# Tests for the mjc command: output file handling, options, token dump and
# the mapping of errors to exit codes.
# =============================================================================

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from minijas import __version__
from minijas.cli.errors import ExitCode
from minijas.cli.mjc import main


HELLO_SOURCE = 'void main() {\n    printf("hi");\n}\n'


@pytest.fixture(autouse=True)
def restore_root_logger():
    """mjc reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner():
    return CliRunner()


# =============================================================================
# Successful Compilation
# =============================================================================

class TestCompile:
    """Successful runs of mjc."""

    def test_default_output(self, runner):
        """Without -o the assembly goes to out.j."""
        with runner.isolated_filesystem():
            Path("hello.mj").write_text(HELLO_SOURCE)
            result = runner.invoke(main, ["hello.mj"])

            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert "Compiled hello.mj -> out.j" in result.output
            code = Path("out.j").read_text()
            assert code.startswith(".class public Aout\n")
            assert '    ldc "hi"\n' in code

    def test_explicit_output(self, runner):
        with runner.isolated_filesystem():
            Path("hello.mj").write_text(HELLO_SOURCE)
            result = runner.invoke(main, ["hello.mj", "-o", "hello.j"])

            assert result.exit_code == 0, result.output
            assert Path("hello.j").exists()
            assert not Path("out.j").exists()

    def test_output_matches_library(self, runner):
        from minijas import compile_source

        with runner.isolated_filesystem():
            Path("hello.mj").write_text(HELLO_SOURCE)
            runner.invoke(main, ["hello.mj"])
            assert Path("out.j").read_bytes() == compile_source(HELLO_SOURCE).encode("utf-8")

    def test_class_name_option(self, runner):
        with runner.isolated_filesystem():
            Path("hello.mj").write_text("void main() { foo(); }")
            result = runner.invoke(main, ["hello.mj", "--class-name", "Hello"])

            assert result.exit_code == 0, result.output
            code = Path("out.j").read_text()
            assert code.startswith(".class public Hello\n")
            assert "invokestatic Hello/foo()V" in code

    def test_comments_option(self, runner):
        with runner.isolated_filesystem():
            Path("hello.mj").write_text(HELLO_SOURCE)
            runner.invoke(main, ["hello.mj", "--comments"])
            assert Path("out.j").read_text().startswith("; source: hello.mj\n")

    def test_verbose_output(self, runner):
        with runner.isolated_filesystem():
            Path("hello.mj").write_text(HELLO_SOURCE)
            result = runner.invoke(main, ["-v", "hello.mj"])

            assert result.exit_code == 0, result.output
            assert "Compiling hello.mj..." in result.output
            assert "Declared 1 procedures" in result.output

    def test_empty_source(self, runner):
        with runner.isolated_filesystem():
            Path("empty.mj").write_text("# nothing\n")
            result = runner.invoke(main, ["empty.mj"])

            assert result.exit_code == 0
            assert ".method public static" not in Path("out.j").read_text()

    def test_crlf_inside_literal_preserved(self, runner):
        """Line endings inside a string literal reach the output unchanged."""
        with runner.isolated_filesystem():
            Path("crlf.mj").write_bytes(b'void main() {\r\n printf("a\r\nb");\r\n}\r\n')
            result = runner.invoke(main, ["crlf.mj"])

            assert result.exit_code == 0, result.output
            assert b'    ldc "a\r\nb"\n' in Path("out.j").read_bytes()

    def test_lone_cr_inside_literal_preserved(self, runner):
        with runner.isolated_filesystem():
            Path("cr.mj").write_bytes(b'printf("a\rb");')
            runner.invoke(main, ["cr.mj"])
            assert b'    ldc "a\rb"\n' in Path("out.j").read_bytes()

    def test_unclosed_block_accepted_by_default(self, runner):
        with runner.isolated_filesystem():
            Path("open.mj").write_text("void main() {")
            result = runner.invoke(main, ["open.mj"])
            assert result.exit_code == 0


# =============================================================================
# Token Dump
# =============================================================================

class TestTokens:
    """--tokens prints the token stream and writes nothing."""

    def test_token_dump(self, runner):
        with runner.isolated_filesystem():
            Path("hello.mj").write_text("void main")
            result = runner.invoke(main, ["--tokens", "hello.mj"])

            assert result.exit_code == 0, result.output
            assert result.output.splitlines() == [
                "Token(VOID, 'void', 1:1)",
                "Token(IDENTIFIER, 'main', 1:6)",
                "Token(EOF, 1:10)",
            ]
            assert not Path("out.j").exists()

    def test_token_dump_unterminated_string(self, runner):
        with runner.isolated_filesystem():
            Path("bad.mj").write_text('"open')
            result = runner.invoke(main, ["--tokens", "bad.mj"])
            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "unterminated string literal" in result.output


# =============================================================================
# Error Handling
# =============================================================================

class TestErrors:
    """Failures exit non-zero with one diagnostic and no output file."""

    @pytest.mark.parametrize(
        "source",
        [
            "void",
            "void f",
            "void f(",
            "void f()",
            "void main() { foo() }",
            "void main() { printf(); }",
            'void main() { printf("x); }',
            "void main() { @ }",
        ],
    )
    def test_syntax_error(self, runner, source):
        with runner.isolated_filesystem():
            Path("bad.mj").write_text(source)
            result = runner.invoke(main, ["bad.mj"])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "error:" in result.output
            assert not Path("out.j").exists()

    def test_diagnostic_location(self, runner):
        with runner.isolated_filesystem():
            Path("bad.mj").write_text("void main() {\n    foo()\n}\n")
            result = runner.invoke(main, ["bad.mj"])
            assert "bad.mj:3:1: error: expected ';' after ')'" in result.output

    def test_diagnostic_is_single_line(self, runner):
        with runner.isolated_filesystem():
            Path("bad.mj").write_text("void main() {\n    foo()\n}\n")
            result = runner.invoke(main, ["bad.mj"])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert result.output.splitlines() == [
                "bad.mj:3:1: error: expected ';' after ')' (hint: found '}')"
            ]

    def test_verbose_diagnostic_shows_source(self, runner):
        with runner.isolated_filesystem():
            Path("bad.mj").write_text("void main() {\n    foo()\n}\n")
            result = runner.invoke(main, ["-v", "bad.mj"])

            assert result.exit_code == ExitCode.BUILD_ERROR
            lines = result.output.splitlines()
            assert "bad.mj:3:1: error: expected ';' after ')'" in lines
            assert "    }" in lines
            assert "    ^" in lines
            assert "hint: found '}'" in lines

    def test_deep_nesting_is_internal_error(self, runner):
        with runner.isolated_filesystem():
            Path("deep.mj").write_text("void a() { " * 5000)
            result = runner.invoke(main, ["deep.mj"])

            assert result.exit_code == ExitCode.INTERNAL_ERROR
            assert "nested too deeply" in result.output
            assert not Path("out.j").exists()

    def test_existing_output_untouched_on_error(self, runner):
        with runner.isolated_filesystem():
            Path("out.j").write_text("previous")
            Path("bad.mj").write_text("void")
            runner.invoke(main, ["bad.mj"])
            assert Path("out.j").read_text() == "previous"

    def test_strict_unclosed_block(self, runner):
        with runner.isolated_filesystem():
            Path("open.mj").write_text("void main() {")
            result = runner.invoke(main, ["--strict", "open.mj"])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "end of input inside body of 'main'" in result.output

    def test_missing_argument(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_missing_input_file(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["nope.mj"])
            assert result.exit_code == ExitCode.INVALID_ARGS

    def test_unwritable_output(self, runner):
        with runner.isolated_filesystem():
            Path("hello.mj").write_text(HELLO_SOURCE)
            result = runner.invoke(main, ["hello.mj", "-o", "missing_dir/out.j"])

            assert result.exit_code == ExitCode.INVALID_ARGS
            assert "Error:" in result.output

    def test_invalid_utf8(self, runner):
        with runner.isolated_filesystem():
            Path("bin.mj").write_bytes(b"void \xff\xfe")
            result = runner.invoke(main, ["bin.mj"])
            assert result.exit_code == ExitCode.INVALID_ARGS

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
