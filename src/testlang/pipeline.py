"""Compilation pipeline - lex, parse, validate, generate.

Each call is independent: it owns its token stream, tree and output text, and
the first failing stage aborts the run with a CompileError.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from testlang.codegen import get_generator
from testlang.compiler.lexer import Lexer
from testlang.compiler.parser import Parser
from testlang.compiler.tree import Program
from testlang.compiler.validator import validate
from testlang.config import CompilerConfig, Target
from testlang.diagnostics import CompileError, SourceReadError
from testlang.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CompilationResult:
    """Outcome of a successful compile_file run."""

    source: Path
    output: Path
    target: Target
    test_count: int
    text: str


def read_source(path: Path | str) -> str:
    """Read a UTF-8 source document.

    Raises:
        SourceReadError: If the file is missing, unreadable or not UTF-8.
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(path, e) from e


def analyze(source: str) -> Program:
    """Run the front end (lex, parse, validate) over source text."""
    program = Parser(Lexer(source)).parse()
    logger.debug("stage.parsed", tests=len(program.tests))
    validate(program)
    logger.debug("stage.validated", tests=len(program.tests))
    return program


def compile_source(
    source: str,
    target: Target | str | None = None,
    config: CompilerConfig | None = None,
    source_name: str | None = None,
    output_name: str | None = None,
) -> str:
    """Compile source text to generated test code, entirely in memory.

    Args:
        source: TestLang++ source text.
        target: Target language. Defaults to the configured target.
        config: Compiler configuration. If None, uses defaults.
        source_name: Input name mentioned in the generated header.
        output_name: Output file name, used by targets that derive names from it.

    Returns:
        The generated document.

    Raises:
        CompileError: The first diagnostic of the run.
    """
    config = config or CompilerConfig()
    generator = get_generator(target or config.target, config)

    try:
        program = analyze(source)
        text = generator.generate(program, source_name=source_name, output_name=output_name)
    except CompileError as e:
        _log_failure(e)
        raise

    logger.debug("stage.generated", target=generator.target.value, size=len(text))
    return text


def compile_file(
    input_path: Path | str,
    output_path: Path | str,
    target: Target | str | None = None,
    config: CompilerConfig | None = None,
) -> CompilationResult:
    """Compile one source document into one generated document on disk.

    The output is written atomically; on any failure no file is left at
    `output_path` by this run.

    Raises:
        CompileError: The first diagnostic of the run.
    """
    input_path = Path(input_path)
    output_path = Path(output_path)
    config = config or CompilerConfig()
    generator = get_generator(target or config.target, config)

    logger.debug("compile.start", source=str(input_path), output=str(output_path))

    try:
        source = read_source(input_path)
        program = analyze(source)
        text = generator.write(program, output_path, source_name=input_path.name)
    except CompileError as e:
        _log_failure(e)
        raise

    logger.info(
        "compile.done",
        source=str(input_path),
        output=str(output_path),
        target=generator.target.value,
        tests=len(program.tests),
    )
    return CompilationResult(
        source=input_path,
        output=output_path,
        target=generator.target,
        test_count=len(program.tests),
        text=text,
    )


def check_file(input_path: Path | str) -> Program:
    """Lex, parse and validate a source document without generating code."""
    try:
        return analyze(read_source(input_path))
    except CompileError as e:
        _log_failure(e)
        raise


def _log_failure(error: CompileError) -> None:
    diagnostic = error.diagnostic
    logger.info(
        "compile.failed",
        stage=diagnostic.stage.value,
        location=diagnostic.location,
        message=diagnostic.message,
    )
