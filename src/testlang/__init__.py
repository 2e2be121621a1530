"""testlang - compiler for the TestLang++ HTTP test language."""

__version__ = "0.1.0"

from testlang.config import CompilerConfig, Target, load_config
from testlang.diagnostics import (
    CodeGenError,
    CompileError,
    Diagnostic,
    LexError,
    ParseError,
    SemanticError,
    SemanticErrorKind,
    SourceReadError,
    Stage,
)
from testlang.pipeline import CompilationResult, check_file, compile_file, compile_source

__all__ = [
    "__version__",
    # Pipeline
    "CompilationResult",
    "check_file",
    "compile_file",
    "compile_source",
    # Configuration
    "CompilerConfig",
    "Target",
    "load_config",
    # Diagnostics
    "CodeGenError",
    "CompileError",
    "Diagnostic",
    "LexError",
    "ParseError",
    "SemanticError",
    "SemanticErrorKind",
    "SourceReadError",
    "Stage",
]
