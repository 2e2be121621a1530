"""testlang code generators - one per target language."""

from testlang.codegen.base import Generator, unit_names, write_output
from testlang.codegen.java import JavaGenerator
from testlang.codegen.python import PythonGenerator
from testlang.config import CompilerConfig, Target

GENERATORS: dict[Target, type[Generator]] = {
    Target.PYTHON: PythonGenerator,
    Target.JAVA: JavaGenerator,
}


def get_generator(target: Target | str, config: CompilerConfig | None = None) -> Generator:
    """Create the generator for a target (name or alias accepted)."""
    if isinstance(target, str) and not isinstance(target, Target):
        target = Target.from_name(target)
    return GENERATORS[target](config)


__all__ = [
    "GENERATORS",
    "Generator",
    "JavaGenerator",
    "PythonGenerator",
    "Target",
    "get_generator",
    "unit_names",
    "write_output",
]
