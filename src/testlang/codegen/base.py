"""Base generator interface for testlang.

Each target implements this interface to turn a validated Program into one
source document: a header, one generated unit per test block in declaration
order, and a footer.
"""

from __future__ import annotations

import json
import os
import stat
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from testlang.compiler.tree import Assertion, Program, Request, TestBlock
from testlang.config import CompilerConfig, Target
from testlang.diagnostics import CodeGenError


class Generator(ABC):
    """Base class for target-specific code generators."""

    target: Target
    file_suffix: str

    def __init__(self, config: CompilerConfig | None = None):
        """Initialize the generator.

        Args:
            config: Compiler configuration. If None, uses defaults.
        """
        self.config = config or CompilerConfig()

    def generate(
        self,
        program: Program,
        source_name: str | None = None,
        output_name: str | None = None,
    ) -> str:
        """Render the whole document for a validated program.

        Args:
            program: The validated syntax tree.
            source_name: Name of the input document, mentioned in the header.
            output_name: Name of the output file; some targets derive names from it.

        Returns:
            The generated source text, ending with a newline.
        """
        names = unit_names(program.tests)
        units = [self.render_test(test, name) for test, name in zip(program.tests, names)]
        text = self.unit_separator.join([self.render_header(source_name, output_name), *units])
        footer = self.render_footer()
        if footer:
            text = f"{text}\n{footer}"
        return text.rstrip("\n") + "\n"

    def write(
        self,
        program: Program,
        path: Path | str,
        source_name: str | None = None,
    ) -> str:
        """Generate the document and write it atomically to `path`.

        Raises:
            CodeGenError: If the destination cannot be created or written.
        """
        path = Path(path)
        text = self.generate(program, source_name=source_name, output_name=path.name)
        write_output(text, path)
        return text

    @property
    def unit_separator(self) -> str:
        """Text placed between the header and each unit."""
        return "\n\n"

    @abstractmethod
    def render_header(self, source_name: str | None, output_name: str | None) -> str:
        """Imports and shared scaffolding that precede the first unit."""
        ...

    def render_footer(self) -> str:
        """Text after the last unit. Override in subclass."""
        return ""

    @abstractmethod
    def render_test(self, test: TestBlock, unit_name: str) -> str:
        """Render one test block as a generated unit named `unit_name`."""
        ...

    @abstractmethod
    def render_request(self, request: Request) -> list[str]:
        """Statements issuing one request and keeping its response."""
        ...

    @abstractmethod
    def render_assertion(self, assertion: Assertion) -> str:
        """A single check against the last response."""
        ...

    def render_body(self, test: TestBlock) -> list[str]:
        """Requests in declared order, then assertions in declared order."""
        lines: list[str] = []
        for request in test.requests:
            lines.extend(self.render_request(request))
        for assertion in test.assertions:
            lines.append(self.render_assertion(assertion))
        return lines


def unit_names(tests: tuple[TestBlock, ...]) -> list[str]:
    """Generated unit name for each test, in order.

    Names are `test_<name>`. Duplicates get `_2`, `_3`, ... so that every unit
    survives in the generated document.
    """
    used: set[str] = set()
    names: list[str] = []
    for test in tests:
        base = f"test_{test.name}"
        name = base
        suffix = 2
        while name in used:
            name = f"{base}_{suffix}"
            suffix += 1
        used.add(name)
        names.append(name)
    return names


def quote(text: str) -> str:
    """Double-quoted string literal valid in both Python and Java source."""
    return json.dumps(text, ensure_ascii=False)


def indent(lines: list[str], depth: int, width: int = 4) -> list[str]:
    pad = " " * (depth * width)
    return [pad + line if line else line for line in lines]


def write_output(text: str, path: Path) -> None:
    """Write text to path without ever leaving a partial file behind.

    The document goes to a temporary file in the destination directory which
    then replaces the destination in one rename. The result keeps the mode of
    the file it replaces, or follows the umask like a plain write.

    Raises:
        CodeGenError: Wrapping the underlying OSError.
    """
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="\n",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_path = Path(handle.name)
            handle.write(text)
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise CodeGenError(path, e) from e


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        pass
    # Temporary files are created 0600; a new file should get 0666 minus umask
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
