"""Python target for testlang.

Emits a pytest module. Requests go through an httpx.Client fixture that
carries the configured base URL, default headers and timeout; every test
function rebinds `response` so assertions see the last response.
"""

from __future__ import annotations

from testlang.codegen.base import Generator, indent, quote
from testlang.compiler.tree import (
    Assertion,
    BodyContains,
    HeaderEquals,
    Request,
    StatusEquals,
    StatusInRange,
    TestBlock,
)
from testlang.config import Target


class PythonGenerator(Generator):
    """Generator for pytest + httpx test modules."""

    target = Target.PYTHON
    file_suffix = ".py"

    @property
    def unit_separator(self) -> str:
        # Two blank lines between top-level definitions
        return "\n\n\n"

    @property
    def fixture(self) -> str:
        return self.config.targets.python.fixture_name

    def render_header(self, source_name: str | None, output_name: str | None) -> str:
        codegen = self.config.codegen
        origin = f" from {source_name}" if source_name else ""
        headers = ", ".join(f"{quote(k)}: {quote(v)}" for k, v in codegen.default_headers.items())

        return "\n".join(
            [
                f'"""HTTP tests generated by testlang{origin}.',
                "",
                "Do not edit by hand; regenerate with `testlang compile`.",
                '"""',
                "",
                "import httpx",
                "import pytest",
                "",
                f"BASE_URL = {quote(codegen.base_url)}",
                f"TIMEOUT = {float(codegen.timeout_seconds)!r}",
                f"DEFAULT_HEADERS = {{{headers}}}",
                "",
                "",
                "@pytest.fixture",
                f"def {self.fixture}():",
                "    with httpx.Client(base_url=BASE_URL, headers=DEFAULT_HEADERS, timeout=TIMEOUT) as client:",
                "        yield client",
            ]
        )

    def render_test(self, test: TestBlock, unit_name: str) -> str:
        lines = [f"def {unit_name}({self.fixture}):"]
        lines.extend(indent(self.render_body(test), 1))
        return "\n".join(lines)

    def render_request(self, request: Request) -> list[str]:
        return [f"response = {self.fixture}.request({quote(request.method.value)}, {quote(request.path)})"]

    def render_assertion(self, assertion: Assertion) -> str:
        match assertion:
            case StatusEquals(code=code):
                return f"assert response.status_code == {code}"
            case StatusInRange(min=low, max=high):
                return f"assert {low} <= response.status_code <= {high}"
            case BodyContains(text=text):
                return f"assert {quote(text)} in response.text"
            case HeaderEquals(name=name, value=value):
                return f"assert response.headers.get({quote(name)}) == {quote(value)}"
        raise TypeError(f"Unknown assertion: {assertion!r}")
