"""Java target for testlang.

Emits one JUnit 5 class that talks HTTP through java.net.http.HttpClient.
The class name must match the file name for javac, so it defaults to the
output file's stem.
"""

from __future__ import annotations

from pathlib import PurePath

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
from testlang.config import Target, is_java_identifier
from testlang.diagnostics import CodeGenError

DEFAULT_CLASS_NAME = "GeneratedTests"

INT_MAX = 2**31 - 1
LONG_MAX = 2**63 - 1

IMPORTS = [
    "import static org.junit.jupiter.api.Assertions.assertEquals;",
    "import static org.junit.jupiter.api.Assertions.assertTrue;",
    "",
    "import java.net.URI;",
    "import java.net.http.HttpClient;",
    "import java.net.http.HttpRequest;",
    "import java.net.http.HttpResponse;",
    "import java.time.Duration;",
    "import java.util.LinkedHashMap;",
    "import java.util.Map;",
    "",
    "import org.junit.jupiter.api.BeforeAll;",
    "import org.junit.jupiter.api.Test;",
]


class JavaGenerator(Generator):
    """Generator for JUnit 5 test classes."""

    target = Target.JAVA
    file_suffix = ".java"

    def class_name(self, output_name: str | None) -> str:
        configured = self.config.targets.java.class_name
        if configured:
            return configured
        if not output_name:
            return DEFAULT_CLASS_NAME
        stem = PurePath(output_name).stem
        if not is_java_identifier(stem):
            # javac requires a public class to be named after its file
            raise CodeGenError(
                output_name,
                ValueError(
                    f"{stem!r} is not a valid Java class name; "
                    "rename the output file or set targets.java.class_name"
                ),
            )
        return stem

    def render_header(self, source_name: str | None, output_name: str | None) -> str:
        codegen = self.config.codegen
        package = self.config.targets.java.package
        origin = f" from {source_name}" if source_name else ""
        timeout_ms = int(codegen.timeout_seconds * 1000)

        lines = [f"// HTTP tests generated by testlang{origin}. Do not edit by hand.", ""]
        if package:
            lines.extend([f"package {package};", ""])
        lines.extend(IMPORTS)
        lines.extend(
            [
                "",
                f"public class {self.class_name(output_name)} {{",
                f"    static final String BASE_URL = {quote(codegen.base_url)};",
                f"    static final Duration TIMEOUT = Duration.ofMillis({timeout_ms});",
                "    static final Map<String, String> DEFAULT_HEADERS = new LinkedHashMap<>();",
                "    static HttpClient client;",
                "",
                "    @BeforeAll",
                "    static void setUp() {",
            ]
        )
        lines.extend(
            f"        DEFAULT_HEADERS.put({quote(k)}, {quote(v)});"
            for k, v in codegen.default_headers.items()
        )
        lines.extend(
            [
                "        client = HttpClient.newBuilder().connectTimeout(TIMEOUT).build();",
                "    }",
                "",
                "    static HttpResponse<String> send(String method, String path) throws Exception {",
                "        HttpRequest.Builder builder = HttpRequest.newBuilder(URI.create(BASE_URL + path))",
                "            .timeout(TIMEOUT)",
                "            .method(method, HttpRequest.BodyPublishers.noBody());",
                "        DEFAULT_HEADERS.forEach(builder::header);",
                "        return client.send(builder.build(), HttpResponse.BodyHandlers.ofString());",
                "    }",
            ]
        )
        return "\n".join(lines)

    def render_footer(self) -> str:
        return "}"

    def render_test(self, test: TestBlock, unit_name: str) -> str:
        lines = [
            "@Test",
            f"void {unit_name}() throws Exception {{",
            "    HttpResponse<String> response;",
        ]
        lines.extend(indent(self.render_body(test), 1))
        lines.append("}")
        return "\n".join(indent(lines, 1))

    def render_request(self, request: Request) -> list[str]:
        return [f"response = send({quote(request.method.value)}, {quote(request.path)});"]

    def render_assertion(self, assertion: Assertion) -> str:
        match assertion:
            case StatusEquals(code=code):
                return f"assertEquals({int_literal(code)}, response.statusCode());"
            case StatusInRange(min=low, max=high):
                return (
                    f"assertTrue(response.statusCode() >= {int_literal(low)} "
                    f"&& response.statusCode() <= {int_literal(high)}, "
                    f'"status " + response.statusCode() + " not in {low}..{high}");'
                )
            case BodyContains(text=text):
                return f"assertTrue(response.body().contains({quote(text)}), {quote('body does not contain ' + text)});"
            case HeaderEquals(name=name, value=value):
                return f'assertEquals({quote(value)}, response.headers().firstValue({quote(name)}).orElse(null));'
        raise TypeError(f"Unknown assertion: {assertion!r}")


def int_literal(value: int) -> str:
    """Java literal for a status code bound.

    statusCode() is an int, so values past the int range widen to long, and
    anything past the long range compares the same as Long.MAX_VALUE.
    """
    if value <= INT_MAX:
        return str(value)
    if value <= LONG_MAX:
        return f"{value}L"
    return "Long.MAX_VALUE"
