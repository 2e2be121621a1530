"""testlang CLI entry point."""

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from testlang import __version__
from testlang.diagnostics import CompileError, SemanticErrorKind, Stage

console = Console()

TARGET_CHOICES = ["python", "py", "java"]

HINTS: dict[Stage, list[str]] = {
    Stage.LEX: [
        "String literals are double-quoted and must close on the same line",
        "Only letters, digits, _ and the symbols { } ; = .. are allowed outside strings",
    ],
    Stage.PARSE: [
        "Every request and expect statement ends with ';'",
        'Requests look like: GET "/api/users";',
        "Each test block is written: test Name { ... }",
    ],
    Stage.CODEGEN: [
        "Check that the output directory is writable",
        "Verify that the output path is correct",
        "Java output files must be named after a valid class name, e.g. ApiTests.java",
    ],
}

SEMANTIC_HINTS: dict[SemanticErrorKind, list[str]] = {
    SemanticErrorKind.NO_TESTS: [
        'Add a test block, e.g. test First { GET "/api/users"; expect status = 200; '
        'expect body contains "id"; }',
    ],
    SemanticErrorKind.EMPTY_TEST: [
        "Each test block needs at least one request: GET, POST, PUT or DELETE",
    ],
    SemanticErrorKind.INSUFFICIENT_ASSERTIONS: [
        "Each test needs at least 2 assertions",
        "expect status = <code>;",
        "expect status in <min>..<max>;",
        'expect body contains "text";',
        'expect header "Name" = "Value";',
    ],
}


def _hints(error: CompileError) -> list[str]:
    kind = getattr(error, "kind", None)
    if isinstance(kind, SemanticErrorKind):
        return SEMANTIC_HINTS[kind]
    return HINTS.get(error.stage, [])


def _report(error: CompileError, path: Path) -> None:
    """Print a diagnostic panel for a failed run."""
    diagnostic = error.diagnostic
    where = f"{path}:{diagnostic.location}" if diagnostic.location else str(path)

    lines = [
        f"[bold]{escape(diagnostic.message)}[/bold]",
        f"[dim]{escape(where)} ({diagnostic.stage.value})[/dim]",
    ]
    hints = _hints(error)
    if hints:
        lines.append("")
        lines.append("[blue]Suggestions:[/blue]")
        lines.extend(f"  • {escape(hint)}" for hint in hints)

    console.print(
        Panel("\n".join(lines), title="[red]Compilation Failed[/red]", border_style="red")
    )


def _configure(config: Path | None, project: Path | None, debug: bool):
    from testlang.config import load_config
    from testlang.logging import setup_logging

    cfg = load_config(config_path=config, project_root=project or Path.cwd())
    setup_logging(
        level="DEBUG" if debug else cfg.logging.level,
        json_output=cfg.logging.json_output,
    )
    return cfg


config_option = click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to testlang.yaml config file.",
)
project_option = click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root directory. Defaults to current directory.",
)
debug_option = click.option("--debug", is_flag=True, help="Enable debug logging.")


@click.group()
@click.version_option(__version__, prog_name="testlang")
def cli() -> None:
    """testlang - compile TestLang++ files into HTTP test code."""
    pass


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--target",
    "-t",
    type=click.Choice(TARGET_CHOICES),
    default=None,
    help="Target language. Defaults to the configured target (python).",
)
@config_option
@project_option
@debug_option
def compile(
    source: Path,
    output: Path,
    target: str | None,
    config: Path | None,
    project: Path | None,
    debug: bool,
) -> None:
    """Compile a TestLang++ file.

    SOURCE is the .test file to compile, OUTPUT the generated file to write.
    """
    from testlang.pipeline import compile_file

    cfg = _configure(config, project, debug)

    if debug:
        console.print(f"[dim]Config: {cfg.model_dump_json(indent=2)}[/dim]\n")

    try:
        result = compile_file(source, output, target=target, config=cfg)
    except CompileError as e:
        _report(e, source)
        raise SystemExit(1)

    console.print(
        Panel(
            f"[green]✓[/green] Input:  {escape(str(result.source))}\n"
            f"[green]✓[/green] Output: {escape(str(result.output))}\n"
            f"  {result.test_count} tests ({result.target.value})",
            title="[green]Compilation Successful[/green]",
            border_style="green",
        )
    )


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@config_option
@project_option
@debug_option
def check(source: Path, config: Path | None, project: Path | None, debug: bool) -> None:
    """Validate a TestLang++ file without generating code."""
    from testlang.pipeline import check_file

    _configure(config, project, debug)

    try:
        program = check_file(source)
    except CompileError as e:
        _report(e, source)
        raise SystemExit(1)

    requests = sum(len(t.requests) for t in program.tests)
    assertions = sum(len(t.assertions) for t in program.tests)
    console.print(
        f"[green]✓[/green] Valid: {len(program.tests)} tests, "
        f"{requests} requests, {assertions} assertions"
    )


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def tokens(source: Path) -> None:
    """Print the token stream of a TestLang++ file."""
    from testlang.compiler.lexer import Lexer
    from testlang.pipeline import read_source

    table = Table(title=str(source))
    table.add_column("Pos", justify="right", style="dim")
    table.add_column("Kind")
    table.add_column("Text")

    try:
        for token in Lexer(read_source(source)):
            table.add_row(f"{token.line}:{token.column}", token.kind.name, escape(token.text))
    except CompileError as e:
        _report(e, source)
        raise SystemExit(1)

    console.print(table)


@cli.command()
def init() -> None:
    """Initialize testlang in the current directory.

    Creates testlang.yaml with the default settings.
    """
    config_file = Path.cwd() / "testlang.yaml"
    if config_file.exists():
        console.print(f"[yellow]-[/yellow] {config_file.name} already exists")
        return

    config_file.write_text(
        """\
# testlang configuration
version: "0.1"

# Default target: python (pytest + httpx) | java (JUnit 5)
target: python

codegen:
  # Prefix for every request path
  base_url: "http://localhost:8080"

  # Per-request timeout in seconds
  timeout_seconds: 10

  # Headers sent with every request
  # default_headers:
  #   Accept: application/json

targets:
  python:
    # Name of the httpx client fixture
    fixture_name: client
  # java:
  #   package: com.example.api
  #   class_name: ApiTests  # defaults to the output file name

logging:
  # DEBUG | INFO | WARNING | ERROR
  level: WARNING
  # json: false
""",
        encoding="utf-8",
    )
    console.print(f"[green]✓[/green] Created {config_file.name}")


@cli.command()
@config_option
@project_option
def config(config: Path | None, project: Path | None) -> None:
    """Show the current configuration."""
    from testlang.config import load_config

    cfg = load_config(config_path=config, project_root=project or Path.cwd())

    console.print(Panel(cfg.model_dump_json(indent=2), title="testlang Config"))


if __name__ == "__main__":
    cli()
