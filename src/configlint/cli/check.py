"""configlint check command - verify config struct usage across artifacts."""

from pathlib import Path
from typing import Any

import click

from configlint.core.console import status
from configlint.core.errors import ConfigLintError
from configlint.core.logging import configure_logging
from configlint.lint.ops import LintOps
from configlint.lint.report import format_json, format_summary, format_text
from configlint.settings.loader import load_settings

EXIT_FAILED = 1
EXIT_INPUT_ERROR = 2


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--schema", "schema_file", help="Header declaring the config struct")
@click.option("--persistence", "persistence_file", help="Source reading/writing the JSON document")
@click.option("--runtime", "runtime_file", help="Source implementing console get/set")
@click.option("--docs", "docs_file", help="Markdown file with the options table")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def check_command(
    ctx: click.Context,
    path: Path,
    schema_file: str | None,
    persistence_file: str | None,
    runtime_file: str | None,
    docs_file: str | None,
    as_json: bool,
) -> None:
    """Check that every config field is read, written, handled and documented.

    PATH is the project root (default: current directory). Artifact paths
    are relative to it.

    Exit status is 0 when no problems are found, 1 when diagnostics were
    reported and 2 when an artifact or the settings could not be read.
    """
    project_root = path.resolve()

    overrides: dict[str, Any] = {}
    artifacts = {
        key: value
        for key, value in (
            ("schema_file", schema_file),
            ("persistence_file", persistence_file),
            ("runtime_file", runtime_file),
            ("docs_file", docs_file),
        )
        if value is not None
    }
    if artifacts:
        overrides["artifacts"] = artifacts
    if as_json:
        overrides["report"] = {"format": "json"}
    if ctx.obj and ctx.obj.get("verbose"):
        overrides["logging"] = {"level": "DEBUG"}

    try:
        settings = load_settings(project_root, **overrides)
        configure_logging(config=settings.logging)
        result = LintOps(project_root, settings).check()
    except ConfigLintError as e:
        click.echo(f"Error: {e.message}", err=True)
        ctx.exit(EXIT_INPUT_ERROR)

    if settings.report.format == "json":
        click.echo(format_json(result))
    else:
        for line in format_text(result):
            click.echo(line)
        if result.diagnostics:
            click.echo()
        message, style = format_summary(result)
        status(message, style=style)

    if not result.passed:
        ctx.exit(EXIT_FAILED)
