"""
mglgen — CLI entrypoint.

Usage:
    mglgen --template file.tmpl --output file.go
    mglgen --mgl64 [--dir ../mgl64]
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click
from click.core import ParameterSource

from mglgen import __version__
from mglgen.adapters.base import SourceTransform, ToolError
from mglgen.adapters.gotools import GoToolchainTransform
from mglgen.core.config.loader import ConfigError, load_config
from mglgen.core.models.config import CodegenConfig
from mglgen.core.observability.logging_config import resolve_level, setup_logging

USAGE = (
    "Usage: mglgen --template file.tmpl --output file.go\n"
    "Usage: mglgen --mgl64 [--dir ../mgl64]"
)

# Options that select or configure a mode; at least one must be given
_MODE_OPTIONS = ("template_path", "output_path", "mgl64", "dest_dir")


def _usage_exit(ctx: click.Context) -> None:
    click.echo(USAGE)
    click.echo(ctx.get_help())
    ctx.exit(2)


class UsageCommand(click.Command):
    """Bad or unknown options print the usage text on stdout and exit 2."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError:
            _usage_exit(ctx)
            raise


def _fail(message: str, output: str = "") -> None:
    click.secho(f"❌ {message}", fg="red", err=True)
    if output:
        click.echo(output.rstrip("\n"), err=True)
    sys.exit(1)


@click.command(cls=UsageCommand, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="mglgen")
@click.option("--template", "template_path", default="file.tmpl", help="Template path.")
@click.option("--output", "output_path", default="file.go", help="Output path.")
@click.option("--mgl64", is_flag=True, help="Derive mgl64 from the current mgl32 tree.")
@click.option("--dir", "dest_dir", default=None, help="Path to mgl64 location (default: ../mgl64).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to codegen.yml (default: auto-detect).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Print the derivation summary as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.argument("extra", nargs=-1, required=False, metavar="")
@click.pass_context
def cli(
    ctx: click.Context,
    template_path: str,
    output_path: str,
    mgl64: bool,
    dest_dir: str | None,
    config_path: str | None,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
    extra: tuple[str, ...],
) -> None:
    """Generate mgl32 sources from templates, or derive mgl64 from mgl32."""
    if extra or not any(
        ctx.get_parameter_source(name) is not ParameterSource.DEFAULT for name in _MODE_OPTIONS
    ):
        _usage_exit(ctx)

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug, verbose, quiet, os.environ.get("MGLGEN_LOG_LEVEL")),
        log_file=os.environ.get("MGLGEN_LOG_FILE"),
        log_file_level=os.environ.get("MGLGEN_LOG_FILE_LEVEL"),
    )

    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        _fail(str(e))
        return

    transform = GoToolchainTransform(config.formatter, config.import_fixer)
    missing = transform.missing_tools(fix_imports=mgl64)
    if missing:
        _fail(f"Not found on PATH: {', '.join(missing)}")
        return

    if mgl64:
        _run_derive(Path(dest_dir or config.output_dir), transform, config, as_json, quiet)
    else:
        _run_template(Path(template_path), Path(output_path), transform, quiet)


def _run_template(template: Path, output: Path, transform: SourceTransform, quiet: bool) -> None:
    from mglgen.core.services.template_render import TemplateRenderError, render_to_file

    try:
        written = render_to_file(template, output, transform)
    except TemplateRenderError as e:
        _fail(f"Template error: {e}")
        return
    except ToolError as e:
        _fail(f"Formatting failed: {e}", output=e.output)
        return
    except OSError as e:
        _fail(f"Cannot write {output}: {e}")
        return

    if not quiet:
        click.secho(f"✓ {template.name} → {written}", fg="green")


def _run_derive(
    dest: Path,
    transform: SourceTransform,
    config: CodegenConfig,
    as_json: bool,
    quiet: bool,
) -> None:
    from mglgen.core.services.derive import DerivationError, derive_tree

    try:
        result = derive_tree(dest, Path("."), transform=transform, config=config)
    except DerivationError as e:
        _fail(f"Derivation failed: {e}", output=e.output)
        return
    except OSError as e:
        _fail(f"Derivation failed: {e}")
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not quiet:
        click.secho(f"✓ Derived {result.count} files → {dest}", fg="green")
        for path in result.skipped:
            click.secho(f"   ⊘ {path} (not a regular file)", fg="yellow")


if __name__ == "__main__":
    cli()
