"""
rust-project-gen — CLI entrypoint.

Usage:
    python -m rpgen.main              # same as `generate`
    python -m rpgen.main generate --dry-run
    python -m rpgen.main config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from rpgen import __version__
from rpgen.core.observability.logging_config import level_from_flags, setup_logging


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="rust-project-gen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to rust-project-gen.yml (default: ./rust-project-gen.yml if present).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Generate rust-project.json for a tree of standalone Rust exercises."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=level_from_flags(verbose, quiet, debug, os.environ.get("RPG_LOG_LEVEL")),
        log_file=os.environ.get("RPG_LOG_FILE"),
        log_file_level=os.environ.get("RPG_LOG_FILE_LEVEL"),
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(generate)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output summary as JSON.")
@click.option("--dry-run", is_flag=True, help="Print the document instead of writing it.")
@click.pass_context
def generate(ctx: click.Context, as_json: bool = False, dry_run: bool = False) -> None:
    """Scan the exercises and write rust-project.json."""
    from rpgen.core.persistence.document_file import render_document
    from rpgen.core.services.toolchain import Toolchain
    from rpgen.core.use_cases.generate import run_generate

    quiet = ctx.obj.get("quiet", False)

    def report_toolchain(toolchain: Toolchain) -> None:
        # stdout carries the document on --dry-run and the summary on --json
        if quiet or as_json or toolchain.source != "rustc":
            return
        click.echo(f"Determined toolchain: {toolchain.root}\n", err=dry_run)

    result = run_generate(
        config_path=ctx.obj.get("config_path"),
        dry_run=dry_run,
        on_toolchain=report_toolchain,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    assembly = result.assembly
    assert assembly is not None  # guaranteed after error check above

    if dry_run:
        click.echo(render_document(assembly.document).decode("utf-8"), nl=False)
        return

    if quiet:
        return

    click.secho(f"✅ Wrote {result.output_path}", fg="green", bold=True)
    click.echo(f"   sysroot_src: {assembly.document.sysroot_src}")
    click.echo(
        f"   Crates: {len(assembly.document.crates)} "
        f"({assembly.exercise_count} exercises, {assembly.async_count} async)"
    )
    if ctx.obj.get("verbose"):
        for unit in assembly.document.crates:
            deps = f" → {', '.join(unit.dependency_names)}" if unit.deps else ""
            click.echo(f"     • {unit.root_module}{deps}")


@cli.group()
def config() -> None:
    """Generator configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate rust-project-gen.yml and show the effective settings."""
    from rpgen.core.config.loader import ConfigError, load_config

    try:
        cfg = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"valid": False, "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"valid": True, "config": cfg.model_dump(mode="json")}, indent=2))
        return

    click.secho("✅ Configuration is valid", fg="green", bold=True)
    click.echo(f"   Scan:    {cfg.scan_pattern}")
    click.echo(f"   Output:  {cfg.output_path}")
    click.echo(f"   Edition: {cfg.edition}")
    click.echo(f"   Async:   {cfg.async_prefix}* → {cfg.runtime.package_dir}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
