"""
gomodpin — CLI entrypoint.

Usage:
    gomodpin --help
    gomodpin path/to/go.mod
    gomodpin -v --exclude github.com/acme/tool path/to/go.mod
    python -m gomodpin.main path/to/go.mod
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from gomodpin import __version__
from gomodpin.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)


@click.command()
@click.version_option(version=__version__, prog_name="gomodpin")
@click.argument("manifest", type=click.Path(path_type=Path))
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--no-default-excludes",
    is_flag=True,
    help="Disable default excludes (dd-trace-go and orchestrion).",
)
@click.option(
    "--exclude",
    "excludes",
    multiple=True,
    metavar="MODULE",
    help="Module path to exclude; can be repeated.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to .gomodpin.yml (default: auto-detect from the go.mod directory).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def cli(
    manifest: Path,
    verbose: bool,
    quiet: bool,
    debug: bool,
    no_default_excludes: bool,
    excludes: tuple[str, ...],
    config_path: Path | None,
    as_json: bool,
) -> None:
    """Pin the dependencies of a go.mod to the versions already in use.

    Writes a backup next to MANIFEST (go.mod.old), then appends a sorted
    ``replace`` block that points every required module at itself.
    Running it twice appends twice.

    Examples:

        gomodpin ./go.mod

        gomodpin --exclude github.com/acme/tool --no-default-excludes ./go.mod
    """
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )

    from gomodpin.core.config.loader import load_settings
    from gomodpin.core.errors import ConfigError
    from gomodpin.core.use_cases.pin import PinResult, pin_manifest

    try:
        settings = load_settings(config_path, start_dir=manifest.parent)
    except ConfigError as e:
        result = PinResult(manifest_path=manifest, error=str(e))
    else:
        result = pin_manifest(
            manifest,
            user_excludes=excludes,
            use_default_excludes=not no_default_excludes,
            settings=settings,
        )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if quiet:
        return

    if not result.appended:
        click.secho("📌 Nothing to pin", fg="yellow", bold=True)
    else:
        click.secho(
            f"📌 Appended {result.count} replacements to {result.manifest_path}",
            fg="green",
            bold=True,
        )
        if verbose:
            for path, version in sorted(result.pinned.items()):
                if version:
                    click.echo(f"     • {path} {version}")
    click.echo(f"   Backup: {result.backup_path}")


if __name__ == "__main__":
    cli()
