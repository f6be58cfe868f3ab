"""
relinstall — CLI entrypoint.

Usage:
    relinstall --help
    relinstall install
    relinstall install --repo experts-chat/context --version v1.4.0
    relinstall detect --json
    relinstall config check --config installer.yml
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from relinstall import __version__
from relinstall.core.observability.logging_config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="relinstall")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to installer.yml (default: built-in settings).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """relinstall — install prebuilt release binaries, checksum-verified."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    configure_logging(debug=debug, verbose=verbose, quiet=quiet)


_repo_option = click.option(
    "--repo", default=None, metavar="OWNER/REPO", help="Release repository.",
)
_binary_option = click.option(
    "--binary", default=None, help="Executable name (default: repo name).",
)
_json_option = click.option(
    "--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.",
)


@cli.command()
@_repo_option
@_binary_option
@click.option("--version", "version", default=None, metavar="TAG", help="Install this tag instead of the latest.")
@click.option("--install-dir", default=None, help="Install here instead of searching.")
@click.option("--dry-run", is_flag=True, help="Resolve and plan, but don't download or install.")
@_json_option
@click.pass_context
def install(
    ctx: click.Context,
    repo: str | None,
    binary: str | None,
    version: str | None,
    install_dir: str | None,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Download, verify, and install the latest release."""
    from relinstall.core.use_cases.install import install_release

    quiet = ctx.obj.get("quiet", False)

    def progress(msg: str) -> None:
        if not as_json and not quiet:
            click.secho(msg, fg="bright_black")

    try:
        result = install_release(
            config_path=ctx.obj.get("config_path"),
            repo=repo,
            binary=binary,
            version=version,
            install_dir=install_dir,
            dry_run=dry_run,
            progress=progress,
        )
    except KeyboardInterrupt:
        click.secho("❌ Interrupted.", fg="red", err=True)
        sys.exit(130)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    outcome = result.outcome
    assert outcome is not None  # guaranteed after error check above

    if outcome.dry_run:
        click.secho(f"[dry-run] {outcome.binary} {outcome.tag} for {outcome.platform}", fg="cyan", bold=True)
        click.echo(f"   Archive:  {outcome.artifact.archive_url}")
        click.echo(f"   Manifest: {outcome.artifact.manifest_url}")
        created = "" if outcome.location.exists else " (will be created)"
        click.echo(f"   Target:   {outcome.location.path / outcome.binary}{created}")
        click.echo(f"   Checksum: {outcome.checksum_tool}")
        return

    for warning in outcome.warnings:
        click.secho(f"⚠️  {warning}", fg="yellow", err=True)

    click.secho(
        f"> Success! {outcome.binary} has been installed successfully to {outcome.installed_path}",
        fg="magenta",
        bold=True,
    )
    if ctx.obj.get("verbose") and outcome.digest:
        click.echo(f"   sha256: {outcome.digest}")

    if outcome.path_advice:
        click.echo()
        for line in outcome.path_advice:
            if line.startswith("    "):
                click.echo(f"\n{line}\n")
            else:
                click.secho(f"⚠️  {line}", fg="yellow")


@cli.command()
@_repo_option
@_binary_option
@_json_option
@click.pass_context
def detect(ctx: click.Context, repo: str | None, binary: str | None, as_json: bool) -> None:
    """Show platform, checksum tool, and install directory (no network)."""
    from relinstall.core.use_cases.detect import detect_environment

    result = detect_environment(ctx.obj.get("config_path"), repo=repo, binary=binary)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ready else 1)

    data = result.to_dict()
    click.secho(f"\n🔍 {data['package'] or '?'} ({data['binary'] or '?'})", fg="cyan", bold=True)
    rows = (
        ("platform", "Platform", data["platform"]),
        ("checksum_tool", "Checksum", data["checksum_tool"]),
        ("install_dir", "Install dir", data["install_dir"]),
    )
    for key, label, value in rows:
        if key in result.errors:
            click.secho(f"   ✗ {label}: {result.errors[key]}", fg="red")
        else:
            suffix = ""
            if key == "install_dir" and data["install_dir_exists"] is False:
                suffix = " (will be created)"
            click.secho(f"   ✓ {label}: {value}{suffix}", fg="green")
    if "config" in result.errors:
        click.secho(f"   ✗ Config: {result.errors['config']}", fg="red")
    click.echo()

    if not result.ready:
        sys.exit(1)


@cli.group()
def config() -> None:
    """Installer configuration commands."""


@config.command("check")
@_json_option
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate installer.yml (or the built-in defaults)."""
    from relinstall.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Package: {result.config.package.slug}")
        click.echo(f"   Binary:  {result.config.package.binary}")
        click.echo(f"   Candidates: {', '.join(result.config.candidate_dirs)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)


if __name__ == "__main__":
    cli()
