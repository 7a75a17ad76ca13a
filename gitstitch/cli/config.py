"""CLI commands for inspecting and exporting the stitch configuration."""

from pathlib import Path

import typer

from gitstitch.config import ConfigError, get_base_commit, load_components, load_settings
from gitstitch.git import GitError
from gitstitch.manifest import save_manifest
from gitstitch.cli.utils import fail, open_store

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Inspect the components stored in git config",
    add_completion=False,
)


@config_app.command("show")
def config_show() -> None:
    """Show configured components, the last base commit and run settings."""
    try:
        store = open_store()
        components = load_components(store)
        base = get_base_commit(store)
        settings = load_settings(store)
    except (GitError, ConfigError) as e:
        fail(str(e))

    if not components:
        typer.echo("No components configured. Run 'git-stitch init' to set up.")
    else:
        typer.echo("Components:")
        for component in components:
            typer.echo(f"  {component.name}")
            typer.echo(f"    Ref: {component.ref or 'not set'}")
            typer.echo(f"    Subdir: {component.subdir}")
            typer.echo(f"    Directory: {component.directory}")

    typer.echo()
    typer.echo(f"Base commit: {base or 'not set'}")
    typer.echo(f"Committer policy: {settings.committer_policy.value}")
    typer.echo(f"Merge policy: {settings.merge_policy.value}")
    typer.echo(f"Strict matching: {'yes' if settings.strict_match else 'no'}")


@config_app.command("export")
def config_export(
    path: Path = typer.Argument(..., help="Where to write the YAML manifest"),
) -> None:
    """Write the configured components to a YAML manifest."""
    try:
        store = open_store()
        components = load_components(store)
    except (GitError, ConfigError) as e:
        fail(str(e))

    if not components:
        fail("No components configured.")

    save_manifest(path, components)
    typer.echo(f"Wrote {len(components)} component(s) to {path}")
