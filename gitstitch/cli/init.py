"""CLI command for setting up a stitched repository."""

from pathlib import Path
from typing import Optional

import typer

from gitstitch.config import ConfigError, save_components, set_base_commit
from gitstitch.git import GitError
from gitstitch.manifest import ManifestError, load_manifest
from gitstitch.stitch import Component, StitchError, stitch_components
from gitstitch.cli.utils import (
    echo_stitch_result,
    echo_warnings,
    fail,
    fetch_remotes,
    make_trace,
    open_store,
)


def init_command(
    remotes: Optional[list[str]] = typer.Argument(
        None,
        help="Remotes to stitch; each lands in a directory named after it",
    ),
    manifest: Optional[Path] = typer.Option(
        None,
        "--manifest",
        "-m",
        help="YAML manifest describing the components instead of remote names",
    ),
    no_fetch: bool = typer.Option(
        False,
        "--no-fetch",
        help="Do not fetch the remotes before stitching",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        envvar="GIT_STITCH_VERBOSE",
        help="Print diagnostics while stitching",
    ),
) -> None:
    """Configure components and create the first stitched commit.

    With remote names, each remote's default branch is stitched whole into a
    directory named after the remote. A manifest can choose the branch, a
    subdirectory of the source, and the target directory per component.
    """
    if manifest and remotes:
        fail("Give either remote names or --manifest, not both.")
    if not manifest and len(remotes or []) < 2:
        fail("init requires at least two remote names")

    trace = make_trace(verbose)
    try:
        store = open_store()

        if manifest:
            components = load_manifest(manifest)
            if not no_fetch:
                fetch_remotes(store, components)
        else:
            components = []
            for remote in remotes:
                if not store.remote_exists(remote):
                    raise GitError(f"remote {remote} does not exist")
                if not no_fetch:
                    typer.echo(f"Fetching {remote}...")
                    store.fetch(remote)
                branch = store.default_branch(remote)
                components.append(Component(name=remote, remote=remote, branch=branch))

        result = stitch_components(store, components, trace=trace)
        save_components(store, components)
        set_base_commit(store, result.commit)
    except (GitError, StitchError, ConfigError, ManifestError) as e:
        fail(str(e), trace)

    echo_warnings(trace)
    echo_stitch_result(result)
