"""Shared utility functions for CLI commands."""

from typing import Iterable, Optional

import typer
from pydantic import ValidationError

from gitstitch.git import GitError, ObjectStore, get_repo_root
from gitstitch.stitch import Component, ComponentConfigError, StitchResult, Trace


def open_store() -> ObjectStore:
    """Open the object store of the repository containing the current directory.

    Raises:
        GitError: If not in a git repository.
    """
    return ObjectStore(get_repo_root())


def make_trace(verbose: bool = False) -> Trace:
    """Create a run trace that echoes diagnostics when verbose."""
    return Trace(echo=typer.echo if verbose else None)


def echo_warnings(trace: Optional[Trace]) -> None:
    if trace is None:
        return
    for warning in trace.warnings:
        typer.echo(f"Warning: {warning}", err=True)


def fail(message: str, trace: Optional[Trace] = None) -> None:
    """Print warnings and an error, then exit with status 1."""
    echo_warnings(trace)
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def component_from_ref(ref: str) -> Component:
    """Build an ad-hoc component from a 'remote/branch' ref.

    Raises:
        ComponentConfigError: If the ref is not in remote/branch form.
    """
    remote, sep, branch = ref.partition("/")
    if not sep or not remote or not branch:
        raise ComponentConfigError(f"ref {ref} must be in format 'remote/branch'")
    try:
        return Component(name=remote, remote=remote, branch=branch)
    except ValidationError as e:
        raise ComponentConfigError(f"Invalid ref {ref}: {e}")


def fetch_remotes(store: ObjectStore, components: Iterable[Component]) -> None:
    """Fetch the remote of every component that has one.

    Raises:
        GitError: If a remote does not exist or the fetch fails.
    """
    fetched = set()
    for component in components:
        remote = component.remote
        if not remote or remote in fetched:
            continue
        if not store.remote_exists(remote):
            raise GitError(f"remote '{remote}' does not exist")
        typer.echo(f"Fetching {remote}...")
        store.fetch(remote)
        fetched.add(remote)


def echo_stitch_result(result: StitchResult) -> None:
    """Print the stitched commit and how to check it out."""
    for source in result.sources:
        typer.echo(f"{source.ref} is {source.commit}")
    typer.echo(f"Stitched {' & '.join(result.names)} into {result.commit}")
    typer.echo("To check out the new commit, run:")
    typer.echo(f"  git checkout -b mono {result.commit}")
    typer.echo("Or to update your current branch:")
    typer.echo(f"  git reset {result.commit}")
