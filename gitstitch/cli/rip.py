"""CLI command for ripping composite commits back into component branches."""

import time
from typing import Optional

import typer

from gitstitch.config import ConfigError, load_components, load_settings
from gitstitch.git import GitError
from gitstitch.stitch import CommitterPolicy, MergePolicy, StitchError, rip
from gitstitch.cli.utils import echo_warnings, fail, make_trace, open_store


def rip_command(
    prefix: Optional[str] = typer.Argument(
        None,
        help="Prefix for the created branches (default: rip-<timestamp>)",
    ),
    base: Optional[str] = typer.Option(
        None,
        "--base",
        help="Stitched base commit to split from (default: most recent in the log)",
    ),
    committer: Optional[CommitterPolicy] = typer.Option(
        None,
        "--committer",
        help="Committer of the rebuilt commits: preserve the original or use the deterministic stitch identity",
    ),
    merges: Optional[MergePolicy] = typer.Option(
        None,
        "--merges",
        help="Merge commits after the base: reject them, or follow first parents only",
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--no-strict",
        help="Fail instead of matching components to base parents by position",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Move output branches that already exist",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        envvar="GIT_STITCH_VERBOSE",
        help="Print diagnostics while ripping",
    ),
) -> None:
    """Split commits made since the last stitch into one branch per component.

    Each branch is named <prefix>-<component> and holds only that
    component's changes, with the original messages and authors.
    """
    if not prefix:
        prefix = f"rip-{int(time.time())}"

    trace = make_trace(verbose)
    try:
        store = open_store()
        settings = load_settings(store)
        result = rip(
            store,
            prefix,
            base=base,
            components=load_components(store),
            committer_policy=committer or settings.committer_policy,
            merge_policy=merges or settings.merge_policy,
            strict=settings.strict_match if strict is None else strict,
            force=force,
            trace=trace,
        )
    except (GitError, StitchError, ConfigError) as e:
        fail(str(e), trace)

    echo_warnings(trace)
    if result.is_empty:
        typer.echo("No commits to rip since base commit")
        return

    typer.echo("Branches created:")
    for branch in result.branches:
        typer.echo(f"  {branch.name}")


def rip_main() -> None:
    """Entry point for the standalone git-rip command."""
    typer.run(rip_command)
