"""CLI command for stitching component histories into one commit."""

from typing import Optional

import typer

from gitstitch.config import ConfigError, load_components, set_base_commit
from gitstitch.git import GitError
from gitstitch.stitch import StitchError, stitch_components
from gitstitch.cli.utils import (
    component_from_ref,
    echo_stitch_result,
    echo_warnings,
    fail,
    fetch_remotes,
    make_trace,
    open_store,
)


def stitch_command(
    refs: Optional[list[str]] = typer.Argument(
        None,
        help="Refs to stitch, as remote/branch. Defaults to the configured components.",
    ),
    no_fetch: bool = typer.Option(
        False,
        "--no-fetch",
        help="Use the refs as they are instead of fetching their remotes first",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        envvar="GIT_STITCH_VERBOSE",
        help="Print diagnostics while stitching",
    ),
) -> None:
    """Combine several histories into one commit, one directory per history.

    The resulting commit is deterministic: stitching the same refs again
    yields the same commit hash.
    """
    trace = make_trace(verbose)
    try:
        store = open_store()

        if refs:
            components = [component_from_ref(ref) for ref in refs]
        else:
            components = load_components(store)
            if not components:
                fail("No refs given and no components configured. Run 'git-stitch init' first.")

        if not no_fetch:
            fetch_remotes(store, components)

        result = stitch_components(store, components, trace=trace)
        set_base_commit(store, result.commit)
    except (GitError, StitchError, ConfigError) as e:
        fail(str(e), trace)

    echo_warnings(trace)
    echo_stitch_result(result)
