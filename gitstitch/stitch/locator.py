"""Base commit lookup for rip runs."""

from gitstitch.git.store import ObjectStore
from gitstitch.stitch.builder import STITCH_MARKER
from gitstitch.stitch.exceptions import NoBaseCommitError


def is_stitch_commit(message: str, marker: str = STITCH_MARKER) -> bool:
    """Return True if a commit message carries the stitch marker."""
    return message.startswith(marker)


def find_base_commit(store: ObjectStore, head: str = "HEAD", marker: str = STITCH_MARKER) -> str:
    """Find the most recent stitched commit reachable from head.

    Older stitched commits further down the history are ignored; only the
    newest one bounds the rip window.

    Raises:
        NoBaseCommitError: If head does not resolve or no stitched commit exists.
    """
    if store.resolve_ref(head) is None:
        raise NoBaseCommitError(f"Cannot resolve {head}; nothing to rip")

    for commit in store.search_log(
        lambda info: is_stitch_commit(info.message, marker), start=head, grep=marker
    ):
        return commit.hash

    raise NoBaseCommitError(f"No commit with message '{marker}' found in {head}")
