"""Deterministic identity and timestamps for written commits.

Composite commits take their identity from the reserved stitch signature
and their timestamp from their parents, so identical inputs always produce
the same commit hash. Nothing here reads the clock, the host or the user.
"""

from gitstitch.git.objects import CommitInfo, Signature
from gitstitch.stitch.models import CommitterPolicy

STITCH_NAME = "git-stitch"
STITCH_EMAIL = "git-stitch@localhost"
STITCH_OFFSET = "+0000"


def stitch_signature(timestamp: int) -> Signature:
    """Return the reserved tool identity at the given timestamp."""
    return Signature(
        name=STITCH_NAME,
        email=STITCH_EMAIL,
        timestamp=timestamp,
        offset=STITCH_OFFSET,
    )


def composite_timestamp(parents: list[CommitInfo]) -> int:
    """Return the newest committer timestamp among the parents.

    Raises:
        ValueError: If there are no parents.
    """
    if not parents:
        raise ValueError("a composite commit needs at least one parent")
    return max(parent.committer.timestamp for parent in parents)


def replay_signatures(
    commit: CommitInfo, policy: CommitterPolicy = CommitterPolicy.PRESERVE
) -> tuple[Signature, Signature]:
    """Return the (author, committer) pair for a replayed commit.

    The author is always the original one. With PRESERVE the original
    committer is kept; with DETERMINISTIC the committer is the stitch
    identity at the original commit time.
    """
    if policy == CommitterPolicy.DETERMINISTIC:
        return commit.author, stitch_signature(commit.committer.timestamp)
    return commit.author, commit.committer
