"""Exception classes for the stitch engine.

Contains:
- StitchError: Base exception for stitching and ripping
- UnresolvedRefError: A component ref does not resolve to a commit
- MissingTreeError: A directory is missing from a commit's tree
- NoBaseCommitError: No stitched base commit is reachable
- AmbiguousParentMatchError: A component could only be matched by position
- ChangeResolutionError: A changed path has no usable blob or mode
- UnsupportedHistoryError: The rip window contains a merge or root commit
- BranchConflictError: An output branch already points elsewhere
- ComponentConfigError: Components are inconsistent with each other
"""


class StitchError(Exception):
    """Base exception for stitch and rip failures."""

    pass


class UnresolvedRefError(StitchError):
    """Raised when a ref cannot be resolved to a commit."""

    pass


class MissingTreeError(StitchError):
    """Raised when a directory does not exist in a commit's tree."""

    pass


class NoBaseCommitError(StitchError):
    """Raised when no stitched base commit can be found."""

    pass


class AmbiguousParentMatchError(StitchError):
    """Raised in strict mode when no base parent matches a component by tree."""

    pass


class ChangeResolutionError(StitchError):
    """Raised when a changed path cannot be resolved to a blob and mode."""

    pass


class UnsupportedHistoryError(StitchError):
    """Raised when the rip window holds commits that cannot be replayed."""

    pass


class BranchConflictError(StitchError):
    """Raised when an output branch exists and points at another commit."""

    pass


class ComponentConfigError(StitchError):
    """Raised when the component set is invalid."""

    pass
