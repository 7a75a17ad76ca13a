"""History composition engine for gitstitch.

This package provides stitching and ripping with:
- models: Component, ResolvedSource, StitchResult, ComponentHead, Replay,
          PublishedBranch, RipResult, CommitterPolicy, MergePolicy
- exceptions: StitchError and its subclasses
- identity: Deterministic signatures for written commits
- trace: Trace, the explicit run observer
- builder: STITCH_MARKER, resolve_source, build_composite_commit, stitch_components
- locator: find_base_commit, is_stitch_commit
- resolver: components_for_base, resolve_component_heads
- tree_edit: TreeEditor
- partitioner: group_changes, partition_commits, publish_branches, rip
"""

# Models
from gitstitch.stitch.models import (
    CommitterPolicy,
    Component,
    ComponentHead,
    MergePolicy,
    PublishedBranch,
    Replay,
    ResolvedSource,
    RipResult,
    StitchResult,
)

# Exceptions
from gitstitch.stitch.exceptions import (
    AmbiguousParentMatchError,
    BranchConflictError,
    ChangeResolutionError,
    ComponentConfigError,
    MissingTreeError,
    NoBaseCommitError,
    StitchError,
    UnresolvedRefError,
    UnsupportedHistoryError,
)

# Identity
from gitstitch.stitch.identity import (
    STITCH_EMAIL,
    STITCH_NAME,
    composite_timestamp,
    replay_signatures,
    stitch_signature,
)

# Trace
from gitstitch.stitch.trace import Trace

# Builder
from gitstitch.stitch.builder import (
    STITCH_MARKER,
    build_composite_commit,
    resolve_source,
    stitch_components,
)

# Locator
from gitstitch.stitch.locator import find_base_commit, is_stitch_commit

# Resolver
from gitstitch.stitch.resolver import components_for_base, resolve_component_heads

# Tree editing
from gitstitch.stitch.tree_edit import TreeEditor

# Partitioner
from gitstitch.stitch.partitioner import (
    apply_changes,
    branch_name,
    group_changes,
    partition_commits,
    publish_branches,
    rip,
)


__all__ = [
    # Models
    "CommitterPolicy",
    "Component",
    "ComponentHead",
    "MergePolicy",
    "PublishedBranch",
    "Replay",
    "ResolvedSource",
    "RipResult",
    "StitchResult",
    # Exceptions
    "AmbiguousParentMatchError",
    "BranchConflictError",
    "ChangeResolutionError",
    "ComponentConfigError",
    "MissingTreeError",
    "NoBaseCommitError",
    "StitchError",
    "UnresolvedRefError",
    "UnsupportedHistoryError",
    # Identity
    "STITCH_EMAIL",
    "STITCH_NAME",
    "composite_timestamp",
    "replay_signatures",
    "stitch_signature",
    # Trace
    "Trace",
    # Builder
    "STITCH_MARKER",
    "build_composite_commit",
    "resolve_source",
    "stitch_components",
    # Locator
    "find_base_commit",
    "is_stitch_commit",
    # Resolver
    "components_for_base",
    "resolve_component_heads",
    # Tree editing
    "TreeEditor",
    # Partitioner
    "apply_changes",
    "branch_name",
    "group_changes",
    "partition_commits",
    "publish_branches",
    "rip",
]
