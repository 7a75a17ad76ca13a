"""Git access layer for gitstitch.

This package wraps the git executable with:
- exceptions: GitError
- runner: _run_git_command, get_repo_root
- objects: TreeEntry, Signature, CommitInfo, ChangeStatus, FileChange and parsers
- store: ObjectStore, the blob/tree/commit/ref adapter used by the stitch engine
"""

# Exceptions
from gitstitch.git.exceptions import GitError

# Runner utilities
from gitstitch.git.runner import (
    _run_git_command,
    get_repo_root,
)

# Object models
from gitstitch.git.objects import (
    MODE_TREE,
    ChangeStatus,
    CommitInfo,
    FileChange,
    Signature,
    TreeEntry,
    parse_commit,
    parse_raw_diff,
    parse_tree_listing,
)

# Object store
from gitstitch.git.store import ObjectStore


__all__ = [
    # Exceptions
    "GitError",
    # Runner
    "_run_git_command",
    "get_repo_root",
    # Objects
    "MODE_TREE",
    "ChangeStatus",
    "CommitInfo",
    "FileChange",
    "Signature",
    "TreeEntry",
    "parse_commit",
    "parse_raw_diff",
    "parse_tree_listing",
    # Store
    "ObjectStore",
]
