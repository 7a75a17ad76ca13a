"""Rip composite commits back into per-component branches.

Contains:
- group_changes: Attribute file changes to components by top-level directory
- apply_changes: Build a component's next tree from its attributed changes
- partition_commits: Replay a window of composite commits onto component heads
- publish_branches: Write one branch per component once every chain is built
- rip: Locate, resolve, partition and publish in one run
"""

from typing import Iterable, Optional

from gitstitch.git.objects import ChangeStatus, FileChange, NULL_MODE, Signature, is_null_oid
from gitstitch.git.store import ObjectStore
from gitstitch.stitch.exceptions import (
    BranchConflictError,
    ChangeResolutionError,
    ComponentConfigError,
    UnresolvedRefError,
    UnsupportedHistoryError,
)
from gitstitch.stitch.identity import replay_signatures
from gitstitch.stitch.locator import find_base_commit
from gitstitch.stitch.models import (
    CommitterPolicy,
    Component,
    ComponentHead,
    MergePolicy,
    PublishedBranch,
    Replay,
    RipResult,
)
from gitstitch.stitch.resolver import components_for_base, resolve_component_heads
from gitstitch.stitch.tree_edit import TreeEditor
from gitstitch.stitch.trace import Trace


def group_changes(
    changes: list[FileChange], directories: Iterable[str]
) -> tuple[dict[str, list[FileChange]], list[FileChange]]:
    """Split changes by component directory.

    Paths are made relative to their component directory. Changes outside
    every component directory are returned separately.

    Returns:
        Tuple of (changes keyed by directory, unattributed changes).
    """
    known = set(directories)
    grouped: dict[str, list[FileChange]] = {}
    dropped = []
    for change in changes:
        directory, sep, relative = change.path.partition("/")
        if not sep or directory not in known:
            dropped.append(change)
            continue
        grouped.setdefault(directory, []).append(
            FileChange(path=relative, status=change.status, blob=change.blob, mode=change.mode)
        )
    return grouped, dropped


def _check_change(commit: str, directory: str, change: FileChange) -> None:
    if change.status == ChangeStatus.DELETED:
        return
    if not change.blob or is_null_oid(change.blob) or not change.mode or change.mode == NULL_MODE:
        raise ChangeResolutionError(
            f"Cannot resolve {directory}/{change.path} to a blob and mode in {commit}"
        )


def _check_identity(commit: str, author: Signature, committer: Signature) -> None:
    for role, signature in (("author", author), ("committer", committer)):
        if not signature.name.strip():
            raise ChangeResolutionError(
                f"Commit {commit} has an empty {role} name; git cannot write it again"
            )


def apply_changes(
    store: ObjectStore, head: ComponentHead, changes: list[FileChange]
) -> str:
    """Apply a component's changes to its current tree in one batch.

    Deletions go first so a path can turn from a file into a directory (or
    back) within one commit.

    Returns:
        The new root tree of the component.
    """
    editor = TreeEditor(store, head.tree)
    component = head.component
    for change in changes:
        if change.status == ChangeStatus.DELETED:
            editor.remove(component.source_path(change.path))
    for change in changes:
        if change.status != ChangeStatus.DELETED:
            editor.set(component.source_path(change.path), change.mode, change.blob)
    return editor.write()


def partition_commits(
    store: ObjectStore,
    commits: list[str],
    heads: list[ComponentHead],
    committer_policy: CommitterPolicy = CommitterPolicy.PRESERVE,
    merge_policy: MergePolicy = MergePolicy.REJECT,
    trace: Optional[Trace] = None,
) -> list[Replay]:
    """Replay composite commits onto the component heads.

    Commits are processed oldest first. Each commit yields one new commit for
    every component it touches, carrying the original message and author;
    commits touching no component are skipped. Heads are advanced in place.

    Raises:
        UnsupportedHistoryError: On a merge (with MergePolicy.REJECT) or root commit.
        ChangeResolutionError: If an added or modified path has no blob or mode,
            or the commit has an empty author or committer name.
    """
    trace = trace or Trace()
    by_directory = {head.component.directory: head for head in heads}
    replays = []

    for commit_hash in commits:
        info = store.read_commit(commit_hash)
        trace.note(f"Processing commit: {commit_hash} {info.subject}")

        if not info.parents:
            raise UnsupportedHistoryError(f"Commit {commit_hash} has no parent to diff against")
        if len(info.parents) > 1 and merge_policy == MergePolicy.REJECT:
            raise UnsupportedHistoryError(
                f"Commit {commit_hash} is a merge; use the first-parent merge policy to flatten it"
            )

        changes = store.diff_tree(info.parents[0], commit_hash)
        grouped, dropped = group_changes(changes, by_directory)
        for change in dropped:
            trace.note(f"  Skipping {change.path}: outside every component")

        for head in heads:
            component_changes = grouped.get(head.component.directory)
            if not component_changes:
                continue
            for change in component_changes:
                _check_change(commit_hash, head.component.directory, change)

            author, committer = replay_signatures(info, committer_policy)
            _check_identity(commit_hash, author, committer)
            tree = apply_changes(store, head, component_changes)
            new_commit = store.write_commit(tree, [head.commit], info.message, author, committer)
            head.advance(new_commit, tree)
            replays.append(
                Replay(source=commit_hash, component=head.component.name, commit=new_commit, tree=tree)
            )
            trace.note(
                f"  Created commit {new_commit} for {head.component.name} "
                f"({len(component_changes)} change(s))"
            )

    return replays


def branch_name(prefix: str, component: Component) -> str:
    return f"{prefix}-{component.name}"


def publish_branches(
    store: ObjectStore,
    prefix: str,
    heads: list[ComponentHead],
    force: bool = False,
    trace: Optional[Trace] = None,
) -> list[PublishedBranch]:
    """Point one branch per component at its rebuilt head.

    Every branch is checked before any ref is written, so a conflict leaves
    all refs untouched. A branch that already points at the same commit is
    left alone.

    Raises:
        ComponentConfigError: If a branch name is invalid or used twice.
        BranchConflictError: If a branch exists at another commit and not force.
    """
    trace = trace or Trace()
    planned = []
    names = set()
    for head in heads:
        name = branch_name(prefix, head.component)
        if name in names:
            raise ComponentConfigError(f"Branch {name} would be written twice")
        names.add(name)
        if not store.check_branch_name(name):
            raise ComponentConfigError(f"Invalid branch name: {name}")

        existing = store.resolve_ref(f"refs/heads/{name}")
        if existing is not None and existing != head.commit and not force:
            raise BranchConflictError(
                f"Branch {name} already exists at {existing[:8]}; use --force to move it"
            )
        planned.append((name, head, existing))

    published = []
    for name, head, existing in planned:
        if existing == head.commit:
            status = "unchanged"
        else:
            store.update_ref(f"refs/heads/{name}", head.commit, message=f"git-stitch rip {prefix}")
            status = "updated" if existing else "created"
        trace.note(f"Branch {name} {status} at {head.commit}")
        published.append(
            PublishedBranch(name=name, component=head.component.name, commit=head.commit, status=status)
        )
    return published


def rip(
    store: ObjectStore,
    prefix: str,
    head: str = "HEAD",
    base: Optional[str] = None,
    components: Iterable[Component] = (),
    committer_policy: CommitterPolicy = CommitterPolicy.PRESERVE,
    merge_policy: MergePolicy = MergePolicy.REJECT,
    strict: bool = False,
    force: bool = False,
    trace: Optional[Trace] = None,
) -> RipResult:
    """Split the commits made since the last stitch into component branches.

    Args:
        store: Object store of the composite repository.
        prefix: Branch prefix; branches are named "{prefix}-{component}".
        head: Tip of the composite history.
        base: Stitched base commit; located from head's log when None.
        components: Configured components, matched to base directories.
        committer_policy: Committer identity for replayed commits.
        merge_policy: Handling of merge commits in the window.
        strict: Fail instead of matching components to parents by position.
        force: Move existing output branches.
        trace: Run trace.

    Returns:
        RipResult; it holds no commits and no branches when the window is empty.
    """
    trace = trace or Trace()
    if base is None:
        base = find_base_commit(store, head)
    else:
        resolved = store.resolve_ref(base)
        if resolved is None:
            raise UnresolvedRefError(f"Cannot resolve base commit {base}")
        base = resolved
    trace.note(f"Found base commit: {base}")

    commits = store.rev_list(
        base, head, first_parent=merge_policy == MergePolicy.FIRST_PARENT
    )
    result = RipResult(base=base, commits=commits)
    if not commits:
        return result

    resolved_components = components_for_base(store, base, components)
    result.heads = resolve_component_heads(
        store, base, resolved_components, strict=strict, trace=trace
    )
    result.replays = partition_commits(
        store,
        commits,
        result.heads,
        committer_policy=committer_policy,
        merge_policy=merge_policy,
        trace=trace,
    )
    result.branches = publish_branches(store, prefix, result.heads, force=force, trace=trace)
    return result
