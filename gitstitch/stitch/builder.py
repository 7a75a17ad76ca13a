"""Composite commit builder.

Contains:
- STITCH_MARKER: Message that marks a stitched base commit
- resolve_source: Pin a component to its origin commit and tree
- build_composite_commit: Write the composite tree and commit
- stitch_components: Resolve and stitch a set of components
"""

from typing import Optional

from gitstitch.git.objects import MODE_TREE, TreeEntry
from gitstitch.git.store import ObjectStore
from gitstitch.stitch.exceptions import (
    ComponentConfigError,
    MissingTreeError,
    UnresolvedRefError,
)
from gitstitch.stitch.identity import composite_timestamp, stitch_signature
from gitstitch.stitch.models import Component, ResolvedSource, StitchResult
from gitstitch.stitch.trace import Trace

STITCH_MARKER = "git-stitch merge"


def resolve_source(
    store: ObjectStore, component: Component, ref: Optional[str] = None
) -> ResolvedSource:
    """Resolve a component to its origin commit and the tree to stitch in.

    Args:
        store: Object store of the composite repository.
        component: Component to resolve.
        ref: Revision overriding the component's configured ref.

    Returns:
        ResolvedSource with the commit and the tree at the component's subdir.

    Raises:
        UnresolvedRefError: If the ref does not resolve to a commit.
        MissingTreeError: If the subdir is not a directory in that commit.
    """
    ref = ref or component.ref
    if not ref:
        raise UnresolvedRefError(f"Component {component.name} has no ref to stitch")

    commit = store.resolve_ref(ref)
    if commit is None:
        raise UnresolvedRefError(f"Cannot resolve {ref} for component {component.name}")

    tree = store.resolve_tree(commit, component.subdir)
    if tree is None:
        raise MissingTreeError(
            f"Directory '{component.subdir}' does not exist in {ref} ({commit[:8]})"
        )

    return ResolvedSource(component=component, ref=ref, commit=commit, tree=tree)


def build_composite_commit(
    store: ObjectStore,
    sources: list[ResolvedSource],
    message: str = STITCH_MARKER,
    trace: Optional[Trace] = None,
) -> StitchResult:
    """Write a commit whose tree holds one directory per source.

    Sources are ordered by directory name, and the parents follow that order,
    so the result does not depend on the order the sources were given in.

    Raises:
        ComponentConfigError: If there are no sources or two share a directory.
    """
    trace = trace or Trace()
    if not sources:
        raise ComponentConfigError("Nothing to stitch: no components given")

    ordered = sorted(sources, key=lambda s: s.component.directory)
    seen = set()
    for source in ordered:
        if source.component.directory in seen:
            raise ComponentConfigError(
                f"Directory '{source.component.directory}' is used by more than one component"
            )
        seen.add(source.component.directory)

    entries = [
        TreeEntry(mode=MODE_TREE, type="tree", hash=source.tree, name=source.component.directory)
        for source in ordered
    ]
    tree = store.write_tree(entries)
    trace.note(f"Composite tree {tree} with {len(entries)} entries")

    parents = []
    for source in ordered:
        if source.commit not in parents:
            parents.append(source.commit)

    timestamp = composite_timestamp([store.read_commit(parent) for parent in parents])
    signature = stitch_signature(timestamp)
    if not message.endswith("\n"):
        message += "\n"

    commit = store.write_commit(tree, parents, message, signature, signature)
    trace.note(f"Composite commit {commit} dated {timestamp}")

    return StitchResult(
        commit=commit,
        tree=tree,
        parents=parents,
        sources=ordered,
        timestamp=timestamp,
    )


def stitch_components(
    store: ObjectStore,
    components: list[Component],
    refs: Optional[dict[str, str]] = None,
    trace: Optional[Trace] = None,
) -> StitchResult:
    """Resolve every component and stitch them into one composite commit.

    Args:
        store: Object store of the composite repository.
        components: Components to combine.
        refs: Optional per-component ref overrides keyed by component name.
        trace: Run trace.
    """
    trace = trace or Trace()
    refs = refs or {}
    sources = []
    for component in components:
        source = resolve_source(store, component, refs.get(component.name))
        trace.note(f"{source.ref} is {source.commit}")
        sources.append(source)
    return build_composite_commit(store, sources, trace=trace)
