"""Component head resolution for a stitched base commit.

A stitched commit records its sources only as parents. Which parent belongs
to which component is recovered by comparing trees: the component's
directory in the base must equal the stitched subdir of exactly one parent.
When no parent matches (for example after history was rewritten), the
component takes the next parent no other component matched, in order, and
the match is flagged.
"""

from typing import Iterable, Optional

from gitstitch.git.store import ObjectStore
from gitstitch.stitch.exceptions import (
    AmbiguousParentMatchError,
    MissingTreeError,
    UnresolvedRefError,
)
from gitstitch.stitch.models import Component, ComponentHead
from gitstitch.stitch.trace import Trace


def components_for_base(
    store: ObjectStore, base: str, configured: Iterable[Component] = ()
) -> list[Component]:
    """List the components stitched into a base commit.

    Every top-level directory of the base is a component. A configured
    component with the same directory supplies its name, remote, branch and
    subdir; other directories become components named after themselves.
    """
    by_directory = {component.directory: component for component in configured}
    base_tree = store.resolve_tree(base)
    if base_tree is None:
        raise MissingTreeError(f"Base commit {base} has no tree")

    components = []
    for entry in store.read_tree(base_tree):
        if entry.type != "tree":
            continue
        component = by_directory.get(entry.name)
        if component is None:
            component = Component(name=entry.name, directory=entry.name)
        components.append(component)
    return sorted(components, key=lambda c: c.directory)


def resolve_component_heads(
    store: ObjectStore,
    base: str,
    components: list[Component],
    strict: bool = False,
    trace: Optional[Trace] = None,
) -> list[ComponentHead]:
    """Match each component to the base parent it was stitched from.

    Args:
        store: Object store of the composite repository.
        base: Stitched base commit.
        components: Components to resolve; matched in directory order.
        strict: Raise instead of falling back to positional matching.
        trace: Run trace; positional fallbacks are recorded as warnings.

    Returns:
        One ComponentHead per component, in directory order.

    Raises:
        MissingTreeError: If a component directory is missing from the base.
        AmbiguousParentMatchError: If strict and a component has no tree match.
        UnresolvedRefError: If no unmatched parent is left for a fallback.
    """
    trace = trace or Trace()
    parents = store.read_commit(base).parents
    if not parents:
        raise UnresolvedRefError(f"Base commit {base} has no parents")
    trace.note(f"Base commit {base} has parents: {' '.join(parents)}")

    ordered = sorted(components, key=lambda c: c.directory)
    matches = {}
    for component in ordered:
        expected = store.resolve_tree(base, component.directory)
        if expected is None:
            raise MissingTreeError(
                f"Directory '{component.directory}' does not exist in base commit {base[:8]}"
            )
        for parent in parents:
            parent_tree = store.resolve_tree(parent, component.subdir)
            trace.note(
                f"Comparing parent {parent} tree {parent_tree} with {component.directory} tree {expected}"
            )
            if parent_tree == expected:
                matches[component.directory] = parent
                break

    # Components sharing an origin share one parent, so positions count
    # only the parents no tree comparison claimed.
    unclaimed = [parent for parent in parents if parent not in matches.values()]
    position = 0
    heads = []
    for component in ordered:
        match = matches.get(component.directory)
        exact = match is not None
        if not exact:
            message = (
                f"No parent of {base[:8]} matches the tree of '{component.directory}'"
            )
            if strict:
                raise AmbiguousParentMatchError(message)
            if position >= len(unclaimed):
                raise UnresolvedRefError(
                    f"{message} and no unmatched parent is left at position {position}"
                )
            match = unclaimed[position]
            trace.warn(
                f"{message}; using unmatched parent {position} ({match[:8]}) by position. "
                f"History for {component.name} may be misattributed."
            )
            position += 1

        tree = store.read_commit(match).tree
        heads.append(
            ComponentHead(
                component=component,
                origin=match,
                commit=match,
                tree=tree,
                exact_match=exact,
            )
        )
        trace.note(f"Component {component.name} starts from commit {match}")

    return heads
