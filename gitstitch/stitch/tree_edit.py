"""Batched path edits on git trees.

TreeEditor loads only the subtrees an edit walks through, applies any
number of set/remove operations in memory, and writes back just the trees
that changed.
"""

from typing import Optional, Union

from gitstitch.git.objects import MODE_TREE, TreeEntry, object_type_for_mode
from gitstitch.git.store import ObjectStore


class _Dir:
    """In-memory directory node backed by an optional stored tree."""

    def __init__(self, tree: Optional[str] = None):
        self.tree = tree
        self.dirty = tree is None
        self._entries: Optional[dict[str, Union[TreeEntry, "_Dir"]]] = None

    def entries(self, store: ObjectStore) -> dict[str, Union[TreeEntry, "_Dir"]]:
        if self._entries is None:
            if self.tree is None:
                self._entries = {}
            else:
                self._entries = {entry.name: entry for entry in store.read_tree(self.tree)}
        return self._entries


class TreeEditor:
    """Apply path-level edits to a tree and write the result."""

    def __init__(self, store: ObjectStore, tree: Optional[str]):
        self.store = store
        self._root = _Dir(tree)

    def _walk(self, parts: list[str], create: bool) -> Optional[list[_Dir]]:
        """Return the chain of directories leading to parts[-1]'s parent."""
        chain = [self._root]
        node = self._root
        for name in parts[:-1]:
            entries = node.entries(self.store)
            child = entries.get(name)
            if isinstance(child, _Dir):
                node = child
            elif isinstance(child, TreeEntry) and child.type == "tree":
                node = _Dir(child.hash)
                entries[name] = node
            elif create:
                # Missing, or a file in the way of a new directory
                node = _Dir()
                entries[name] = node
            else:
                return None
            chain.append(node)
        return chain

    def set(self, path: str, mode: str, obj_hash: str) -> None:
        """Add or replace the entry at path."""
        parts = path.strip("/").split("/")
        chain = self._walk(parts, create=True)
        chain[-1].entries(self.store)[parts[-1]] = TreeEntry(
            mode=mode, type=object_type_for_mode(mode), hash=obj_hash, name=parts[-1]
        )
        for node in chain:
            node.dirty = True

    def remove(self, path: str) -> bool:
        """Remove the entry at path.

        Returns:
            True if something was removed, False if the path did not exist.
        """
        parts = path.strip("/").split("/")
        chain = self._walk(parts, create=False)
        if chain is None:
            return False
        entries = chain[-1].entries(self.store)
        if parts[-1] not in entries:
            return False
        del entries[parts[-1]]
        for node in chain:
            node.dirty = True
        return True

    def _write(self, node: _Dir) -> Optional[str]:
        if not node.dirty:
            return node.tree
        entries = []
        for name, child in node.entries(self.store).items():
            if isinstance(child, _Dir):
                child_tree = self._write(child)
                if child_tree is None:
                    continue
                entries.append(TreeEntry(mode=MODE_TREE, type="tree", hash=child_tree, name=name))
            else:
                entries.append(child)
        if not entries:
            # Empty directories are not stored
            return None
        node.tree = self.store.write_tree(entries)
        node.dirty = False
        return node.tree

    def write(self) -> str:
        """Write all changed trees and return the root tree hash."""
        tree = self._write(self._root)
        if tree is None:
            tree = self.store.write_tree([])
            self._root.tree = tree
            self._root.dirty = False
        return tree
