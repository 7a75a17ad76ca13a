"""Object store adapter over the git executable.

Every primitive is a single git invocation against one repository. The
store never caches; objects are immutable and refs are owned by the caller.
"""

from pathlib import Path
from typing import Callable, Iterator, Optional

from gitstitch.git.exceptions import GitError
from gitstitch.git.objects import (
    ChangeStatus,
    CommitInfo,
    FileChange,
    Signature,
    TreeEntry,
    parse_commit,
    parse_raw_diff,
    parse_tree_listing,
)
from gitstitch.git.runner import _run_git_command

_STATUS_MAP = {
    "A": ChangeStatus.ADDED,
    "M": ChangeStatus.MODIFIED,
    "T": ChangeStatus.MODIFIED,
    "D": ChangeStatus.DELETED,
}


class ObjectStore:
    """Blob, tree, commit and ref primitives for one repository."""

    def __init__(self, repo_root: Path):
        self.repo_root = Path(repo_root)

    def _git(self, args: list[str], **kwargs) -> str:
        return _run_git_command(args, cwd=self.repo_root, **kwargs)

    # Refs

    def resolve_ref(self, name: str) -> Optional[str]:
        """Resolve a ref or revision to a commit hash.

        Returns:
            The commit hash, or None if the name does not resolve.
        """
        try:
            output = self._git(["rev-parse", "--verify", "--quiet", f"{name}^{{commit}}"])
        except GitError:
            return None
        return output or None

    def resolve_tree(self, commit: str, path: Optional[str] = None) -> Optional[str]:
        """Resolve the tree of a commit, or of a directory inside it.

        Args:
            commit: Commit hash or revision.
            path: Directory relative to the commit root; None or "." for the root.

        Returns:
            The tree hash, or None if the path is missing or not a directory.
        """
        root = path in (None, "", ".")
        # Everything after ':' is a literal path, so "^{tree}" cannot peel it
        rev = f"{commit}^{{tree}}" if root else f"{commit}:{path.strip('/')}"
        try:
            output = self._git(["rev-parse", "--verify", "--quiet", rev])
            if output and not root and self._git(["cat-file", "-t", output]) != "tree":
                return None
        except GitError:
            return None
        return output or None

    def update_ref(self, name: str, commit: str, message: Optional[str] = None) -> None:
        """Create or move a ref to point at a commit."""
        args = ["update-ref"]
        if message:
            args += ["-m", message]
        self._git(args + [name, commit])

    def check_branch_name(self, name: str) -> bool:
        """Return True if name is a valid branch name."""
        try:
            self._git(["check-ref-format", "--branch", name])
        except GitError:
            return False
        return True

    # Objects

    def read_tree(self, tree: str) -> list[TreeEntry]:
        """List the direct entries of a tree."""
        return parse_tree_listing(self._git(["ls-tree", "-z", tree], strip=False))

    def read_commit(self, commit: str) -> CommitInfo:
        """Read and parse a commit object."""
        raw = self._git(["cat-file", "commit", commit], strip=False)
        try:
            return parse_commit(commit, raw)
        except ValueError as e:
            raise GitError(str(e))

    def write_blob(self, data: bytes) -> str:
        """Store bytes as a blob and return its hash."""
        return self._git(["hash-object", "-w", "--stdin"], input=data)

    def write_tree(self, entries: list[TreeEntry]) -> str:
        """Store a tree built from the given entries and return its hash."""
        payload = "".join(entry.format() + "\0" for entry in sorted(entries, key=lambda e: e.name))
        return self._git(["mktree", "-z"], input=payload)

    def write_commit(
        self,
        tree: str,
        parents: list[str],
        message: str,
        author: Signature,
        committer: Signature,
    ) -> str:
        """Store a commit object and return its hash.

        The message is written as-is. Signing is disabled so the hash depends
        only on the arguments.
        """
        args = ["commit-tree", "--no-gpg-sign", tree]
        for parent in parents:
            args += ["-p", parent]
        env = {
            "GIT_AUTHOR_NAME": author.name,
            "GIT_AUTHOR_EMAIL": author.email,
            "GIT_AUTHOR_DATE": author.date,
            "GIT_COMMITTER_NAME": committer.name,
            "GIT_COMMITTER_EMAIL": committer.email,
            "GIT_COMMITTER_DATE": committer.date,
        }
        return self._git(args, input=message, env=env)

    def diff_tree(self, old: str, new: str) -> list[FileChange]:
        """List the paths that differ between two tree-ish objects.

        Renames are not detected; they show up as a deletion and an addition.
        """
        output = self._git(
            ["diff-tree", "-r", "-z", "--no-renames", "--no-commit-id", old, new],
            strip=False,
        )
        try:
            records = parse_raw_diff(output)
        except ValueError as e:
            raise GitError(str(e))

        changes = []
        for record in records:
            status = _STATUS_MAP.get(record.status[:1])
            if status is None:
                raise GitError(f"Unexpected diff status {record.status!r} for {record.path}")
            if status == ChangeStatus.DELETED:
                changes.append(FileChange(path=record.path, status=status))
            else:
                changes.append(
                    FileChange(
                        path=record.path,
                        status=status,
                        blob=record.new_hash,
                        mode=record.new_mode,
                    )
                )
        return changes

    # History

    def rev_list(self, base: str, head: str = "HEAD", first_parent: bool = False) -> list[str]:
        """List commits in base..head, oldest first."""
        args = ["rev-list", "--reverse"]
        if first_parent:
            args.append("--first-parent")
        output = self._git(args + [f"{base}..{head}"])
        return output.split() if output else []

    def search_log(
        self,
        predicate: Callable[[CommitInfo], bool],
        start: str = "HEAD",
        grep: Optional[str] = None,
    ) -> Iterator[CommitInfo]:
        """Yield commits reachable from start that satisfy predicate, newest first.

        Args:
            predicate: Filter applied to each parsed commit.
            start: Revision the walk starts from.
            grep: Optional fixed string the message must contain, used to
                narrow the walk before commits are parsed.
        """
        args = ["log", "--format=%H"]
        if grep:
            args += ["--fixed-strings", f"--grep={grep}"]
        output = self._git(args + [start, "--"])
        for commit_hash in output.split():
            info = self.read_commit(commit_hash)
            if predicate(info):
                yield info

    # Config and remotes

    def config_get(self, key: str) -> Optional[str]:
        """Read a git config value, or None if unset."""
        value = self._git(["config", "--default", "", "--get", key])
        return value or None

    def config_set(self, key: str, value: str) -> None:
        self._git(["config", key, value])

    def config_unset_section(self, section: str) -> bool:
        """Remove a config section.

        Returns:
            True if the section existed and was removed, False otherwise.
        """
        try:
            self._git(["config", "--remove-section", section])
        except GitError:
            return False
        return True

    def remote_exists(self, name: str) -> bool:
        try:
            self._git(["remote", "get-url", name])
        except GitError:
            return False
        return True

    def fetch(self, remote: str) -> None:
        self._git(["fetch", "--quiet", remote])

    def default_branch(self, remote: str) -> str:
        """Detect the default branch of a fetched remote.

        Uses refs/remotes/<remote>/HEAD, asking git to set it when missing.
        """
        head_ref = f"refs/remotes/{remote}/HEAD"
        try:
            symbolic = self._git(["symbolic-ref", head_ref])
        except GitError:
            self._git(["remote", "set-head", remote, "--auto"])
            symbolic = self._git(["symbolic-ref", head_ref])

        prefix = f"refs/remotes/{remote}/"
        if not symbolic.startswith(prefix):
            raise GitError(f"Invalid symbolic ref format: {symbolic}")
        return symbolic[len(prefix):]
