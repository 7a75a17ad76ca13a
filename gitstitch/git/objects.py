"""Git object models and parsers.

Contains:
- TreeEntry: One entry of a tree object
- Signature: Author or committer line of a commit
- CommitInfo: Parsed commit object
- ChangeStatus, FileChange: One path changed between two trees
- parse_tree_listing: Parse `git ls-tree -z` output
- parse_commit: Parse `git cat-file commit` output
- parse_raw_diff: Parse `git diff-tree -r -z` raw output
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

MODE_TREE = "040000"
MODE_GITLINK = "160000"
NULL_MODE = "000000"

_SIGNATURE_RE = re.compile(
    r"^(?P<name>.*?) ?<(?P<email>[^>]*)> (?P<timestamp>-?\d+) (?P<offset>[+-]\d{4})$"
)


def object_type_for_mode(mode: str) -> str:
    """Return the object type git stores for an entry mode."""
    if mode in (MODE_TREE, "40000"):
        return "tree"
    if mode == MODE_GITLINK:
        return "commit"
    return "blob"


def is_null_oid(oid: str) -> bool:
    return not oid or set(oid) == {"0"}


@dataclass(frozen=True)
class TreeEntry:
    """One entry of a tree object."""

    mode: str
    type: str
    hash: str
    name: str

    def format(self) -> str:
        """Format the entry the way `git mktree` reads it."""
        return f"{self.mode} {self.type} {self.hash}\t{self.name}"


@dataclass(frozen=True)
class Signature:
    """Author or committer identity with its timestamp."""

    name: str
    email: str
    timestamp: int
    offset: str = "+0000"

    @classmethod
    def parse(cls, line: str) -> "Signature":
        match = _SIGNATURE_RE.match(line)
        if not match:
            raise ValueError(f"Malformed signature: {line!r}")
        return cls(
            name=match.group("name"),
            email=match.group("email"),
            timestamp=int(match.group("timestamp")),
            offset=match.group("offset"),
        )

    @property
    def date(self) -> str:
        """Date in git's internal format, as accepted by GIT_*_DATE."""
        return f"{self.timestamp} {self.offset}"

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


@dataclass
class CommitInfo:
    """Parsed commit object."""

    hash: str
    tree: str
    parents: list[str]
    author: Signature
    committer: Signature
    message: str

    @property
    def subject(self) -> str:
        return self.message.split("\n", 1)[0]


class ChangeStatus(str, Enum):
    """Status of a path between two trees."""

    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"


@dataclass
class FileChange:
    """One path changed between two trees."""

    path: str
    status: ChangeStatus
    blob: Optional[str] = None
    mode: Optional[str] = None

    @property
    def top_level(self) -> str:
        return self.path.split("/", 1)[0]


@dataclass
class RawDiffRecord:
    """Unvalidated record from raw diff output."""

    new_mode: str
    new_hash: str
    status: str
    path: str
    extra: list[str] = field(default_factory=list)


def parse_tree_listing(output: str) -> list[TreeEntry]:
    """Parse NUL-terminated `git ls-tree -z` output.

    Args:
        output: Raw ls-tree output.

    Returns:
        Tree entries in listing order.
    """
    entries = []
    for record in output.split("\0"):
        if not record:
            continue
        meta, name = record.split("\t", 1)
        mode, obj_type, obj_hash = meta.split(" ")
        entries.append(TreeEntry(mode=mode, type=obj_type, hash=obj_hash, name=name))
    return entries


def parse_commit(commit_hash: str, raw: str) -> CommitInfo:
    """Parse the raw body of a commit object.

    Header continuation lines (gpgsig, mergetag) are skipped. The message is
    everything after the first blank line, kept byte-exact.

    Args:
        commit_hash: Hash of the commit being parsed.
        raw: Output of `git cat-file commit <hash>`.

    Returns:
        CommitInfo for the commit.
    """
    header, sep, message = raw.partition("\n\n")
    if not sep:
        header, message = raw.rstrip("\n"), ""

    tree = None
    parents = []
    author = None
    committer = None
    for line in header.split("\n"):
        if line.startswith(" "):
            continue
        key, _, value = line.partition(" ")
        if key == "tree":
            tree = value
        elif key == "parent":
            parents.append(value)
        elif key == "author":
            author = Signature.parse(value)
        elif key == "committer":
            committer = Signature.parse(value)

    if tree is None or author is None or committer is None:
        raise ValueError(f"Malformed commit object {commit_hash}")

    return CommitInfo(
        hash=commit_hash,
        tree=tree,
        parents=parents,
        author=author,
        committer=committer,
        message=message,
    )


def parse_raw_diff(output: str) -> list[RawDiffRecord]:
    """Parse `git diff-tree -r -z` raw output.

    Each record is a ":old_mode new_mode old_hash new_hash status" field
    followed by one path (two for copies and renames).
    """
    tokens = output.split("\0")
    records = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if not token:
            i += 1
            continue
        if not token.startswith(":"):
            raise ValueError(f"Unexpected diff record: {token!r}")
        _, new_mode, _, new_hash, status = token[1:].split(" ")
        path_count = 2 if status[:1] in ("R", "C") else 1
        paths = tokens[i + 1 : i + 1 + path_count]
        if len(paths) != path_count:
            raise ValueError(f"Truncated diff record: {token!r}")
        records.append(
            RawDiffRecord(
                new_mode=new_mode,
                new_hash=new_hash,
                status=status,
                path=paths[-1],
                extra=paths[:-1],
            )
        )
        i += 1 + path_count
    return records
