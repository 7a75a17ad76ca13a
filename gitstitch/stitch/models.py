"""Data models for the stitch engine.

Contains:
- CommitterPolicy: Committer identity used for replayed component commits
- MergePolicy: Handling of merge commits inside a rip window
- Component: One source history and where it lives in the composite tree
- ResolvedSource: A component resolved to an origin commit and tree
- StitchResult: The composite commit created by a stitch
- ComponentHead: Cursor over a component's rebuilt branch during a rip
- Replay: One component commit created from one composite commit
- PublishedBranch: An output branch written at the end of a rip
- RipResult: Everything a rip produced
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator


class CommitterPolicy(str, Enum):
    """Committer identity for replayed component commits."""

    PRESERVE = "preserve"
    DETERMINISTIC = "deterministic"


class MergePolicy(str, Enum):
    """How merge commits between the base and HEAD are handled."""

    REJECT = "reject"
    FIRST_PARENT = "first-parent"


class Component(BaseModel):
    """One source history combined into the composite tree."""

    name: str
    remote: Optional[str] = None
    branch: Optional[str] = None
    subdir: str = "."  # Directory of the source repo that is stitched in
    directory: str  # Top-level directory in the composite tree

    @model_validator(mode="before")
    @classmethod
    def default_directory_to_name(cls, data):
        if isinstance(data, dict) and not data.get("directory") and data.get("name"):
            data = {**data, "directory": data["name"]}
        return data

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value or any(c.isspace() for c in value):
            raise ValueError("component name must be a non-empty word")
        return value

    @field_validator("directory")
    @classmethod
    def validate_directory(cls, value: str) -> str:
        value = value.strip("/")
        if not value or "/" in value or value in (".", ".."):
            raise ValueError(f"directory must be a single path segment, got {value!r}")
        return value

    @field_validator("subdir")
    @classmethod
    def normalize_subdir(cls, value: str) -> str:
        value = value.strip().strip("/")
        return value or "."

    @property
    def ref(self) -> Optional[str]:
        """Revision that names the component's head."""
        if self.remote and self.branch:
            return f"{self.remote}/{self.branch}"
        return self.branch or self.remote

    @property
    def is_whole_repo(self) -> bool:
        return self.subdir == "."

    def source_path(self, relative: str) -> str:
        """Map a path below the component directory to a path in the source repo."""
        if self.is_whole_repo:
            return relative
        return f"{self.subdir}/{relative}"


@dataclass
class ResolvedSource:
    """A component pinned to an origin commit."""

    component: Component
    ref: str
    commit: str
    tree: str  # Tree at the component's subdir inside commit


@dataclass
class StitchResult:
    """The composite commit produced by a stitch."""

    commit: str
    tree: str
    parents: list[str]
    sources: list[ResolvedSource]
    timestamp: int

    @property
    def names(self) -> list[str]:
        return [source.component.name for source in self.sources]


@dataclass
class ComponentHead:
    """Tip of a component's rebuilt branch while a rip runs."""

    component: Component
    origin: str  # Base parent the branch starts from
    commit: str  # Current tip, advances as commits are replayed
    tree: str  # Root tree of the current tip
    exact_match: bool = True
    commits: list[str] = field(default_factory=list)

    def advance(self, commit: str, tree: str) -> None:
        self.commit = commit
        self.tree = tree
        self.commits.append(commit)


@dataclass
class Replay:
    """A component commit created from a composite commit."""

    source: str  # Composite commit
    component: str
    commit: str
    tree: str


@dataclass
class PublishedBranch:
    """An output branch written at the end of a rip."""

    name: str
    component: str
    commit: str
    status: str  # "created", "updated" or "unchanged"


@dataclass
class RipResult:
    """Everything produced by one rip run."""

    base: str
    commits: list[str] = field(default_factory=list)
    heads: list[ComponentHead] = field(default_factory=list)
    replays: list[Replay] = field(default_factory=list)
    branches: list[PublishedBranch] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.commits
