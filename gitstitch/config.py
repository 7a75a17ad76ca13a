"""Repository configuration for gitstitch.

Component definitions and run settings live in the repository's git config:

    [stitch]
        components = alpha beta
        base-commit = <hash of the last stitched commit>
        committer-policy = preserve
        merge-policy = reject
        strict-match = false
    [stitch "alpha"]
        remote = alpha
        branch = main
        subdir = .
        directory = alpha
"""

from typing import Optional

from pydantic import BaseModel, ValidationError

from gitstitch.git.store import ObjectStore
from gitstitch.stitch.models import CommitterPolicy, Component, MergePolicy

SECTION = "stitch"
_COMPONENT_KEYS = ("remote", "branch", "subdir", "directory")


class ConfigError(Exception):
    """Raised when the stored configuration is invalid."""

    pass


class StitchSettings(BaseModel):
    """Run settings; command-line flags take precedence."""

    committer_policy: CommitterPolicy = CommitterPolicy.PRESERVE
    merge_policy: MergePolicy = MergePolicy.REJECT
    strict_match: bool = False


def load_components(store: ObjectStore) -> list[Component]:
    """Load the configured components.

    Returns:
        Components in configured order; empty if none are configured.

    Raises:
        ConfigError: If a component definition is invalid.
    """
    names = (store.config_get(f"{SECTION}.components") or "").split()
    components = []
    for name in names:
        data = {"name": name}
        for key in _COMPONENT_KEYS:
            value = store.config_get(f"{SECTION}.{name}.{key}")
            if value is not None:
                data[key] = value
        try:
            components.append(Component(**data))
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration for component {name}: {e}")
    return components


def save_components(store: ObjectStore, components: list[Component]) -> None:
    """Replace the configured components."""
    for name in (store.config_get(f"{SECTION}.components") or "").split():
        store.config_unset_section(f"{SECTION}.{name}")

    for component in components:
        prefix = f"{SECTION}.{component.name}"
        if component.remote:
            store.config_set(f"{prefix}.remote", component.remote)
        if component.branch:
            store.config_set(f"{prefix}.branch", component.branch)
        store.config_set(f"{prefix}.subdir", component.subdir)
        store.config_set(f"{prefix}.directory", component.directory)

    store.config_set(f"{SECTION}.components", " ".join(c.name for c in components))


def get_base_commit(store: ObjectStore) -> Optional[str]:
    """Return the commit recorded by the last stitch, if any."""
    return store.config_get(f"{SECTION}.base-commit")


def set_base_commit(store: ObjectStore, commit: str) -> None:
    store.config_set(f"{SECTION}.base-commit", commit)


def load_settings(store: ObjectStore) -> StitchSettings:
    """Load run settings, falling back to defaults for unset keys.

    Raises:
        ConfigError: If a stored value is invalid.
    """
    data = {}
    for field_name in StitchSettings.model_fields:
        value = store.config_get(f"{SECTION}.{field_name.replace('_', '-')}")
        if value is not None:
            data[field_name] = value
    try:
        return StitchSettings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid stitch settings in git config: {e}")
