"""Component manifest files.

A manifest describes components in YAML, for setups the command line
cannot express (restricted subdirectories, renamed directories):

    components:
      - name: alpha
        remote: alpha
        branch: main
      - name: docs
        remote: website
        branch: main
        subdir: docs
        directory: website-docs
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from gitstitch.stitch.models import Component


class ManifestError(Exception):
    """Raised when a manifest cannot be read or is invalid."""

    pass


class Manifest(BaseModel):
    """Top-level manifest document."""

    components: list[Component]


def load_manifest(path: Path) -> list[Component]:
    """Load components from a manifest file.

    Args:
        path: Path to the YAML manifest.

    Returns:
        The components in file order.

    Raises:
        ManifestError: If the file is missing, unparsable or invalid.
    """
    if not path.exists():
        raise ManifestError(f"Manifest not found: {path}")

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ManifestError(f"Failed to parse manifest {path}: {e}")

    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {path} must be a mapping with a 'components' list")

    try:
        manifest = Manifest(**data)
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest {path}: {e}")

    if not manifest.components:
        raise ManifestError(f"Manifest {path} lists no components")
    return manifest.components


def save_manifest(path: Path, components: list[Component]) -> None:
    """Write components to a manifest file.

    Args:
        path: Destination of the YAML manifest.
        components: Components to write.
    """
    data = {
        "components": [
            component.model_dump(exclude_none=True) for component in components
        ]
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(
            data,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
