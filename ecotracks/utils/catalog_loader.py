"""
Catalog loader utility for EcoTracks.

Loads YAML track definitions from the catalog/ directory.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from ecotracks.schemas import TrackDefinition


logger = logging.getLogger(__name__)

# Default catalog directory (shipped inside the package)
CATALOG_DIR = Path(__file__).parent.parent / "catalog"


def load_catalog_file(path: Path) -> dict[str, Any]:
    """
    Read one raw track document.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If the document is not a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"Track file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Track file must contain a mapping: {path}")
    return data


def get_available_tracks(catalog_dir: Path | None = None) -> list[str]:
    """
    List all track files in the catalog, sorted by name.

    Returns:
        List of track file names (without .yaml extension)
    """
    dir_path = catalog_dir or CATALOG_DIR
    if not dir_path.exists():
        return []
    return sorted(p.stem for p in dir_path.glob("*.yaml"))


def load_catalog(catalog_dir: Path | None = None) -> list[TrackDefinition]:
    """
    Load every track in a catalog directory.

    Tracks are ordered by their optional `position` key, then file name.

    Raises:
        ValueError: If two files declare the same track id
    """
    dir_path = catalog_dir or CATALOG_DIR
    documents = []
    for name in get_available_tracks(dir_path):
        data = load_catalog_file(dir_path / f"{name}.yaml")
        documents.append((data.pop("position", 0), name, data))
    documents.sort(key=lambda item: (item[0], item[1]))

    tracks: list[TrackDefinition] = []
    seen: set[str] = set()
    for _, name, data in documents:
        track = TrackDefinition.model_validate(data)
        if track.id in seen:
            raise ValueError(f"Duplicate track id {track.id} in {name}.yaml")
        seen.add(track.id)
        tracks.append(track)

    logger.info(f"Loaded {len(tracks)} tracks from {dir_path}")
    return tracks
