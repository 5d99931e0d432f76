"""EcoTracks utilities."""

from .catalog_loader import (
    CATALOG_DIR,
    load_catalog,
    load_catalog_file,
    get_available_tracks,
)

__all__ = [
    "CATALOG_DIR",
    "load_catalog",
    "load_catalog_file",
    "get_available_tracks",
]
