"""
Runtime configuration for EcoTracks.

Settings come from environment variables, optionally seeded from a .env file
at the project root:

    ECOTRACKS_PROGRESS_DB   SQLite progress database path
    ECOTRACKS_CATALOG_DIR   Directory of YAML track files
    ECOTRACKS_LEARNER_ID    Learner the progress store is scoped to
    ECOTRACKS_LOG_LEVEL     Logging level name (INFO, DEBUG, ...)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ecotracks.classroom.progress import DEFAULT_PROGRESS_DB
from ecotracks.utils.catalog_loader import CATALOG_DIR


PROJECT_ROOT = Path(__file__).parent.parent


@dataclass(frozen=True)
class Settings:
    progress_db: Path = DEFAULT_PROGRESS_DB
    catalog_dir: Path = CATALOG_DIR
    learner_id: str = "default"
    log_level: str = "INFO"

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Read settings from the environment.

    Args:
        env_file: .env file to load first (default: PROJECT_ROOT/.env).
            Variables already set in the environment take precedence.
    """
    load_dotenv(env_file or PROJECT_ROOT / ".env")

    progress_db = os.environ.get("ECOTRACKS_PROGRESS_DB")
    catalog_dir = os.environ.get("ECOTRACKS_CATALOG_DIR")
    return Settings(
        progress_db=Path(progress_db).expanduser() if progress_db else DEFAULT_PROGRESS_DB,
        catalog_dir=Path(catalog_dir).expanduser() if catalog_dir else CATALOG_DIR,
        learner_id=os.environ.get("ECOTRACKS_LEARNER_ID") or "default",
        log_level=os.environ.get("ECOTRACKS_LOG_LEVEL") or "INFO",
    )


def configure_logging(settings: Settings):
    """Set up root logging for an entry point."""
    logging.basicConfig(
        level=settings.log_level_value,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )
