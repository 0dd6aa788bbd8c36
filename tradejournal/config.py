"""Configuration loading for the trade journal.

The optional config file lives at ``~/.config/tradejournal/config.toml``::

    [journal]
    db_path = "~/.config/tradejournal/journal.db"

    [projection]
    horizon_days = 30
    simulations = 500
    fallback_expectancy_r = 0.0
"""

import logging
from pathlib import Path
from typing import Optional

import toml

from tradejournal.db.records import to_number
from tradejournal.models import ProjectionMethod, ProjectionSettings

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "tradejournal"
CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "journal.db"


def load_config(config_path: Path = CONFIG_PATH) -> dict:
    """Load configuration, returning an empty dict when the file is missing or invalid."""
    if not config_path.exists():
        return {}

    try:
        return toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return {}


def get_db_path(config: dict, override: Optional[str] = None) -> Path:
    """Resolve the journal database path.

    Args:
        config: Loaded configuration.
        override: Path given on the command line or in the environment.
    """
    if override:
        return Path(override).expanduser()

    configured = config.get("journal", {}).get("db_path")
    if configured:
        return Path(configured).expanduser()
    return DEFAULT_DB_PATH


def get_projection_settings(
    config: dict,
    method: Optional[ProjectionMethod] = None,
    horizon_days: Optional[int] = None,
    simulations: Optional[int] = None,
) -> ProjectionSettings:
    """Build projection settings from config defaults and explicit overrides."""
    defaults = ProjectionSettings()
    section = config.get("projection", {})

    return ProjectionSettings(
        method=method or defaults.method,
        horizon_days=(
            horizon_days
            if horizon_days is not None
            else int(to_number(section.get("horizon_days"), defaults.horizon_days))
        ),
        simulations=(
            simulations
            if simulations is not None
            else int(to_number(section.get("simulations"), defaults.simulations))
        ),
        fallback_expectancy_r=to_number(
            section.get("fallback_expectancy_r"), defaults.fallback_expectancy_r
        ),
    )
