"""Runtime settings and overview definition loading."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from cube_overview.errors import ConfigError
from cube_overview.models.overview import Deck, Overview

logger = logging.getLogger(__name__)

DEFAULT_CUBE_ID = "5ec423906c26474a6ce5eb85"


@dataclass
class Settings:
    """Runtime settings, read from the environment (and .env)."""

    cache_dir: str = ".cache"
    cube_id: str = DEFAULT_CUBE_ID
    timeout: int = 30
    template_dir: str = "templates"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from CUBE_OVERVIEW_* environment variables."""
        load_dotenv()

        defaults = cls()
        timeout = os.getenv("CUBE_OVERVIEW_TIMEOUT")

        return cls(
            cache_dir=os.getenv("CUBE_OVERVIEW_CACHE_DIR", defaults.cache_dir),
            cube_id=os.getenv("CUBE_OVERVIEW_CUBE_ID", defaults.cube_id),
            timeout=int(timeout) if timeout else defaults.timeout,
            template_dir=os.getenv("CUBE_OVERVIEW_TEMPLATE_DIR", defaults.template_dir),
        )


@dataclass
class OverviewDefinition:
    """An overview plus the cube it describes, as loaded from YAML."""

    overview: Overview
    cube_id: Optional[str] = None


def load_overview(config_path: str) -> OverviewDefinition:
    """
    Load an overview definition from a YAML file.

    Args:
        config_path: Path to the definition file

    Returns:
        Parsed OverviewDefinition

    Raises:
        ConfigError: If the file is missing, not valid YAML, or incomplete
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(config_path, "file not found")

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(config_path, f"invalid YAML: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(config_path, "expected a mapping at the top level")

    for key in ("title", "decks"):
        if key not in config:
            raise ConfigError(config_path, f"missing required key {key!r}")

    if not isinstance(config["decks"], list):
        raise ConfigError(config_path, "'decks' must be a list")

    decks = []
    for i, deck_data in enumerate(config["decks"], 1):
        if not isinstance(deck_data, dict) or "title" not in deck_data:
            raise ConfigError(config_path, f"deck #{i} must be a mapping with a title")
        try:
            decks.append(Deck.from_dict(deck_data))
        except (TypeError, ValueError) as e:
            raise ConfigError(config_path, f"deck #{i}: {e}") from e

    overview = Overview(
        title=str(config["title"]),
        description=str(config.get("description") or "").strip(),
        decks=decks,
    )

    logger.info(f"Loaded overview {overview.title!r} with {len(decks)} decks")

    cube_id = config.get("cube_id")
    return OverviewDefinition(
        overview=overview,
        cube_id=str(cube_id) if cube_id else None,
    )
