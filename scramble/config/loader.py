# scramble/config/loader.py
import json
import os
from typing import Any, Dict, Optional

from pydantic import ValidationError
from loguru import logger

from .schema import AppConfig
from .paths import get_user_config_file
from ..core.pcg import parse_seed

_cached_config: Optional[AppConfig] = None

def _env_overrides() -> Dict[str, Any]:
    """Collects SCRAMBLE_* environment overrides on top of the config file."""
    overrides: Dict[str, Any] = {}
    seed_text = os.environ.get("SCRAMBLE_SEED")
    if seed_text:
        try:
            seed = parse_seed(seed_text)
            overrides["seed"] = {"high": seed.high, "low": seed.low}
        except ValueError as e:
            logger.error(f"Ignoring SCRAMBLE_SEED: {e}")
    digest = os.environ.get("SCRAMBLE_DIGEST")
    if digest:
        overrides["digest"] = digest
    return overrides

def load_config() -> AppConfig:
    """Loads the application configuration."""
    global _cached_config
    if _cached_config:
        return _cached_config

    config_path = get_user_config_file()
    loaded_data: Dict[str, Any] = {}

    if config_path.exists():
        logger.info(f"Loading user configuration from: {config_path}")
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                loaded_data = json.load(f)
            if not isinstance(loaded_data, dict):
                logger.error(f"User config file {config_path} must hold a JSON object.")
                loaded_data = {}
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Failed to load user config file {config_path}: {e}")
            loaded_data = {} # Fallback to defaults
    else:
        logger.debug("No user config found. Using default settings.")

    loaded_data.update(_env_overrides())

    try:
        config = AppConfig(**loaded_data)
        logger.debug("Configuration loaded successfully.")
    except ValidationError as e:
        logger.error(f"Configuration validation failed: {e}")
        logger.warning("Falling back to default configuration.")
        config = AppConfig()
    _cached_config = config
    return config

def get_config() -> AppConfig:
    """Returns the cached configuration object, loading if necessary."""
    if _cached_config is None:
        return load_config()
    return _cached_config

def reset_config() -> None:
    """Drops the cached configuration so the next get_config() reloads it."""
    global _cached_config
    _cached_config = None
