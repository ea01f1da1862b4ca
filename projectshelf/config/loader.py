# projectshelf/config/loader.py
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError
from loguru import logger

from .schema import AppConfig
from .paths import get_user_config_file

ENV_PREFIX = "PROJECTSHELF_"

_cached_config: Optional[AppConfig] = None

def _read_config_file(config_path: Path) -> Dict[str, Any]:
    logger.info(f"Loading user configuration from: {config_path}")
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise ValueError("top-level JSON value is not an object")
        return loaded
    except (json.JSONDecodeError, OSError, ValueError) as e:
        logger.error(f"Failed to load user config file {config_path}: {e}")
        try:
            backup_path = config_path.with_suffix(".json.corrupted")
            if backup_path.exists(): backup_path.unlink(missing_ok=True) # Remove old backup
            config_path.rename(backup_path)
            logger.info(f"Backed up corrupted config to: {backup_path}")
        except OSError as backup_err:
            logger.error(f"Failed to backup corrupted config: {backup_err}")
        return {}

def _env_overrides() -> Dict[str, str]:
    """Collects PROJECTSHELF_<FIELD> environment variables for known settings."""
    overrides: Dict[str, str] = {}
    for field_name in AppConfig.model_fields:
        value = os.environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        if value is not None:
            overrides[field_name] = value
    if overrides:
        logger.debug(f"Applying environment overrides for: {sorted(overrides)}")
    return overrides

def load_config() -> AppConfig:
    """Loads the application configuration (file, then environment overrides)."""
    global _cached_config
    if _cached_config:
        return _cached_config

    config_path = get_user_config_file()
    loaded_data: Dict[str, Any] = {}
    if config_path.exists():
        loaded_data = _read_config_file(config_path)
    else:
        logger.info("User config file not found. Using default settings.")

    loaded_data.update(_env_overrides())

    try:
        config = AppConfig(**loaded_data)
        logger.info("Configuration loaded successfully.")
    except ValidationError as e:
        logger.error(f"Configuration validation failed: {e}")
        logger.warning("Falling back to default configuration.")
        config = AppConfig()
    _cached_config = config
    return config

def save_config(config: AppConfig) -> None:
    """Saves the configuration atomically via a temp file in the same directory."""
    config_path = get_user_config_file()
    logger.info(f"Saving configuration to: {config_path}")
    temp_file_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            dir=config_path.parent,
            prefix=f".{config_path.name}_tmp",
            suffix=".json",
            delete=False # Keep the file after closing for os.replace
        ) as temp_f:
            temp_file_path = Path(temp_f.name)
            logger.debug(f"Writing config to temporary file: {temp_file_path}")
            temp_f.write(config.model_dump_json(indent=4))
            temp_f.flush()
            os.fsync(temp_f.fileno())

        os.replace(temp_file_path, config_path)
        logger.info("Configuration saved successfully.")
        temp_file_path = None
    except (OSError, TypeError) as e:
        logger.error(f"Failed to save configuration to {config_path}: {e}")
        raise
    finally:
        if temp_file_path and temp_file_path.exists():
            logger.warning(f"Cleaning up leftover temporary config file: {temp_file_path}")
            try: temp_file_path.unlink()
            except OSError as unlink_err: logger.error(f"Failed to remove temporary config file {temp_file_path}: {unlink_err}")

def get_config() -> AppConfig:
    """Returns the cached configuration object, loading if necessary."""
    if _cached_config is None:
        return load_config()
    return _cached_config

def reset_config_cache() -> None:
    """Forgets the cached configuration so the next get_config() reloads it."""
    global _cached_config
    _cached_config = None
