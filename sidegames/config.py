"""Engine configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import EngineSettings
from .utils import load_json

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'data' / 'engine_config.json'


def load_settings(path: Path | str) -> EngineSettings:
    """
    Load engine settings from an arbitrary JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has an invalid structure
    """
    return load_json(path, schema=EngineSettings)


@lru_cache(maxsize=1)
def get_config() -> EngineSettings:
    """
    Load engine configuration from sidegames/data/engine_config.json.

    Configuration is cached after first load.

    Returns:
        EngineSettings object with validated settings

    Example:
        from sidegames.config import get_config
        config = get_config()
        print(f"Default par: {config.default_par}")
    """
    return load_settings(DEFAULT_CONFIG_PATH)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
