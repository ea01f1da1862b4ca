# projectshelf/backends/__init__.py
# Importing the modules registers the built-in backends.
from loguru import logger

from ..config.schema import AppConfig
from ..core.backends import ProjectBackend, get_available_backends, get_backend_class
from ..core.errors import StoreError
from .memory import MemoryBackend
from .supabase import SupabaseBackend

def create_backend(config: AppConfig) -> ProjectBackend:
    """Instantiates the backend named in the configuration."""
    backend_class = get_backend_class(config.backend)
    if backend_class is None:
        raise StoreError(f"Unknown backend '{config.backend}'. Available: {', '.join(get_available_backends())}")
    logger.debug(f"Creating '{config.backend}' backend.")
    return backend_class.from_config(config)

__all__ = ["MemoryBackend", "SupabaseBackend", "create_backend"]
