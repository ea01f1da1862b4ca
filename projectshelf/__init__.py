# projectshelf/__init__.py
import os
from loguru import logger

__version__ = "0.1.0"

# Centralized backend discovery
def _initialize_backends():
    """Loads third-party backends unless explicitly skipped."""
    # Allow skipping discovery for tests or specific environments
    if os.environ.get("PROJECTSHELF_SKIP_PLUGINS", "0") == "1":
        logger.info("Skipping backend discovery due to PROJECTSHELF_SKIP_PLUGINS=1.")
        return

    try:
        from .core.backends import load_backends
        load_backends() # Discover and register backends from entry points
    except ImportError as e:
        logger.warning(f"Could not load backends during initial import: {e}")
    except Exception:
        logger.exception("An unexpected error occurred during backend discovery.")

_initialize_backends()
