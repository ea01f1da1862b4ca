# projectshelf/core/backends.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Type, TYPE_CHECKING
import importlib.metadata
from loguru import logger

if TYPE_CHECKING:
    from ..config.schema import AppConfig

Row = Dict[str, Any]

class ProjectBackend(ABC):
    """Abstract base class for remote project stores."""
    name: str = "Unnamed Backend" # Unique identifier name

    @abstractmethod
    async def fetch_rows(self, owner_id: str) -> List[Row]:
        """
        Returns the raw project rows owned by `owner_id`, newest `created_at` first.
        Raises StoreError when the store cannot be reached or rejects the request.
        """

    @abstractmethod
    async def delete_row(self, project_id: str) -> None:
        """Deletes the row with the given id. Raises StoreError on failure."""

    async def close(self) -> None:
        """Releases any held connections. Default is a no-op."""

    @classmethod
    def from_config(cls, config: "AppConfig") -> "ProjectBackend":
        """Builds the backend from application settings."""
        return cls()

# --- Backend Registry ---
_backend_registry: Dict[str, Type[ProjectBackend]] = {}

def register_backend(cls: Type[ProjectBackend]):
    """Class decorator registering a backend under its `name`."""
    if not issubclass(cls, ProjectBackend):
        raise TypeError("Backend must inherit from ProjectBackend")
    if not cls.name or cls.name == "Unnamed Backend":
        raise ValueError(f"Backend {cls.__name__} must define a unique 'name' attribute.")

    if cls.name in _backend_registry:
        logger.warning(f"Backend name conflict: '{cls.name}' already registered. Overwriting.")
    _backend_registry[cls.name] = cls
    logger.debug(f"Registered project backend: '{cls.name}'")
    return cls

def load_backends(entry_point_group="projectshelf.backends"):
    """Discovers and registers third-party backends from entry points."""
    logger.info(f"Discovering backends using entry point group: '{entry_point_group}'")

    try:
        entry_points = importlib.metadata.entry_points(group=entry_point_group)
    except Exception as e:
        logger.error(f"Error accessing entry points for group '{entry_point_group}': {e}")
        entry_points = []

    loaded_count = 0
    for ep in entry_points:
        try:
            backend_class = ep.load()
            if not (isinstance(backend_class, type) and issubclass(backend_class, ProjectBackend)):
                logger.warning(f"Entry point {ep.name} did not load a ProjectBackend subclass.")
                continue
            backend_name = getattr(backend_class, "name", None)
            if not backend_name or backend_name == "Unnamed Backend":
                logger.error(f"Backend class {backend_class.__name__} from entry point {ep.name} lacks a valid 'name' attribute.")
            elif backend_name in _backend_registry:
                logger.warning(f"Backend name conflict via entry point: '{backend_name}' already registered. Skipping {ep.name}.")
            else:
                _backend_registry[backend_name] = backend_class
                logger.info(f"Loaded backend '{backend_name}' from entry point '{ep.name}'")
                loaded_count += 1
        except Exception as e:
            logger.exception(f"Failed to load backend from entry point {ep.name}: {e}")

    logger.info(f"Loaded {loaded_count} backends via entry points. Total registered: {len(_backend_registry)}")

def get_available_backends() -> List[str]:
    return sorted(_backend_registry)

def get_backend_class(name: str) -> Type[ProjectBackend] | None:
    """Gets a registered backend class by name."""
    return _backend_registry.get(name)
