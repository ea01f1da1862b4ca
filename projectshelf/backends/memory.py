# projectshelf/backends/memory.py
import json
from pathlib import Path
from typing import Iterable, List, Optional

from loguru import logger

from ..config.schema import AppConfig
from ..core.backends import ProjectBackend, Row, register_backend
from ..core.errors import StoreError

@register_backend
class MemoryBackend(ProjectBackend):
    """
    In-process rows, optionally seeded from a JSON file holding a list of rows.

    When a file is attached, deletes are written back to it.
    """
    name: str = "memory"

    def __init__(self, rows: Optional[Iterable[Row]] = None, owner_column: str = "user_id",
                 path: Optional[Path] = None):
        self.rows: List[Row] = [dict(r) for r in rows or []]
        self.owner_column = owner_column
        self.path = path

    @classmethod
    def from_json_file(cls, path: Path, owner_column: str = "user_id") -> "MemoryBackend":
        try:
            rows = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Could not read project rows from {path}: {e}") from e
        if not isinstance(rows, list):
            raise StoreError(f"Project rows file {path} must contain a JSON list.")
        logger.info(f"Loaded {len(rows)} project row(s) from {path}")
        return cls(rows=rows, owner_column=owner_column, path=path)

    @classmethod
    def from_config(cls, config: AppConfig) -> "MemoryBackend":
        if config.rows_file:
            return cls.from_json_file(Path(config.rows_file), owner_column=config.owner_column)
        return cls(owner_column=config.owner_column)

    async def fetch_rows(self, owner_id: str) -> List[Row]:
        owned = [dict(r) for r in self.rows if str(r.get(self.owner_column)) == owner_id]
        # Missing timestamps sort first, as with a descending SQL order
        owned.sort(key=lambda r: (r.get("created_at") is None, r.get("created_at") or ""), reverse=True)
        return owned

    async def delete_row(self, project_id: str) -> None:
        remaining = [r for r in self.rows if str(r.get("id")) != project_id]
        if len(remaining) == len(self.rows):
            logger.debug(f"No stored row matched id {project_id}; nothing deleted.")
            return
        self.rows = remaining
        if self.path is not None:
            try:
                self.path.write_text(json.dumps(self.rows, indent=2), encoding="utf-8")
            except OSError as e:
                raise StoreError(f"Could not write project rows to {self.path}: {e}") from e
