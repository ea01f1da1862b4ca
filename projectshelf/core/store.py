# projectshelf/core/store.py
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional
from loguru import logger

from .backends import ProjectBackend
from .errors import StoreError
from .models import (
    DEFAULT_PROJECT_NAME, DEFAULT_PROJECT_TYPE, DEFAULT_STATUS,
    Project, utc_now_iso,
)
from .normalizer import normalize_files

def _optional_text(value: Any) -> Optional[str]:
    if not value:
        return None
    return value if isinstance(value, str) else str(value)

def _text(value: Any, fallback: str) -> str:
    return _optional_text(value) or fallback

def map_row(row: Mapping[str, Any], now: Callable[[], str] = utc_now_iso) -> Project:
    """Maps a raw stored row into a Project, filling display defaults."""
    project_id = str(row["id"])
    return Project(
        id=project_id,
        name=_text(row.get("name"), DEFAULT_PROJECT_NAME),
        type=_text(row.get("type"), DEFAULT_PROJECT_TYPE),
        status=_text(row.get("status"), DEFAULT_STATUS),
        created_at=_optional_text(row.get("created_at")) or now(), # Mapping time, best-effort display value
        tx_hash=_optional_text(row.get("tx_hash")),
        contract_address=_optional_text(row.get("contract_address")),
        files=normalize_files(row.get("files"), project_id=project_id),
    )

def parse_timestamp(value: str) -> Optional[datetime]:
    """Parses an ISO-8601 timestamp; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

def sort_newest_first(projects: List[Project]) -> List[Project]:
    """Stable sort by created_at descending; unparseable timestamps go last."""
    def key(project: Project):
        parsed = parse_timestamp(project.created_at)
        return (parsed is not None, parsed or datetime.min.replace(tzinfo=timezone.utc))
    return sorted(projects, key=key, reverse=True)

class ProjectStore:
    """Reads and deletes one user's projects through a ProjectBackend."""

    def __init__(self, backend: ProjectBackend, now: Callable[[], str] = utc_now_iso):
        self.backend = backend
        self._now = now
        logger.debug(f"ProjectStore initialized with backend '{backend.name}'.")

    async def list(self, owner_id: Optional[str]) -> List[Project]:
        """
        Returns the owner's projects, newest first.

        No owner means the user is not signed in yet: returns [] without
        contacting the backend.
        """
        if not owner_id:
            logger.debug("No owner id; skipping project fetch.")
            return []

        try:
            rows = await self.backend.fetch_rows(owner_id)
        except StoreError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error fetching projects for owner {owner_id}")
            raise StoreError(f"Could not load projects: {e}") from e

        projects: List[Project] = []
        for row in rows or []:
            if not isinstance(row, Mapping) or row.get("id") in (None, ""):
                logger.warning(f"Skipping stored project row without an id: {row!r:.200}")
                continue
            projects.append(map_row(row, now=self._now))

        logger.info(f"Fetched {len(projects)} project(s) for owner {owner_id}.")
        return sort_newest_first(projects)

    async def delete(self, project_id: str) -> None:
        """Permanently deletes a project. There is no undo."""
        try:
            await self.backend.delete_row(project_id)
        except StoreError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error deleting project {project_id}")
            raise StoreError(f"Could not delete project: {e}") from e
        logger.info(f"Deleted project {project_id}.")
