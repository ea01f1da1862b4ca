# projectshelf/backends/supabase.py
from typing import Any, Dict, List, Optional

import aiohttp
from loguru import logger

from ..config.schema import AppConfig
from ..core.backends import ProjectBackend, Row, register_backend
from ..core.errors import StoreError

@register_backend
class SupabaseBackend(ProjectBackend):
    """Project rows stored in a Supabase table, reached through its PostgREST API."""
    name: str = "supabase"

    def __init__(self, url: str, api_key: str, table: str = "projects",
                 owner_column: str = "user_id", timeout: Optional[float] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        if not url or not api_key:
            raise StoreError("Supabase URL and key must be configured.")
        self.base_url = f"{url.rstrip('/')}/rest/v1/{table}"
        self.api_key = api_key
        self.owner_column = owner_column
        self.timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None
        self._session = session
        self._owns_session = session is None

    @classmethod
    def from_config(cls, config: AppConfig) -> "SupabaseBackend":
        return cls(
            url=config.supabase_url or "",
            api_key=config.supabase_key or "",
            table=config.projects_table,
            owner_column=config.owner_column,
            timeout=config.request_timeout,
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    def _request_options(self) -> Dict[str, Any]:
        """Per-request auth headers and timeout, so injected sessions get them too."""
        options: Dict[str, Any] = {"headers": self._headers()}
        if self.timeout is not None:
            options["timeout"] = self.timeout
        return options

    def list_params(self, owner_id: str) -> Dict[str, str]:
        """PostgREST query for one owner's rows, newest first."""
        return {
            "select": "*",
            self.owner_column: f"eq.{owner_id}",
            "order": "created_at.desc",
        }

    @staticmethod
    async def _raise_for_status(response: aiohttp.ClientResponse, action: str) -> None:
        if response.status < 400:
            return
        detail = (await response.text()).strip()
        try:
            body = await response.json(content_type=None)
            if isinstance(body, dict) and body.get("message"):
                detail = body["message"]
        except ValueError:
            pass
        raise StoreError(f"Failed to {action}: {detail or response.reason}", status=response.status)

    async def fetch_rows(self, owner_id: str) -> List[Row]:
        session = self._get_session()
        logger.debug(f"GET {self.base_url} for owner {owner_id}")
        try:
            async with session.get(self.base_url, params=self.list_params(owner_id), **self._request_options()) as response:
                await self._raise_for_status(response, "load projects")
                rows = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise StoreError(f"Failed to load projects: {e}") from e
        except ValueError as e:
            raise StoreError(f"Failed to load projects: invalid JSON response ({e})") from e

        if not isinstance(rows, list):
            raise StoreError("Failed to load projects: unexpected response shape")
        return rows

    async def delete_row(self, project_id: str) -> None:
        session = self._get_session()
        logger.debug(f"DELETE {self.base_url} id={project_id}")
        try:
            async with session.delete(self.base_url, params={"id": f"eq.{project_id}"}, **self._request_options()) as response:
                await self._raise_for_status(response, "delete project")
        except aiohttp.ClientError as e:
            raise StoreError(f"Failed to delete project: {e}") from e

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
