# projectshelf/core/history.py
from typing import Callable, List, Optional, Set
from loguru import logger

from ..services.notifications import LogNotifier, Notice, Notifier, Severity
from .errors import EmptyProjectError, StoreError
from .models import Project, SessionProjectView, utc_now_iso
from .session import EditingSession, load_into_session
from .store import ProjectStore

class ProjectHistory:
    """
    The signed-in user's project list and the flows that act on it.

    One instance owns its list. Refreshes never overlap: a refresh requested while
    one is in flight is ignored. Store failures become notices and leave the last
    good list in place.
    """

    def __init__(self, store: ProjectStore, session: EditingSession,
                 notifier: Optional[Notifier] = None, owner_id: Optional[str] = None,
                 now: Callable[[], str] = utc_now_iso):
        self.store = store
        self.session = session
        self.notifier = notifier or LogNotifier()
        self.owner_id = owner_id
        self._now = now
        self.projects: List[Project] = []
        self.loading = True # Until the first refresh settles
        self.refreshing = False
        self._deleted_while_fetching: Set[str] = set()

    def _notify(self, title: str, description: str, severity: Severity = Severity.INFO):
        try:
            self.notifier.notify(Notice(title=title, description=description, severity=severity))
        except Exception as e:
            logger.error(f"Error in notifier callback: {e}")

    # --- Queries ---

    def find(self, project_id: str) -> Optional[Project]:
        return next((p for p in self.projects if p.id == project_id), None)

    @property
    def current_project_name(self) -> Optional[str]:
        current = self.session.current_project
        return current.name if current else None

    # --- Flows ---

    async def set_owner(self, owner_id: Optional[str]) -> bool:
        """Auth changed: remember the new owner and reload the whole list."""
        logger.info(f"Owner changed to {owner_id!r}; reloading projects.")
        self.owner_id = owner_id
        return await self.refresh(manual=False)

    async def refresh(self, manual: bool = False) -> bool:
        """
        Re-fetches the list. Returns True when the list was replaced.

        `manual` refreshes announce the result count; initial loads stay quiet
        unless they fail. If the owner changes while a fetch is in flight, that
        result is dropped and the fetch repeats for the new owner.
        """
        if self.refreshing:
            logger.debug("Refresh already in flight; ignoring request.")
            return False

        self.refreshing = True
        try:
            while True:
                owner = self.owner_id
                self._deleted_while_fetching.clear()
                try:
                    projects = await self.store.list(owner)
                except StoreError as e:
                    if owner != self.owner_id:
                        continue
                    logger.error(f"Error loading projects: {e}")
                    self._notify("Failed to Load Projects",
                                 "There was an error loading your projects. Please try refreshing.",
                                 Severity.ERROR)
                    return False

                if owner != self.owner_id:
                    logger.info("Owner changed during fetch; discarding stale result.")
                    continue

                if self._deleted_while_fetching:
                    projects = [p for p in projects if p.id not in self._deleted_while_fetching]
                self.projects = projects
                if manual:
                    self._notify("Projects Refreshed", f"Loaded {len(projects)} project(s)", Severity.SUCCESS)
                return True
        finally:
            self.refreshing = False
            self.loading = False
            self._deleted_while_fetching.clear()

    async def delete_project(self, project_id: str) -> bool:
        """Deletes a project and drops it from the held list. Never re-fetches."""
        try:
            await self.store.delete(project_id)
        except StoreError as e:
            logger.error(f"Error deleting project {project_id}: {e}")
            self._notify("Delete Failed", "Failed to delete project. Please try again.", Severity.ERROR)
            return False

        self.projects = [p for p in self.projects if p.id != project_id]
        if self.refreshing:
            self._deleted_while_fetching.add(project_id)
        self._notify("Project Deleted", "Project has been permanently deleted.", Severity.SUCCESS)
        return True

    def load_project(self, project: Project) -> Optional[SessionProjectView]:
        """Opens a project in the editing session, reporting the outcome as a notice."""
        try:
            view = load_into_session(project, self.session, now=self._now)
        except EmptyProjectError:
            logger.warning(f"Refusing to load project {project.id}: it has no files.")
            self._notify("No Files Found", "This project doesn't contain any files to load.", Severity.ERROR)
            return None

        self._notify("Project Loaded", f"{project.name} has been loaded into the editor.", Severity.SUCCESS)
        return view
