# projectshelf/core/session.py
from typing import Callable, List, Optional, Set
from loguru import logger

from .errors import EmptyProjectError
from .folders import PATH_SEPARATOR
from .models import FileRecord, Project, SessionFile, SessionProjectView, utc_now_iso

FILE = "file"
FOLDER = "folder"

class EditingSession:
    """Holds the single project currently open for editing."""

    def __init__(self):
        self._current: Optional[SessionProjectView] = None

    @property
    def current_project(self) -> Optional[SessionProjectView]:
        return self._current

    def set_current_project(self, view: SessionProjectView) -> None:
        """Replaces whatever project was open before."""
        previous = self._current
        self._current = view
        if previous is not None and previous.id != view.id:
            logger.debug(f"Editing session switched from '{previous.name}' to '{view.name}'.")
        else:
            logger.debug(f"Editing session now holds '{view.name}'.")

    def is_current(self, project_id: str) -> bool:
        return self._current is not None and self._current.id == project_id

def _folder_ids(files: List[FileRecord]) -> Set[str]:
    return {f.parent_id for f in files if f.parent_id}

def session_file_type(file: FileRecord, folder_ids: Set[str]) -> str:
    """
    "folder" when the structure says so: the name ends with a separator or another
    record points at this one as its parent. The stored `type` is a file-kind tag
    and is not consulted.
    """
    if file.name.endswith(PATH_SEPARATOR) or file.id in folder_ids:
        return FOLDER
    return FILE

def build_session_view(project: Project, now: Callable[[], str] = utc_now_iso) -> SessionProjectView:
    """Reshapes a stored project into the editing session's format."""
    if not project.files:
        raise EmptyProjectError(project.id)

    folder_ids = _folder_ids(project.files)
    files = [
        SessionFile(
            id=f.id,
            name=f.name,
            type=session_file_type(f, folder_ids),
            content=f.content,
            parent_id=f.parent_id,
        )
        for f in project.files
    ]
    return SessionProjectView(
        id=project.id,
        name=project.name,
        files=files,
        created_at=project.created_at,
        updated_at=now(),
    )

def load_into_session(project: Project, session: EditingSession,
                      now: Callable[[], str] = utc_now_iso) -> SessionProjectView:
    """
    Makes `project` the session's current project.

    Raises EmptyProjectError, leaving the session untouched, when the project has
    no files. Reloading the already-current project is allowed.
    """
    view = build_session_view(project, now=now)
    session.set_current_project(view)
    logger.info(f"Loaded project '{project.name}' ({len(view.files)} file(s)) into the editing session.")
    return view
