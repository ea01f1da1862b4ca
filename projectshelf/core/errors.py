# projectshelf/core/errors.py
from typing import Optional

class ProjectShelfError(Exception):
    """Base class for all errors raised by projectshelf."""

class StoreError(ProjectShelfError):
    """Remote store failed to list or delete projects."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status # HTTP status when the backend is HTTP based

    def __str__(self) -> str:
        if self.status is not None:
            return f"{self.message} (status {self.status})"
        return self.message

class EmptyProjectError(ProjectShelfError):
    """A project with no files cannot be loaded into the editing session."""

    def __init__(self, project_id: str):
        super().__init__(f"Project '{project_id}' contains no files to load.")
        self.project_id = project_id

class MalformedDataError(ProjectShelfError):
    """Stored file payload could not be read. Never leaves the normalizer."""
