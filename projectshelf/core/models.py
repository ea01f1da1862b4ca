# projectshelf/core/models.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

DEFAULT_PROJECT_NAME = "Untitled Project"
DEFAULT_PROJECT_TYPE = "move_contract"
DEFAULT_STATUS = "draft"

def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

@dataclass(frozen=True)
class FileRecord:
    """A single source file stored with a project."""
    id: str
    name: str # May embed '/' as a path separator
    type: str # Free-form file-kind tag, e.g. "move"
    content: str = ""
    parent_id: Optional[str] = None # Informational back-reference to a folder id

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "name": self.name, "type": self.type, "content": self.content}
        if self.parent_id is not None:
            data["parentId"] = self.parent_id
        return data

@dataclass(frozen=True)
class Project:
    """A stored project as shown in the history list. Never mutated in place."""
    id: str
    name: str = DEFAULT_PROJECT_NAME
    type: str = DEFAULT_PROJECT_TYPE
    status: str = DEFAULT_STATUS # "draft", "deployed" or anything else
    created_at: str = ""
    tx_hash: Optional[str] = None
    contract_address: Optional[str] = None
    files: List[FileRecord] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.files)

@dataclass(frozen=True)
class SessionFile:
    """File entry in the shape the editing session expects."""
    id: str
    name: str
    type: str # Exactly "file" or "folder"
    content: str
    parent_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "type": self.type,
                "content": self.content, "parentId": self.parent_id}

@dataclass(frozen=True)
class SessionProjectView:
    """Project as handed to the editing session."""
    id: str
    name: str
    files: List[SessionFile]
    created_at: str
    updated_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "files": [f.to_dict() for f in self.files],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
