# projectshelf/core/presentation.py
from dataclasses import dataclass
from typing import Any, Optional

from ..config.schema import DEFAULT_EXPLORER_URL
from .models import Project
from .store import parse_timestamp

NO_CONTENT_PLACEHOLDER = "No content available"

@dataclass(frozen=True)
class StatusPresentation:
    icon: str # Icon kind: check-circle, clock, file-text
    icon_color: str
    color_class: str # Badge classes

_DEPLOYED = StatusPresentation(
    icon="check-circle",
    icon_color="text-green-400",
    color_class="bg-green-500/20 text-green-300 border-green-500/30",
)
_DRAFT = StatusPresentation(
    icon="clock",
    icon_color="text-yellow-400",
    color_class="bg-yellow-500/20 text-yellow-300 border-yellow-500/30",
)
_IN_PROGRESS = StatusPresentation(
    icon="file-text",
    icon_color="text-electric-blue-400",
    color_class="bg-electric-blue-500/20 text-electric-blue-300 border-electric-blue-500/30",
)

_BY_STATUS = {"deployed": _DEPLOYED, "draft": _DRAFT}

def status_presentation(status: Any) -> StatusPresentation:
    """Icon and colors for a project status. Unknown values read as in-progress."""
    if not isinstance(status, str):
        return _IN_PROGRESS
    return _BY_STATUS.get(status, _IN_PROGRESS)

def explorer_tx_url(tx_hash: Optional[str], base_url: str = DEFAULT_EXPLORER_URL) -> Optional[str]:
    """Block explorer link for a deployment transaction."""
    if not tx_hash:
        return None
    return f"{base_url.rstrip('/')}/tx/{tx_hash}"

def project_type_label(project_type: str) -> str:
    # Only the first underscore is replaced: "move_contract" -> "MOVE CONTRACT"
    return project_type.replace("_", " ", 1).upper()

def format_created_date(created_at: str) -> str:
    parsed = parse_timestamp(created_at)
    return parsed.date().isoformat() if parsed else created_at

def load_action_label(project: Project, current_project_id: Optional[str]) -> str:
    return "Current" if current_project_id == project.id else "Load"

def file_content_preview(content: str) -> str:
    return content or NO_CONTENT_PLACEHOLDER
