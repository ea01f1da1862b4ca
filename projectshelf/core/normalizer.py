# projectshelf/core/normalizer.py
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional
from loguru import logger

from .errors import MalformedDataError
from .models import FileRecord

DEFAULT_FILE_TYPE = "move"
DEFAULT_FILE_EXTENSION = ".move"

# --- Core Logic (Pure Python) ---

def _text(value: Any, fallback: str) -> str:
    """Empty values fall back, like the stored records' `value || fallback` convention."""
    if not value:
        return fallback
    return value if isinstance(value, str) else str(value)

def _fallback_record(index: int, content: str = "") -> FileRecord:
    return FileRecord(
        id=f"file_{index}",
        name=f"file_{index + 1}{DEFAULT_FILE_EXTENSION}",
        type=DEFAULT_FILE_TYPE,
        content=content,
    )

def _record_from_mapping(obj: Mapping, index: int) -> FileRecord:
    parent_id = obj.get("parentId")
    return FileRecord(
        id=_text(obj.get("id"), f"file_{index}"),
        name=_text(obj.get("name"), f"file_{index + 1}{DEFAULT_FILE_EXTENSION}"),
        type=_text(obj.get("type"), DEFAULT_FILE_TYPE),
        content=_text(obj.get("content"), ""),
        parent_id=None if parent_id is None else str(parent_id),
    )

def _normalize_element(element: Any, index: int) -> FileRecord:
    """Applies the per-element rule: structured object, bare string, or anything else."""
    if isinstance(element, FileRecord):
        return _record_from_mapping(element.to_dict(), index)
    if isinstance(element, Mapping):
        return _record_from_mapping(element, index)
    if isinstance(element, str):
        return _fallback_record(index, content=element)
    return _fallback_record(index)

def _normalize_sequence(elements: Iterable[Any]) -> List[FileRecord]:
    records: List[FileRecord] = []
    for index, element in enumerate(elements):
        try:
            records.append(_normalize_element(element, index))
        except Exception as e:
            raise MalformedDataError(f"Could not read file entry at position {index}: {e}") from e
    return records

def normalize_files(raw: Any, project_id: Optional[str] = None) -> List[FileRecord]:
    """
    Converts an untyped stored "files" value into an ordered list of FileRecords.

    Accepts a list/tuple of entries or a keyed mapping whose values are the entries
    (taken in insertion order). Any other shape yields an empty list. Failures while
    reading entries are logged and also yield an empty list so one corrupt record
    never breaks the caller.
    """
    try:
        if not raw:
            return []
        if isinstance(raw, (list, tuple)):
            return _normalize_sequence(raw)
        if isinstance(raw, Mapping):
            return _normalize_sequence(raw.values())
        logger.debug(f"Unsupported files payload type {type(raw).__name__} for project {project_id}; using no files.")
        return []
    except MalformedDataError as e:
        logger.warning(f"Error parsing files for project {project_id}: {e}")
        return []
    except Exception as e:
        # Iteration of the container itself failed (e.g. a broken mapping view)
        logger.warning(f"Error parsing files for project {project_id}: {e}")
        return []
