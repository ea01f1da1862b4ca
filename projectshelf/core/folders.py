# projectshelf/core/folders.py
from dataclasses import replace
from typing import Dict, List

from .models import FileRecord

ROOT_FOLDER = "root"
PATH_SEPARATOR = "/"

def organize_by_folder(files: List[FileRecord]) -> Dict[str, List[FileRecord]]:
    """
    Groups files by the first segment of their name for display.

    Files without a separator go under the reserved "root" key. Only one level is
    peeled: "a/b/c.move" lands under "a" as "b/c.move". Groups keep input order and
    keys appear in first-seen order. Input records are not modified.
    """
    folders: Dict[str, List[FileRecord]] = {}
    for file in files:
        parts = file.name.split(PATH_SEPARATOR)
        if len(parts) > 1:
            folder = parts[0]
            folders.setdefault(folder, []).append(replace(file, name=PATH_SEPARATOR.join(parts[1:])))
        else:
            folders.setdefault(ROOT_FOLDER, []).append(file)
    return folders
