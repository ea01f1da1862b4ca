# tests/core/test_normalizer.py
from collections.abc import Mapping

import pytest

from projectshelf.core.models import FileRecord
from projectshelf.core.normalizer import normalize_files


class ExplodingEntry(Mapping):
    """A structured entry whose field access fails."""

    def __getitem__(self, key):
        raise RuntimeError("corrupt field")

    def __iter__(self):
        return iter(["id"])

    def __len__(self):
        return 1


class UnsizedPayload(list):
    """A payload whose truthiness check itself fails."""

    def __len__(self):
        raise RuntimeError("length unavailable")


@pytest.mark.parametrize("raw", [None, [], {}, "", 0])
def test_absent_or_empty_payload_gives_no_files(raw):
    assert normalize_files(raw) == []

def test_fallback_names_are_positional():
    files = normalize_files([{}, {}, "x"])
    assert [f.name for f in files] == ["file_1.move", "file_2.move", "file_3.move"]
    assert [f.id for f in files] == ["file_0", "file_1", "file_2"]
    assert files[2].content == "x"
    assert all(f.type == "move" for f in files)
    assert all(f.parent_id is None for f in files)

def test_structured_fields_take_precedence():
    files = normalize_files([{"id": "a1", "name": "src/a.move", "type": "move", "content": "module a {}", "parentId": "dir1"}])
    assert files == [FileRecord(id="a1", name="src/a.move", type="move", content="module a {}", parent_id="dir1")]

def test_empty_strings_fall_back():
    files = normalize_files([{"id": "", "name": "", "type": "", "content": None}])
    assert files[0] == FileRecord(id="file_0", name="file_1.move", type="move", content="")

def test_unknown_element_shape_gets_empty_fallback():
    files = normalize_files([42, None])
    assert files[0] == FileRecord(id="file_0", name="file_1.move", type="move", content="")
    assert files[1].name == "file_2.move"

def test_keyed_mapping_uses_values_in_insertion_order():
    raw = {"z": {"name": "z.move"}, "a": "plain content", "m": {"id": "m-id"}}
    files = normalize_files(raw)
    assert [f.name for f in files] == ["z.move", "file_2.move", "file_3.move"]
    assert files[1].content == "plain content"
    assert files[2].id == "m-id"
    assert files[0].id == "file_0"

def test_non_container_payload_gives_no_files():
    assert normalize_files("just a string") == []
    assert normalize_files(12.5) == []

def test_extraction_failure_is_swallowed():
    assert normalize_files([{"name": "ok.move"}, ExplodingEntry()]) == []

def test_extraction_failure_is_logged(mocker):
    warning = mocker.patch("projectshelf.core.normalizer.logger.warning")
    normalize_files([ExplodingEntry()], project_id="p1")
    warning.assert_called_once()
    assert "p1" in warning.call_args[0][0]

def test_payload_failing_truthiness_gives_no_files(mocker):
    warning = mocker.patch("projectshelf.core.normalizer.logger.warning")
    assert normalize_files(UnsizedPayload(), project_id="p2") == []
    assert "p2" in warning.call_args[0][0]

def test_normalizing_normalized_records_is_identity():
    records = [
        FileRecord(id="f1", name="sources/a.move", type="move", content="module a {}", parent_id="d1"),
        FileRecord(id="f2", name="Move.toml", type="toml", content="[package]"),
    ]
    assert normalize_files(records) == records
    assert normalize_files([r.to_dict() for r in records]) == records
    assert normalize_files(normalize_files(records)) == records

def test_non_string_values_are_stringified():
    files = normalize_files([{"id": 7, "name": "a.move", "parentId": 3}])
    assert files[0].id == "7"
    assert files[0].parent_id == "3"
