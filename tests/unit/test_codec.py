"""Tests for snapshot serialization."""

import json

import pytest

from cardsmith.core import MalformedSnapshotError
from cardsmith.scene import EMPTY_SNAPSHOT, codec


@pytest.mark.unit
def test_dumps_uses_camel_case_records(nested_snapshot):
    records = json.loads(codec.dumps(nested_snapshot))

    assert records[1] == {
        "id": "d",
        "type": "container",
        "x": 0,
        "y": 0,
        "width": 200,
        "height": 100,
        "zIndex": 1,
        "parentId": "c",
        "properties": {},
        "propertyBinding": None,
    }


@pytest.mark.unit
def test_loads_restores_equal_snapshot(every_type_snapshot):
    assert codec.loads(codec.dumps(every_type_snapshot)) == every_type_snapshot


@pytest.mark.unit
def test_loads_empty_array():
    assert codec.loads("[]") == EMPTY_SNAPSHOT


@pytest.mark.unit
def test_loads_fills_defaults():
    (component,) = codec.loads('[{"id": "a", "type": "text"}]')

    assert component.size == (200, 100)
    assert component.z_index == 0
    assert component.parent_id is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "text,fragment",
    [
        ("not json", "Invalid JSON"),
        ('{"id": "a"}', "expected an array"),
        ('["a"]', "record 0: expected an object"),
        ('[{"type": "text"}]', "record 0: id"),
        ('[{"id": "a", "type": "text", "width": "wide"}]', "record 0: width"),
        ('[{"id": "a", "type": "text", "colour": "red"}]', "record 0: colour"),
    ],
)
def test_loads_rejects_malformed_input(text, fragment):
    with pytest.raises(MalformedSnapshotError) as exc_info:
        codec.loads(text)

    assert fragment in str(exc_info.value)


@pytest.mark.unit
def test_loads_rejects_duplicate_ids():
    with pytest.raises(MalformedSnapshotError) as exc_info:
        codec.loads('[{"id": "a", "type": "text"}, {"id": "a", "type": "button"}]')

    assert exc_info.value.index == 1


@pytest.mark.unit
def test_loads_rejects_dangling_parent():
    with pytest.raises(MalformedSnapshotError, match="parentId 'ghost'"):
        codec.loads('[{"id": "a", "type": "text", "parentId": "ghost"}]')


@pytest.mark.unit
@pytest.mark.parametrize(
    "records",
    [
        [{"id": "a", "type": "container", "parentId": "a"}],
        [
            {"id": "a", "type": "container", "parentId": "b"},
            {"id": "b", "type": "container", "parentId": "a"},
        ],
    ],
)
def test_from_records_rejects_cycles(records):
    with pytest.raises(MalformedSnapshotError, match="own ancestor"):
        codec.from_records(records)


@pytest.mark.unit
def test_fingerprint_tracks_content(layered_snapshot):
    moved = (layered_snapshot[0].model_copy(update={"x": 20}), layered_snapshot[1])

    assert codec.fingerprint(layered_snapshot) == codec.fingerprint(tuple(layered_snapshot))
    assert codec.fingerprint(layered_snapshot) != codec.fingerprint(moved)
