from __future__ import annotations

import pytest

from modulescope.core.errors import SnapshotError
from modulescope.core.manifest.version import Version
from modulescope.core.runtime.models import ModuleState
from modulescope.core.runtime.snapshot import load_snapshot, snapshot_from_dict
from modulescope.core.views.module_view import ModuleView
from tests.helpers.registry_fakes import RecordingLogger, snapshot_dict


def test_snapshot_converts_records():
    snap = snapshot_from_dict(snapshot_dict())
    by_id = {m.module_id: m for m in snap.modules}
    assert set(by_id) == {0, 3, 7}
    assert by_id[7].version == Version(1, 2, 0)
    assert by_id[7].state is ModuleState.ACTIVE
    assert by_id[0].state is ModuleState.ACTIVE
    assert by_id[3].state is ModuleState.RESOLVED
    assert [b.properties["service.id"] for b in snap.bindings_for(7)] == [12, 11]
    assert snap.bindings_for(3) == ()


def test_unknown_numeric_state_is_kept():
    raw = {"modules": [{"module_id": 1, "state": 64}]}
    (m,) = snapshot_from_dict(raw).modules
    assert m.state == 64
    assert ModuleView(m).status is None


def test_module_headers_are_read_only():
    (m,) = snapshot_from_dict({"modules": [{"module_id": 1, "headers": {"Bundle-Name": "x"}}]}).modules
    with pytest.raises(TypeError):
        m.headers["Bundle-Name"] = "y"  # type: ignore[index]


@pytest.mark.parametrize(
    "raw",
    [
        {"modules": [{"module_id": 1, "state": "SLEEPING"}]},
        {"modules": [{"module_id": 1, "version": "one"}]},
        {"modules": [{"module_id": -1}]},
        {"modules": [{"module_id": 1, "unexpected": True}]},
        {"modules": [{"module_id": 1}, {"module_id": 1}]},
        {"modules": [{"module_id": 1}], "bindings": {"abc": []}},
    ],
)
def test_invalid_snapshots_raise(raw):
    with pytest.raises(SnapshotError) as ei:
        snapshot_from_dict(raw)
    assert ei.value.code == "snapshot_error"


def test_bindings_for_unknown_module_ignored_with_warning():
    log = RecordingLogger()
    snap = snapshot_from_dict({"modules": [{"module_id": 1}], "bindings": {"2": [{"properties": {"service.id": 1}}]}}, logger=log)
    assert snap.bindings == {}
    assert log.messages("warning")


def test_load_snapshot_from_file(snapshot_path):
    snap = load_snapshot(snapshot_path)
    assert len(snap.modules) == 3


def test_load_snapshot_missing_or_corrupt(tmp_path):
    with pytest.raises(SnapshotError):
        load_snapshot(str(tmp_path / "missing.json"))
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(SnapshotError):
        load_snapshot(str(bad))
