from __future__ import annotations

import random

import pytest

from modulescope.core.errors import InvariantViolation
from modulescope.core.views.capability_binding import CapabilityBindingView
from tests.helpers.registry_fakes import make_binding


def test_accessors_forward_properties():
    b = make_binding(42, interfaces=["com.a.Api", "com.a.Other"], ranking=7, **{"service.pid": "com.a.pid", "service.bundleid": 9})
    v = CapabilityBindingView(b)
    assert v.service_id == 42
    assert v.interfaces == ("com.a.Api", "com.a.Other")
    assert v.interfaces_display == "com.a.Api, com.a.Other"
    assert v.ranking == 7
    assert v.service_pid == "com.a.pid"
    assert v.owner_module_id == 9
    assert v.reference == "ref-42"


def test_missing_and_malformed_properties_degrade():
    v = CapabilityBindingView(make_binding(None, ranking="high"))
    assert v.service_id is None
    assert v.interfaces == ()
    assert v.ranking == 0
    assert v.service_pid is None


def test_single_interface_string():
    assert CapabilityBindingView(make_binding(1, interfaces="com.a.Api")).interfaces == ("com.a.Api",)


def test_order_ranking_desc_then_id_asc():
    views = [
        CapabilityBindingView(make_binding(5)),
        CapabilityBindingView(make_binding(3)),
        CapabilityBindingView(make_binding(9, ranking=10)),
        CapabilityBindingView(make_binding(None)),
        CapabilityBindingView(make_binding(1, ranking=-1)),
    ]
    ordered = sorted(views)
    assert [v.service_id for v in ordered] == [9, 3, 5, None, 1]


def test_order_is_reproducible_across_builds():
    bindings = [make_binding(i, ranking=i % 3, interfaces=[f"I{i}"]) for i in range(20)]
    expected = [v.service_id for v in sorted(CapabilityBindingView(b) for b in bindings)]
    for seed in range(5):
        shuffled = list(bindings)
        random.Random(seed).shuffle(shuffled)
        assert [v.service_id for v in sorted(CapabilityBindingView(b) for b in shuffled)] == expected


def test_to_dict_redacts_sensitive_properties():
    v = CapabilityBindingView(make_binding(1, interfaces=["javax.sql.DataSource"], password="hunter2"))
    d = v.to_dict()
    assert d["properties"]["password"] == "***REDACTED***"
    assert "hunter2" not in str(d)
    # the wrapped binding is untouched
    assert v.properties["password"] == "hunter2"


def test_binding_required():
    with pytest.raises(InvariantViolation):
        CapabilityBindingView(None)  # type: ignore[arg-type]
