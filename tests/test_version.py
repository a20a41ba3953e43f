from __future__ import annotations

import pytest

from modulescope.core.manifest.version import Version, VersionRange


def test_version_parse_pads_missing_components():
    assert Version.parse("1") == Version(1, 0, 0)
    assert Version.parse("1.2") == Version(1, 2, 0)
    assert Version.parse(" 1.2.3 ") == Version(1, 2, 3)
    assert Version.parse("") == Version(0, 0, 0)
    assert Version.parse(None) == Version(0, 0, 0)


def test_version_display_form():
    assert str(Version.parse("1.2")) == "1.2.0"
    assert str(Version.parse("1.2.3.RELEASE")) == "1.2.3.RELEASE"


def test_version_order_is_numeric_then_qualifier():
    assert Version.parse("2.0.0") < Version.parse("10.0.0")
    assert Version.parse("1.0.0") < Version.parse("1.0.0.a")
    assert Version.parse("1.0.0.a") < Version.parse("1.0.0.b")


@pytest.mark.parametrize("text", ["a.b", "1..2", "1.2.3.", "1.-2", "1.2.3.bad qualifier"])
def test_version_parse_rejects_malformed(text):
    with pytest.raises(ValueError):
        Version.parse(text)


def test_range_interval_notation():
    rng = VersionRange.parse("[1.0,2.0)")
    assert rng.floor == Version(1, 0, 0)
    assert rng.ceiling == Version(2, 0, 0)
    assert rng.floor_inclusive is True
    assert rng.ceiling_inclusive is False
    assert rng.includes(Version.parse("1.0"))
    assert rng.includes(Version.parse("1.9.9"))
    assert not rng.includes(Version.parse("2.0"))
    assert str(rng) == "[1.0.0,2.0.0)"


def test_range_bare_version_is_at_least():
    rng = VersionRange.parse("1.5")
    assert rng.floor == Version(1, 5, 0)
    assert rng.ceiling is None
    assert rng.includes(Version.parse("99"))
    assert not rng.includes(Version.parse("1.4"))


def test_range_exclusive_floor():
    rng = VersionRange.parse("(1.0,2.0]")
    assert not rng.includes(Version.parse("1.0"))
    assert rng.includes(Version.parse("2.0"))


@pytest.mark.parametrize("text", ["[1.0,2.0", "[1.0;2.0)", "[2.0,1.0)", "[1.0,2.0,3.0)"])
def test_range_rejects_malformed(text):
    with pytest.raises(ValueError):
        VersionRange.parse(text)


def test_range_empty_interval_is_accepted_and_matches_nothing():
    rng = VersionRange.parse("[1.0,1.0)")
    assert str(rng) == "[1.0.0,1.0.0)"
    assert not rng.includes(Version.parse("1.0"))
