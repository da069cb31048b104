"""Tests for version tag ordering.

Version tags are compared section by section, numerically where a section
starts with a number, with missing trailing sections treated as zero.
"""

from __future__ import annotations

import pytest

from modresolve.core.versions import Version, compare_versions


class TestNumericSections:
    """Sections compare as numbers, never as strings."""

    def test_double_digit_minor_sorts_after_single_digit(self) -> None:
        """1.10 is newer than 1.9."""
        assert Version("1.10") > Version("1.9")

    def test_major_dominates(self) -> None:
        assert Version("2.0") > Version("1.99.99")

    def test_longer_version_with_nonzero_tail_is_greater(self) -> None:
        assert Version("1.0.1") > Version("1.0")

    def test_sorting_by_version(self) -> None:
        tags = ["1.10", "1.2", "1.9", "0.9"]
        assert sorted(tags, key=Version) == ["0.9", "1.2", "1.9", "1.10"]


class TestTrailingZeros:
    """Missing trailing sections compare as zero."""

    def test_equal_ignoring_trailing_zeros(self) -> None:
        assert Version("1.0") == Version("1.0.0")
        assert Version("2") == Version("2.0.0.0")

    def test_equal_versions_hash_equal(self) -> None:
        """Versions equal under ordering must collapse in sets."""
        assert hash(Version("1.0")) == hash(Version("1.0.0"))
        assert len({Version("1"), Version("1.0"), Version("1.0.0")}) == 1


class TestSuffixes:
    """Pre-release style suffixes rank before the bare number."""

    def test_suffix_is_older_than_release(self) -> None:
        assert Version("1.0-beta") < Version("1.0")

    def test_suffix_on_padded_section(self) -> None:
        """1.0.0-beta is still older than 1.0."""
        assert Version("1.0.0-beta") < Version("1.0")

    def test_suffixes_compare_lexically(self) -> None:
        assert Version("1.0-alpha") < Version("1.0-beta")

    def test_suffix_does_not_beat_higher_number(self) -> None:
        assert Version("1.1-beta") > Version("1.0")

    def test_non_numeric_section_ranks_first(self) -> None:
        assert Version("snapshot") < Version("0")


class TestCompareVersions:
    """Tests for the ``compare_versions`` helper."""

    def test_returns_minus_one_zero_one(self) -> None:
        assert compare_versions("1.0", "2.0") == -1
        assert compare_versions("1.0", "1.0.0") == 0
        assert compare_versions("1.7.10", "1.7.2") == 1


class TestVersionObject:
    """Tests for construction and comparisons with foreign types."""

    def test_raw_is_preserved(self) -> None:
        v = Version(" 1.7.10 ")
        assert v.raw == "1.7.10"
        assert str(v) == "1.7.10"
        assert repr(v) == "Version('1.7.10')"

    def test_none_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            Version(None)  # type: ignore[arg-type]

    def test_not_equal_to_plain_string(self) -> None:
        assert Version("1.0") != "1.0"

    def test_ordering_against_string_raises(self) -> None:
        with pytest.raises(TypeError):
            Version("1.0") < "2.0"  # type: ignore[operator]
