"""Tests for display helpers."""

import pytest

from entitystore.utils import humanize_size


class TestHumanizeSize:
    @pytest.mark.parametrize("size,expected", [
        (0, "0 B"),
        (11, "11 B"),
        (1023, "1023 B"),
        (1024, "1.0 KB"),
        (1536, "1.5 KB"),
        (5 * 1024 ** 2, "5.0 MB"),
        (2 * 1024 ** 5, "2.0 PB"),
    ])
    def test_units(self, size, expected):
        assert humanize_size(size) == expected

    def test_largest_unit_does_not_overflow(self):
        assert humanize_size(1024 ** 6) == "1024.0 PB"
