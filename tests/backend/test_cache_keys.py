"""Tests for cache key construction."""

from datetime import date

import pytest

from weathercard.errors import InvalidInput
from weathercard.services.cache_keys import make_key


class TestMakeKey:
    def test_format(self):
        assert make_key("78666", date(2024, 1, 7)) == "forecast:78666:2024-01-07:"

    def test_version_tag_is_last_field(self):
        assert make_key("78666", date(2024, 1, 7), "v2") == "forecast:78666:2024-01-07:v2"

    def test_missing_and_empty_tag_are_equivalent(self):
        issue = date(2024, 1, 7)
        assert make_key("78666", issue) == make_key("78666", issue, "") == make_key("78666", issue, None)

    def test_deterministic(self):
        keys = {make_key("10001", date(2024, 3, 4), "abc") for _ in range(100)}
        assert keys == {"forecast:10001:2024-03-04:abc"}

    def test_distinct_triples_give_distinct_keys(self):
        keys = {
            make_key("78666", date(2024, 1, 7)),
            make_key("78667", date(2024, 1, 7)),
            make_key("78666", date(2024, 1, 8)),
            make_key("78666", date(2024, 1, 7), "1"),
            make_key("78666-1", date(2024, 1, 7)),
        }
        assert len(keys) == 5

    def test_delimiter_in_version_tag_cannot_collide(self):
        a = make_key("78666", date(2024, 1, 7), "x:y")
        b = make_key("78666", date(2024, 1, 7), "x")
        assert a != b

    def test_delimiter_in_postal_code_is_rejected(self):
        with pytest.raises(InvalidInput):
            make_key("786:66", date(2024, 1, 7))
