"""
Tests for one-time code generation.
"""

import re
from unittest.mock import patch

from auth.codes import generate_code, generate_distinct_code

_URLSAFE = re.compile(r"^[A-Za-z0-9_-]+$")


class TestGenerateCode:
    def test_fixed_length_urlsafe(self):
        codes = [generate_code() for _ in range(50)]
        assert all(len(c) == 43 for c in codes)
        assert all(_URLSAFE.match(c) for c in codes)

    def test_codes_are_unique(self):
        assert len({generate_code() for _ in range(200)}) == 200

    def test_distinct_redraws_on_collision(self):
        with patch("auth.codes.generate_code", side_effect=["taken", "taken", "fresh"]):
            assert generate_distinct_code("taken", None) == "fresh"
