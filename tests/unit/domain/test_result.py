"""Tests for atomize/domain/shared/result.py"""

from atomize.domain.shared import Err, Ok, is_err, is_ok, map_result, unwrap_or


class TestResult:
    def test_predicates(self):
        assert is_ok(Ok(1))
        assert is_err(Err("nope"))
        assert not is_ok(Err("nope"))

    def test_map_result(self):
        assert map_result(Ok(2), lambda v: v * 100) == Ok(200)
        assert map_result(Err("bad"), lambda v: v * 100) == Err("bad")

    def test_unwrap_or(self):
        assert unwrap_or(Ok("value"), "default") == "value"
        assert unwrap_or(Err("bad"), "default") == "default"
