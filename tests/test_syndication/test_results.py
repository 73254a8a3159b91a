"""
Tests for result classification.

classify() is total and pure, so these tests lean on tables of inputs.
"""

import pytest

from shared.models import EngineError, Failure, PostRecord, Status, Success
from syndication.errors import SyndicationError
from syndication.results import (
    FAIL_MESSAGE,
    classify,
    coerce_result,
    intval,
    sanitize_text_field,
)


class TestSanitizeTextField:
    """Tests for guid sanitization."""

    @pytest.mark.parametrize("raw, expected", [
        ("hello", "hello"),
        ("abc<script>", "abc"),
        ("abc<script>alert(1)</script>def", "abcdef"),
        ("<b>bold</b> text", "bold text"),
        ("  padded\n\tvalue  ", "padded value"),
        ("line\r\nbreak", "line break"),
        ("http://example.com/?p=5", "http://example.com/?p=5"),
        ("a%20b", "ab"),
        ("1 < 2", "1 &lt; 2"),
        ("<style>p{}</style>kept", "kept"),
        ("unterminated <a href='x'", "unterminated"),
    ])
    def test_sanitize(self, raw, expected):
        assert sanitize_text_field(raw) == expected

    def test_none_is_empty(self):
        assert sanitize_text_field(None) == ""

    def test_non_string_is_stringified(self):
        assert sanitize_text_field(123) == "123"


class TestIntval:
    """Tests for the engine-compatible integer coercion."""

    @pytest.mark.parametrize("value, expected", [
        (7, 7),
        (-3, -3),
        (True, 1),
        (False, 0),
        (7.9, 7),
        (-7.9, -7),
        (float("nan"), 0),
        (float("inf"), 0),
        ("42", 42),
        ("  42", 42),
        ("12abc", 12),
        ("-5", -5),
        ("abc", 0),
        ("", 0),
        (b"8", 8),
        (None, 0),
        (object(), 0),
        ([1, 2], 0),
    ])
    def test_intval(self, value, expected):
        assert intval(value) == expected


class TestCoerceResult:
    """Tests for deciding the ResultValue variant at the boundary."""

    @pytest.mark.parametrize("raw", [False, None, 0, 0.0, "", "0", [], {}, ()])
    def test_falsy_values_are_failures(self, raw):
        assert coerce_result(raw) == Failure()

    def test_structured_error(self):
        value = coerce_result(SyndicationError("push-failed", "Remote site returned 500"))
        assert value == EngineError(message="Remote site returned 500")

    def test_structured_error_with_broken_accessor(self):
        class BrokenError(SyndicationError):
            def error_message(self):
                raise RuntimeError("boom")

        assert coerce_result(BrokenError("x")) == EngineError(message="")

    @pytest.mark.parametrize("raw", [9, "9", True, "abc", 1.5])
    def test_truthy_values_are_successes(self, raw):
        assert coerce_result(raw) == Success(id=raw)

    def test_push_id_with_info(self):
        value = coerce_result((1201, {"remote": True}))
        assert value == Success(id=1201, info={"remote": True})

    def test_push_tuple_with_falsy_id_is_failure(self):
        assert coerce_result((0, {"remote": True})) == Failure()

    def test_already_coerced_values_pass_through(self):
        success = Success(id=3)
        assert coerce_result(success) is success


class TestClassify:
    """Tests for classify()."""

    @pytest.fixture
    def post(self) -> PostRecord:
        return PostRecord(id=5, guid="abc<script>")

    @pytest.mark.parametrize("raw", [False, None, 0, "", "0", []])
    def test_falsy_result_fails_with_fail_message(self, post, raw):
        assert classify(raw, post) == Status(ok=False, message="fail")

    def test_engine_error_uses_its_message(self, post):
        error = SyndicationError("pull-failed", "Feed unreachable")

        status = classify(error, post)

        assert status.ok is False
        assert status.message == "Feed unreachable"

    def test_engine_error_without_message_falls_back_to_fail(self, post):
        status = classify(SyndicationError("pull-failed"), post)

        assert status == Status(ok=False, message=FAIL_MESSAGE)

    def test_success_message_sanitizes_guid(self, post):
        status = classify(7, post)

        assert status == Status(ok=True, message="abc,7")

    def test_success_with_non_numeric_id_coerces_to_zero(self, post):
        status = classify("remote-id", post)

        assert status == Status(ok=True, message="abc,0")

    def test_success_with_push_info(self, post):
        assert classify((1201, "info"), post).message == "abc,1201"

    def test_accepts_pre_coerced_values(self, post):
        assert classify(Failure(), post) == Status(ok=False, message="fail")
        assert classify(EngineError(message="nope"), post) == Status(ok=False, message="nope")
        assert classify(Success(id=9), post) == Status(ok=True, message="abc,9")

    def test_is_deterministic(self, post):
        assert classify(9, post) == classify(9, post)
        assert classify(9, post).model_dump_json() == classify(9, post).model_dump_json()

    def test_empty_guid(self):
        assert classify(4, PostRecord(id=1)).message == ",4"
