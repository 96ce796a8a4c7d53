"""Tests for line classification."""

from todo.models import LineKind, Record, classify, format_open, is_closed, is_open, record_text


class TestClassify:
    def test_open(self):
        assert classify("[ ] buy milk") is LineKind.OPEN

    def test_closed(self):
        assert classify("[X] pay rent") is LineKind.CLOSED

    def test_lowercase_x_is_decorative(self):
        assert classify("[x] pay rent") is LineKind.DECORATIVE

    def test_short_lines_are_decorative(self):
        for line in ("", "[", "[ ", "X"):
            assert classify(line) is LineKind.DECORATIVE

    def test_marker_alone_is_a_record(self):
        assert classify("[ ]") is LineKind.OPEN
        assert classify("[X]") is LineKind.CLOSED

    def test_only_prefix_matters(self):
        assert classify("  [ ] indented") is LineKind.DECORATIVE
        assert classify("[ ][X] odd") is LineKind.OPEN

    def test_predicates(self):
        assert is_open("[ ] a") and not is_closed("[ ] a")
        assert is_closed("[X] a") and not is_open("[X] a")
        assert not is_open("# heading") and not is_closed("# heading")


class TestRecordText:
    def test_strips_marker_and_space(self):
        assert record_text("[ ] buy milk") == "buy milk"

    def test_no_space_after_marker(self):
        assert record_text("[X]done") == "done"

    def test_keeps_extra_spaces(self):
        assert record_text("[ ]   spaced") == "  spaced"

    def test_format_open_roundtrip(self):
        assert record_text(format_open("call mom")) == "call mom"

    def test_record_str(self):
        rec = Record(rank=2, kind=LineKind.OPEN, text="b", line="[ ] b")
        assert str(rec) == "  2. [ ] b"
