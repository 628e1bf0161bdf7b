import pytest

from riddlpy.text import LineIndex, SourcePosition, SourceRange


def test_line_index_handles_all_line_endings() -> None:
    index = LineIndex("a\r\nbb\rccc\n")

    assert index.line_count == 4
    assert [index.line_text(line) for line in range(index.line_count)] == ["a", "bb", "ccc", ""]
    assert index.line_length(2) == 3
    assert index.end_position() == SourcePosition(3, 0)


def test_empty_text_has_one_empty_line() -> None:
    index = LineIndex("")

    assert index.line_count == 1
    assert index.line_text(0) == ""
    assert not index.has_line(1)


def test_line_outside_document_raises() -> None:
    with pytest.raises(ValueError):
        LineIndex("x").line_text(3)


def test_range_invariants() -> None:
    with pytest.raises(ValueError):
        SourceRange(1, 0, 0, 5)
    with pytest.raises(ValueError):
        SourcePosition(-1, 0)

    source_range = SourceRange.on_line(2, 3, 6)
    assert source_range.contains(SourcePosition(2, 3))
    assert not source_range.contains(SourcePosition(2, 6))
    assert SourceRange.empty(SourcePosition(4, 1)).is_empty()
    assert source_range.is_single_line()
