"""Tests for the filter/mutate engine."""

import pytest

from chop.errors import ConfigError
from chop.selector import NullSelector
from chop.todos import (
    TodoStatus,
    TodoStream,
    filter_stream,
    mark,
    mark_all,
    mark_by_id,
    mark_selected,
)


def _stream(text: str) -> TodoStream:
    return TodoStream.from_lines(text.splitlines(keepends=True))


class TestFilter:
    """Tests for filter_stream()."""

    def test_only_in_progress(self):
        stream = _stream("- [>] write report\n- [ ] call bank\n")
        result = filter_stream(stream, only=TodoStatus.IN_PROGRESS)
        assert result.render() == "- [>] write report\n"

    def test_only_keeps_passthrough(self, sample_text):
        result = filter_stream(_stream(sample_text), only=TodoStatus.DONE)
        assert result.render() == "# Groceries\n\n- [x] pay rent\nnotes\n"

    def test_exclude(self, sample_text):
        result = filter_stream(_stream(sample_text), exclude=TodoStatus.DONE)
        assert result.render() == (
            "# Groceries\n- [ ] buy milk\n\n- [>] write report\nnotes\n"
        )

    def test_no_filter_keeps_everything(self, sample_text):
        stream = _stream(sample_text)
        result = filter_stream(stream)
        assert result.render() == stream.render()
        assert len(result.todos) == 3

    def test_only_and_exclude_conflict(self, sample_text):
        with pytest.raises(ConfigError, match="mutually exclusive"):
            filter_stream(
                _stream(sample_text),
                only=TodoStatus.DONE,
                exclude=TodoStatus.PENDING,
            )

    def test_filter_does_not_renumber(self, sample_text):
        result = filter_stream(_stream(sample_text), exclude=TodoStatus.PENDING)
        assert [item.id for item in result.todos] == [2, 3]


class TestMarkById:
    """Tests for mark_by_id()."""

    def test_marks_single_item(self):
        stream = _stream("- [ ] buy milk\n# notes\n- [x] pay rent\n")
        marked = mark_by_id(stream, 1, TodoStatus.DONE)
        assert [item.id for item in marked] == [1]
        assert stream.render() == "- [x] buy milk\n# notes\n- [x] pay rent\n"

    def test_unknown_id_is_a_no_op(self, sample_text):
        stream = _stream(sample_text)
        before = stream.render()
        assert mark_by_id(stream, 42, TodoStatus.DONE) == []
        assert stream.render() == before

    def test_id_counts_todos_not_lines(self, sample_text):
        stream = _stream(sample_text)
        mark_by_id(stream, 3, TodoStatus.PENDING)
        assert "- [ ] write report\n" in stream.render()


class TestMarkAll:
    """Tests for mark_all()."""

    def test_marks_every_item(self, sample_text):
        stream = _stream(sample_text)
        marked = mark_all(stream, TodoStatus.DONE)
        assert len(marked) == 3
        assert all(item.status == TodoStatus.DONE for item in stream.todos)
        assert stream.render() == (
            "# Groceries\n- [x] buy milk\n\n- [x] pay rent\n- [x] write report\nnotes\n"
        )


class TestMarkSelected:
    """Tests for mark_selected() with a scripted selector."""

    def test_candidates_are_canonical_lines(self, sample_text, selector_factory):
        selector = selector_factory()
        mark_selected(_stream(sample_text), TodoStatus.DONE, selector)
        assert selector.candidates == [
            "- [ ] buy milk",
            "- [x] pay rent",
            "- [>] write report",
        ]

    def test_marks_selected_lines(self, sample_text, selector_factory):
        stream = _stream(sample_text)
        selector = selector_factory(["- [ ] buy milk", "- [>] write report"])
        marked = mark_selected(stream, TodoStatus.DONE, selector)
        assert [item.id for item in marked] == [1, 3]
        assert [item.status for item in stream.todos] == [TodoStatus.DONE] * 3

    def test_unmatched_selection_is_ignored(self, sample_text, selector_factory):
        stream = _stream(sample_text)
        before = stream.render()
        selector = selector_factory(["- [ ] not in the list", "buy milk"])
        assert mark_selected(stream, TodoStatus.DONE, selector) == []
        assert stream.render() == before

    def test_empty_selection(self, sample_text):
        stream = _stream(sample_text)
        before = stream.render()
        assert mark_selected(stream, TodoStatus.DONE, NullSelector()) == []
        assert stream.render() == before

    def test_duplicate_line_marks_first_match(self, selector_factory):
        stream = _stream("- [ ] dup\n- [ ] dup\n")
        mark_selected(stream, TodoStatus.DONE, selector_factory(["- [ ] dup"]))
        assert stream.render() == "- [x] dup\n- [ ] dup\n"

    def test_repeated_duplicate_lines_mark_each(self, selector_factory):
        stream = _stream("- [ ] dup\n- [ ] dup\n- [ ] dup\n")
        selector = selector_factory(["- [ ] dup", "- [ ] dup"])
        marked = mark_selected(stream, TodoStatus.IN_PROGRESS, selector)
        assert [item.id for item in marked] == [1, 2]
        assert stream.render() == "- [>] dup\n- [>] dup\n- [ ] dup\n"

    def test_matches_canonical_not_raw_form(self, selector_factory):
        stream = _stream("* [X] upper\n")
        selector = selector_factory(["- [x] upper"])
        mark_selected(stream, TodoStatus.PENDING, selector)
        assert stream.render() == "- [ ] upper\n"


class TestMark:
    """Tests for the mark() dispatcher."""

    def test_zero_id_means_all(self, sample_text):
        stream = _stream(sample_text)
        marked = mark(stream, TodoStatus.IN_PROGRESS)
        assert len(marked) == 3

    def test_by_id(self, sample_text):
        stream = _stream(sample_text)
        marked = mark(stream, TodoStatus.DONE, todo_id=1)
        assert [item.text for item in marked] == ["buy milk"]

    def test_with_selector(self, sample_text, selector_factory):
        stream = _stream(sample_text)
        marked = mark(
            stream,
            TodoStatus.PENDING,
            selector=selector_factory(["- [x] pay rent"]),
        )
        assert [item.id for item in marked] == [2]

    def test_selector_and_id_conflict(self, sample_text):
        with pytest.raises(ConfigError):
            mark(
                _stream(sample_text),
                TodoStatus.DONE,
                todo_id=1,
                selector=NullSelector(),
            )

    def test_negative_id(self, sample_text):
        with pytest.raises(ConfigError, match="invalid todo id"):
            mark(_stream(sample_text), TodoStatus.DONE, todo_id=-1)

    def test_passthrough_untouched(self, sample_text):
        stream = _stream(sample_text)
        before = [p.raw_line for p in stream.passthrough]
        mark(stream, TodoStatus.DONE)
        assert [p.raw_line for p in stream.passthrough] == before
