"""Tests for the variable store and its missing-variable diagnostic."""

from kizhi.constants import MISSING_VARIABLE_MESSAGE
from kizhi.memory import VariableStore
from kizhi.sink import BufferSink


def _make_store(**kwargs):
    sink = BufferSink()
    return VariableStore(sink, **kwargs), sink


class TestSet:
    def test_creates_variable(self):
        store, sink = _make_store()

        store.set(1, "a", 5)

        assert store.get("a").value == 5
        assert store.get("a").last_changed_line == 1
        assert sink.lines == []

    def test_overwrites_value_and_line(self):
        store, _ = _make_store()

        store.set(1, "a", 5)
        store.set(4, "a", -2)

        assert store.get("a").value == -2
        assert store.get("a").last_changed_line == 4


class TestSub:
    def test_subtracts_and_records_line(self):
        store, _ = _make_store()
        store.set(0, "a", 5)

        store.sub(2, "a", 3)

        assert store.get("a").value == 2
        assert store.get("a").last_changed_line == 2

    def test_missing_variable_reports_diagnostic(self):
        store, sink = _make_store()

        store.sub(0, "a", 3)

        assert sink.lines == [MISSING_VARIABLE_MESSAGE]
        assert "a" not in store


class TestPrintValue:
    def test_prints_current_value(self):
        store, sink = _make_store()
        store.set(0, "a", 12)

        store.print_value("a")

        assert sink.lines == ["12"]

    def test_missing_variable_reports_diagnostic(self):
        store, sink = _make_store()

        store.print_value("b")

        assert sink.lines == [MISSING_VARIABLE_MESSAGE]


class TestRemove:
    def test_removes_variable(self):
        store, sink = _make_store()
        store.set(0, "a", 1)

        store.remove("a")

        assert "a" not in store
        assert len(store) == 0
        assert sink.lines == []

    def test_missing_variable_reports_diagnostic(self):
        store, sink = _make_store()

        store.remove("a")

        assert sink.lines == [MISSING_VARIABLE_MESSAGE]

    def test_custom_diagnostic_message(self):
        store, sink = _make_store(missing_message="no such variable")

        store.remove("a")

        assert sink.lines == ["no such variable"]


class TestDump:
    def test_lines_in_insertion_order(self):
        store, sink = _make_store()
        store.set(0, "b", 2)
        store.set(1, "a", 1)
        store.set(2, "b", 7)

        store.dump()

        assert sink.lines == ["b 7 2", "a 1 1"]

    def test_removed_then_reset_variable_moves_to_end(self):
        store, sink = _make_store()
        store.set(0, "a", 1)
        store.set(1, "b", 2)
        store.remove("a")
        store.set(3, "a", 3)

        store.dump()

        assert sink.lines == ["b 2 1", "a 3 3"]

    def test_empty_store_emits_nothing(self):
        store, sink = _make_store()
        store.dump()
        assert sink.lines == []
