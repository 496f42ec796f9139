"""Unit tests for QueryHistory."""

from datamod.api.history import HistoryEntry, Operation, QueryHistory


def _entry(operation: Operation, table: str = "user", primary_key=None) -> HistoryEntry:
    return HistoryEntry(operation, table, f"{operation.value} {table}", primary_key=primary_key)


class TestQueryHistory:
    def test_records_in_order(self):
        """Test that entries are kept in execution order."""
        history = QueryHistory()
        history.record(_entry(Operation.INSERT, primary_key=1))
        history.record(_entry(Operation.UPDATE))

        assert [e.operation for e in history] == [Operation.INSERT, Operation.UPDATE]
        assert len(history) == 2
        assert history.last().operation == Operation.UPDATE

    def test_last_on_empty(self):
        """Test that last() is None for an empty history."""
        assert QueryHistory().last() is None

    def test_for_operation_accepts_strings(self):
        """Test filtering by operation given as a plain string."""
        history = QueryHistory()
        history.record(_entry(Operation.DELETE))
        history.record(_entry(Operation.INSERT))

        assert len(history.for_operation("delete")) == 1

    def test_inserted_filters_by_table(self):
        """Test that inserted() can be narrowed to one table."""
        history = QueryHistory()
        history.record(_entry(Operation.INSERT, "user", 1))
        history.record(_entry(Operation.INSERT, "status", 1))
        history.record(_entry(Operation.INSERT, "user", 2))

        assert [e.primary_key for e in history.inserted("user")] == [1, 2]
        assert len(history.inserted()) == 3

    def test_entries_is_a_copy(self):
        """Test that mutating entries does not touch the history."""
        history = QueryHistory()
        history.record(_entry(Operation.INSERT))
        history.entries.clear()

        assert len(history) == 1

    def test_replay_ignores_entries_added_while_replaying(self):
        """Test that replay only walks the entries present when it started."""
        history = QueryHistory()
        history.record(_entry(Operation.INSERT, primary_key=1))
        seen = []

        def executor(entry: HistoryEntry) -> None:
            seen.append(entry.primary_key)
            history.record(_entry(Operation.INSERT, primary_key=99))

        assert history.replay(executor) == 1
        assert seen == [1]
        assert len(history) == 2

    def test_clear(self):
        """Test that clear drops every entry."""
        history = QueryHistory()
        history.record(_entry(Operation.TRUNCATE))
        history.clear()

        assert len(history) == 0
