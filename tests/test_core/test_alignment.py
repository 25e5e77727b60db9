"""Tests for multi-tag alignment."""

import pytest
from datetime import datetime

from timebase_history.core.alignment import align
from timebase_history.core.models import IntegerValue, TextValue


def plain(row):
    """Row values as plain python values."""
    return [None if value is None else value.value for value in row.values]


def changes(rows, position):
    """Non-absent values of one column with consecutive repeats collapsed."""
    seen = []
    for row in rows:
        value = row.values[position]
        if value is None:
            continue
        if not seen or seen[-1] != value:
            seen.append(value)
    return seen


@pytest.fixture
def scenario_a(series_factory):
    """Tag1 changes at t=0 and t=2, Tag2 at t=1."""
    return [
        series_factory("Tag1", [(0, 1), (2, 3)]),
        series_factory("Tag2", [(1, "on")]),
    ]


class TestAlignLiteral:
    """Test alignment without the final row."""

    def test_scenario_a(self, scenario_a, ts):
        """Test the two-tag scenario, final state not emitted."""
        rows = align(scenario_a, start=ts(0))

        assert [row.timestamp for row in rows] == [ts(0), ts(1)]
        assert plain(rows[0]) == [1, None]
        assert plain(rows[1]) == [1, "on"]

    def test_default_start_is_first_sample(self, scenario_a, ts):
        """Test that rows start at the earliest sample without a start."""
        assert align(scenario_a) == align(scenario_a, start=ts(0))

    def test_start_before_first_sample(self, scenario_a, ts):
        """Test that an early start yields an all-absent first row."""
        rows = align(scenario_a, start=ts(-5))

        assert rows[0].timestamp == ts(-5)
        assert plain(rows[0]) == [None, None]
        assert [row.timestamp for row in rows[1:]] == [ts(0), ts(1)]

    def test_samples_before_start_fold_into_first_row(self, series_factory, ts):
        """Test that samples before start set the state of the start row."""
        series_list = [
            series_factory("a", [(-10, 1), (-5, 2), (5, 3)]),
            series_factory("b", [(-3, "x"), (8, "y")]),
        ]
        rows = align(series_list, start=ts(0))

        assert [row.timestamp for row in rows] == [ts(0), ts(5)]
        assert plain(rows[0]) == [2, "x"]
        assert plain(rows[1]) == [3, "x"]

    def test_empty_input(self, empty_series, ts):
        """Test alignment of nothing."""
        assert align([]) == []
        assert align([empty_series, empty_series], start=ts(0)) == []

    def test_single_sample_emits_nothing(self, series_factory):
        """Test that one timestamp never closes a row."""
        assert align([series_factory("a", [(0, 1)])]) == []

    def test_naive_start_rejected(self, scenario_a):
        """Test that start must carry a timezone."""
        with pytest.raises(ValueError):
            align(scenario_a, start=datetime(2025, 11, 1))


class TestAlignFinal:
    """Test alignment with the final row emitted."""

    def test_scenario_a(self, scenario_a, ts):
        """Test the two-tag scenario, final state emitted."""
        rows = align(scenario_a, start=ts(0), emit_final=True)

        assert [row.timestamp for row in rows] == [ts(0), ts(1), ts(2)]
        assert plain(rows[0]) == [1, None]
        assert plain(rows[1]) == [1, "on"]
        assert plain(rows[2]) == [3, "on"]

    def test_final_is_literal_plus_one(self, scenario_a, ts):
        """Test that the variants differ only by the last row."""
        literal = align(scenario_a, start=ts(0))
        final = align(scenario_a, start=ts(0), emit_final=True)
        assert final[:-1] == literal
        assert len(final) == len(literal) + 1

    def test_single_sample(self, series_factory, ts):
        """Test that a lone sample becomes one row."""
        rows = align([series_factory("a", [(0, 1)])], emit_final=True)
        assert len(rows) == 1
        assert rows[0].timestamp == ts(0)
        assert plain(rows[0]) == [1]

    def test_empty_input(self, empty_series):
        """Test that no samples means no final row either."""
        assert align([empty_series], emit_final=True) == []


class TestAlignOrdering:
    """Test ordering and forward-fill properties."""

    def test_tie_break_by_series_order(self, series_factory, ts):
        """Test equal timestamps across tags keep series order."""
        series_list = [
            series_factory("first", [(0, 1), (5, 2)]),
            series_factory("second", [(0, "a"), (5, "b")]),
        ]
        rows = align(series_list, emit_final=True)

        assert [row.timestamp for row in rows] == [ts(0), ts(5)]
        assert plain(rows[0]) == [1, "a"]
        assert plain(rows[1]) == [2, "b"]

    def test_arrival_order_does_not_matter(self, series_factory, ts):
        """Test that series built from shuffled samples align the same."""
        ordered = [series_factory("a", [(0, 1), (4, 2), (9, 3)]), series_factory("b", [(2, 10), (9, 20)])]
        shuffled = [series_factory("a", [(9, 3), (0, 1), (4, 2)]), series_factory("b", [(9, 20), (2, 10)])]
        assert align(ordered, emit_final=True) == align(shuffled, emit_final=True)

    def test_row_width_and_forward_fill(self, series_factory):
        """Test row width and that no change is dropped or reordered."""
        points = {
            "a": [(0, 1), (7, 2), (13, 3), (30, 4)],
            "b": [(3, "x"), (13, "y"), (21, "z")],
            "c": [(5, 1.5), (6, 2.5), (40, 3.5)],
        }
        series_list = [series_factory(name, pts) for name, pts in points.items()]
        rows = align(series_list, emit_final=True)

        assert all(len(row.values) == len(series_list) for row in rows)
        for position, series in enumerate(series_list):
            assert changes(rows, position) == [sample.value for sample in series.samples]

    def test_values_absent_until_first_sample(self, series_factory):
        """Test that a column is absent only before its first sample."""
        series_list = [series_factory("a", [(0, 1), (10, 2)]), series_factory("b", [(6, "late")])]
        rows = align(series_list, emit_final=True)

        first_seen = False
        for row in rows:
            if row.values[1] is not None:
                first_seen = True
            else:
                assert not first_seen

    def test_rows_ascending(self, series_factory):
        """Test that row timestamps strictly increase."""
        series_list = [series_factory("a", [(i * 3, i) for i in range(20)]),
                       series_factory("b", [(i * 5, i) for i in range(12)])]
        rows = align(series_list, emit_final=True)
        stamps = [row.timestamp for row in rows]
        assert stamps == sorted(set(stamps))

    def test_idempotent(self, scenario_a, ts):
        """Test that repeated alignment gives identical output."""
        for emit_final in (False, True):
            first = align(scenario_a, start=ts(0), emit_final=emit_final)
            second = align(scenario_a, start=ts(0), emit_final=emit_final)
            assert first == second

    def test_absent_sample_overwrites(self, series_factory):
        """Test that a sample without value clears the column."""
        series_list = [series_factory("a", [(0, 1), (5, None), (9, 3)])]
        rows = align(series_list, emit_final=True)
        assert [plain(row) for row in rows] == [[1], [None], [3]]

    def test_rows_hold_typed_values(self, scenario_a):
        """Test that rows carry typed values."""
        rows = align(scenario_a, emit_final=True)
        assert rows[-1].values == (IntegerValue(value=3), TextValue(value="on"))
