"""
End-to-end table processing: normalise, clean, classify, profile.
"""
from datetime import datetime

import pytest

from tablelens.ir import Aggregate, Cell, ColumnType, NumberFormat
from tablelens.pipeline import ProcessedTable, process_grid, process_table, process_tables
from tablelens.table.config import TableConfig


@pytest.fixture
def statement_table(chilean_grid, clean_settings):
    return process_grid(chilean_grid)


class TestProcessGrid:

    def test_column_types_and_formats(self, statement_table):
        assert statement_table.column_types == [
            ColumnType.DATE, ColumnType.CATEGORICAL, ColumnType.CATEGORICAL,
            ColumnType.MONEY, ColumnType.MONEY, ColumnType.MONEY,
        ]
        chilean = NumberFormat(thousand=".", decimal=",")
        assert statement_table.formats == {3: chilean, 4: chilean, 5: chilean}
        assert statement_table.format_for(0) == NumberFormat.default()

    def test_default_aggregates_are_count(self, statement_table):
        assert {c.aggregate for c in statement_table.columns} == {Aggregate.COUNT}
        assert statement_table.stat(3) == 8
        assert statement_table.stat(0) == 10

    def test_stat_on_demand(self, statement_table):
        assert statement_table.stat(3, "sum") == 14124328
        assert statement_table.stat(4, Aggregate.SUM) == 225000
        assert statement_table.stat(0, "earliest") == datetime(2025, 9, 8)

    def test_aggregate_not_defined_for_column_returns_zero(self, statement_table):
        assert statement_table.stat(1, "sum") == 0
        assert statement_table.stat(0, "std") == 0

    def test_header_and_rows(self, statement_table, chilean_grid):
        assert statement_table.header == chilean_grid[0]
        assert len(statement_table.data_rows) == 10
        assert statement_table.columns[5].header == "Saldo (CLP)"

    def test_column_out_of_range(self, statement_table):
        with pytest.raises(IndexError):
            statement_table.stat(42)

    def test_single_row_table_is_categorical(self, clean_settings):
        table = process_grid([["a", "b"]])
        assert table.column_types == [ColumnType.CATEGORICAL, ColumnType.CATEGORICAL]

    def test_empty_grid(self, clean_settings):
        table = process_grid([])
        assert table.grid == []
        assert table.columns == []

    def test_summary(self, statement_table):
        summary = statement_table.summary()
        assert summary[0]["type"] == "date"
        assert summary[3]["format"] == {"thousand": ".", "decimal": ","}
        assert summary[3]["aggregate"] == "count"
        assert summary[3]["value"] == 8


class TestOverride:

    def test_override_to_numeric_switches_aggregate_to_sum(self, statement_table):
        changed = statement_table.override_type(3, ColumnType.NUMERIC)
        profile = changed.columns[3]
        assert profile.column_type == ColumnType.NUMERIC
        assert profile.overridden is True
        assert profile.aggregate == Aggregate.SUM
        assert profile.number_format == NumberFormat(thousand=".", decimal=",")
        assert changed.stat(3) == 14124328

    def test_override_returns_new_table(self, statement_table):
        changed = statement_table.override_type(1, "date")
        assert statement_table.columns[1].column_type == ColumnType.CATEGORICAL
        assert changed.columns[1].column_type == ColumnType.DATE
        assert changed.columns[1].aggregate == Aggregate.COUNT
        assert changed.columns[1].number_format is None

    def test_override_to_categorical(self, statement_table):
        changed = statement_table.override_type(5, ColumnType.CATEGORICAL)
        assert changed.columns[5].aggregate == Aggregate.COUNT
        assert changed.stat(5, "unique") == 10


class TestReheaderAndIdentity:

    def test_reheader_reclassifies(self, clean_settings):
        grid = [
            ["Report", ""],
            ["Rank", "Rate"],
            ["1", "5.94%"],
            ["2", "5.91%"],
        ]
        table = process_grid(grid)
        assert table.column_types == [ColumnType.NUMERIC, ColumnType.CATEGORICAL]
        moved = table.reheader(1)
        assert moved.header == ["Rank", "Rate"]
        assert moved.grid[1] == ["Report", ""]
        assert moved.column_types == [ColumnType.NUMERIC, ColumnType.RATE]

    def test_fingerprint(self, clean_settings):
        table = process_grid([["A b", "C"], ["1", "2"], ["3", "4"]])
        assert table.fingerprint() == "Ab|C_3x2_1|2|3|4"

    def test_fingerprint_is_stable(self, chilean_grid, clean_settings):
        assert process_grid(chilean_grid).fingerprint() == process_grid(chilean_grid).fingerprint()


class TestProcessTable:

    def test_span_rows(self, clean_settings):
        rows = [
            [Cell(content="Rank"), Cell(content="Country"), Cell(content="Spare")],
            [Cell(content="11", row_span=2), Cell(content="Chad"), Cell(content="")],
            [Cell(content="Mali"), Cell(content="")],
        ]
        table = process_table(rows)
        assert table.grid == [["Rank", "Country", "Spare"], ["11", "Chad", ""], ["11", "Mali", ""]]
        assert table.column_types[0] == ColumnType.NUMERIC

    def test_cleanup_can_be_disabled(self, clean_settings):
        rows = [["a", ""], ["1", ""]]
        assert process_table(rows).grid == [["a"], ["1"]]
        assert process_table(rows, clean=False).grid == [["a", ""], ["1", ""]]

    def test_batch(self, fertility_2023_grid, fertility_2025_grid, clean_settings):
        tables = process_tables([fertility_2023_grid, fertility_2025_grid])
        assert len(tables) == 2
        assert all(isinstance(t, ProcessedTable) for t in tables)
        assert tables[1].stat(2, "max") == pytest.approx(5.94)

    def test_explicit_config(self, fertility_2023_grid):
        table = process_grid(fertility_2023_grid, cfg=TableConfig(classify_sample_limit=1))
        assert table.column_types == [ColumnType.NUMERIC, ColumnType.CATEGORICAL, ColumnType.NUMERIC]

    def test_to_dataframe(self, statement_table):
        df = statement_table.to_dataframe()
        assert df.shape == (10, 6)
        assert df["Saldo (CLP)"].max() == 14238523
