"""
Number format inference and locale-aware parsing.
"""
import pytest

from tablelens.ir import NumberFormat
from tablelens.table.config import TableConfig
from tablelens.table.number_format import infer_format, parse_number, try_parse_number

CHILEAN = NumberFormat(thousand=".", decimal=",")
US = NumberFormat(thousand=",", decimal=".")


class TestInferFormat:

    def test_chilean_statement(self, chilean_rows):
        samples = [r[c] for r in chilean_rows for c in (3, 4, 5) if r[c]]
        assert infer_format(samples) == CHILEAN

    def test_each_chilean_column(self, chilean_rows):
        for col in (3, 4, 5):
            samples = [r[col] for r in chilean_rows if r[col]]
            assert infer_format(samples).as_tuple() == (".", ",")

    def test_decimal_comma_evidence(self):
        assert infer_format(["1.234,56", "12,50", "7,00"]) == CHILEAN

    def test_decimal_dot_evidence(self):
        assert infer_format(["1,234.56", "12.50", "$7.00"]) == US

    def test_comma_grouping_only(self):
        assert infer_format(["1,234", "56,789,000"]) == US

    def test_space_grouping_only(self):
        fmt = infer_format(["1 234 567", "12 000"])
        assert fmt.thousand == " "
        assert fmt.decimal == ","

    def test_space_grouping_with_decimal_comma(self):
        fmt = infer_format(["1 234,50", "12 000,00"])
        assert fmt.as_tuple() == (" ", ",")

    def test_no_evidence_defaults(self):
        assert infer_format(["1", "22", "333"]) == US

    def test_empty_samples_default(self):
        assert infer_format([]) == NumberFormat.default()
        assert infer_format(None) == NumberFormat.default()

    def test_separators_always_distinct(self):
        for samples in (["1.234,56"], ["1,234.56"], ["1 234"], ["5"], ["1.234", "1,234"]):
            fmt = infer_format(samples)
            assert fmt.thousand != fmt.decimal

    def test_sample_limit(self):
        samples = ["1,234"] * 3 + ["1.234,56"] * 10
        fmt = infer_format(samples, TableConfig(format_sample_limit=3))
        assert fmt == US


class TestParseNumber:

    def test_chilean_money(self):
        assert parse_number("$ 5.339.195", CHILEAN) == 5339195

    def test_us_money(self):
        assert parse_number("$1,234.56", US) == pytest.approx(1234.56)

    def test_decimal_comma(self):
        assert parse_number("1.234,5", CHILEAN) == pytest.approx(1234.5)

    def test_space_thousands(self):
        fmt = NumberFormat(thousand=" ", decimal=",")
        assert parse_number("1 234 567,25", fmt) == pytest.approx(1234567.25)

    def test_negative_values(self):
        assert parse_number("-$ 4.000", CHILEAN) == -4000
        assert parse_number("-12.5%", US) == pytest.approx(-12.5)

    def test_percent_and_currency_code(self):
        assert parse_number("5.94%", US) == pytest.approx(5.94)
        assert parse_number("1.200 CLP", CHILEAN) == 1200

    def test_real_prefix(self):
        assert parse_number("R$ 1.234,56", CHILEAN) == pytest.approx(1234.56)
        assert infer_format(["R$ 1.234,56", "R$ 99,90"]) == CHILEAN

    def test_default_format(self):
        assert parse_number("1,000.5") == pytest.approx(1000.5)

    def test_unparseable_is_zero(self):
        assert parse_number("N/A", US) == 0
        assert parse_number("", US) == 0
        assert parse_number(None, US) == 0

    def test_try_parse_reports_failure(self):
        assert try_parse_number("abc", US) is None
        assert try_parse_number("42", US) == 42


class TestNumberFormatModel:

    def test_equal_separators_rejected(self):
        with pytest.raises(ValueError):
            NumberFormat(thousand=".", decimal=".")

    def test_unknown_separator_rejected(self):
        with pytest.raises(ValueError):
            NumberFormat(thousand="'", decimal=".")
