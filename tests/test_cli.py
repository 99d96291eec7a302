"""
Command-line entry point tests.
"""
import json

from app.cli import collect_source_paths, main

CSV_TEXT = "Fecha,Cargos\n15/09/2025,$ 90.000\n08/09/2025,$ 5.000.000\n"


class TestCli:

    def test_json_summary(self, tmp_path, capsys, clean_settings):
        source = tmp_path / "movimientos.csv"
        source.write_text(CSV_TEXT, encoding="utf-8")
        assert main([str(source)]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["header"] == ["Fecha", "Cargos"]
        assert [c["type"] for c in out["columns"]] == ["date", "money"]
        assert out["columns"][1]["format"] == {"thousand": ".", "decimal": ","}

    def test_export_markdown(self, tmp_path, capsys, clean_settings):
        source = tmp_path / "movimientos.csv"
        source.write_text(CSV_TEXT, encoding="utf-8")
        assert main(["--export", "markdown", str(source)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("| Fecha | Cargos |\n| --- | --- |")

    def test_header_row(self, tmp_path, capsys, clean_settings):
        source = tmp_path / "report.md"
        source.write_text("| Report | |\n| --- | --- |\n| Rank | Rate |\n| 1 | 5% |\n| 2 | 6% |\n", encoding="utf-8")
        assert main(["--header-row", "1", str(source)]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["header"] == ["Rank", "Rate"]
        assert out["columns"][1]["type"] == "rate"

    def test_html_input(self, tmp_path, capsys, nested_statement_html, clean_settings):
        source = tmp_path / "page.html"
        source.write_text(nested_statement_html, encoding="utf-8")
        assert main(["--export", "csv", str(source)]) == 0
        assert capsys.readouterr().out.startswith("Fecha,Descripción,Cargos,Saldo")

    def test_missing_input(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.csv")]) == 1

    def test_unsupported_file(self, tmp_path, capsys, clean_settings):
        source = tmp_path / "data.pdf"
        source.write_bytes(b"%PDF")
        assert main([str(source)]) == 1
        assert "unsupported input type" in capsys.readouterr().err

    def test_collect_directory(self, tmp_path):
        (tmp_path / "a.csv").write_text("a,b\n1,2\n", encoding="utf-8")
        (tmp_path / "notes.pdf").write_bytes(b"")
        assert collect_source_paths([str(tmp_path)]) == [str(tmp_path / "a.csv")]
