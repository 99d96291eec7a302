"""
Source readers: turn HTML markup, delimited/Markdown/recognised text and
Excel worksheets into rows of :class:`tablelens.ir.Cell` or ready grids.
"""

from tablelens.sources.html_reader import (
    HtmlTable,
    extract_best_table,
    extract_candidates,
    read_html_tables,
)
from tablelens.sources.text_reader import (
    looks_like_csv,
    looks_like_markdown,
    parse_csv,
    parse_markdown_table,
    parse_ocr_text,
    read_text_table,
)
from tablelens.sources.excel_reader import list_sheet_names, read_excel_grid, read_excel_rows

__all__ = [
    "HtmlTable",
    "read_html_tables",
    "extract_candidates",
    "extract_best_table",
    "looks_like_csv",
    "looks_like_markdown",
    "parse_csv",
    "parse_markdown_table",
    "parse_ocr_text",
    "read_text_table",
    "list_sheet_names",
    "read_excel_rows",
    "read_excel_grid",
]
