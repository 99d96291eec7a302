import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from tablelens.config import EXPORT_FORMATS, get_settings
from tablelens.errors import TableLensError, UnsupportedFormatError
from tablelens.export import export
from tablelens.ir import Grid
from tablelens.logger import set_level
from tablelens.pipeline import ProcessedTable, process_grid
from tablelens.sources import extract_best_table, read_excel_grid, read_text_table

SUPPORTED_SUFFIXES = {".html", ".htm", ".csv", ".tsv", ".md", ".txt", ".xlsx", ".xlsm"}

TEXT_KINDS = {".csv": "csv", ".tsv": "tsv", ".md": "markdown", ".txt": "auto"}


def collect_source_paths(inputs: List[str]) -> List[str]:
    collected: List[str] = []
    for raw in inputs:
        path = Path(raw).expanduser()
        if path.is_dir():
            for child in sorted(path.rglob("*")):
                if child.is_file() and child.suffix.lower() in SUPPORTED_SUFFIXES:
                    collected.append(str(child))
        elif path.is_file():
            collected.append(str(path))
        else:
            print(f"[warn] input not found: {raw}", file=sys.stderr)
    return collected


def load_grid(file_path: str, sheet: Optional[str] = None) -> Grid:
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix in (".html", ".htm"):
        return extract_best_table(path.read_text(encoding="utf-8", errors="replace"))
    if suffix in TEXT_KINDS:
        text = path.read_text(encoding="utf-8-sig", errors="replace")
        return read_text_table(text, kind=TEXT_KINDS[suffix])
    if suffix in (".xlsx", ".xlsm"):
        sheet_name = int(sheet) if sheet is not None and sheet.isdigit() else sheet
        return read_excel_grid(str(path), sheet_name)
    raise UnsupportedFormatError(f"unsupported input type: {suffix or file_path}")


def describe(table: ProcessedTable, source: str) -> dict:
    return {
        "source": source,
        "rows": len(table.grid),
        "header": table.header,
        "fingerprint": table.fingerprint(),
        "columns": table.summary(),
    }


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Normalise tables from HTML, text or Excel files and report column types."
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="Input file paths or directories.",
    )
    parser.add_argument(
        "--export",
        nargs="?",
        const="",
        default=None,
        choices=("",) + EXPORT_FORMATS,
        metavar="FORMAT",
        help="Print the normalised table (csv, tsv, markdown or json) instead of the JSON summary; "
             "without a value uses TABLELENS_DEFAULT_EXPORT_FORMAT.",
    )
    parser.add_argument(
        "--header-row",
        type=int,
        default=0,
        help="Promote this zero-based row to the header before classifying.",
    )
    parser.add_argument(
        "--sheet",
        default=None,
        help="Worksheet name or zero-based index for Excel inputs.",
    )
    parser.add_argument(
        "--no-clean",
        action="store_true",
        help="Keep empty columns and rows.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log pipeline progress (logs share stdout with the output).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    set_level(logging.DEBUG if args.verbose else logging.WARNING)
    file_paths = collect_source_paths(args.inputs)
    if not file_paths:
        print("[error] no valid input files found.", file=sys.stderr)
        return 1

    settings = get_settings()
    summaries = []
    failed = 0
    for file_path in file_paths:
        try:
            grid = load_grid(file_path, args.sheet)
        except (TableLensError, OSError) as e:
            print(f"[error] {file_path}: {e}", file=sys.stderr)
            failed += 1
            continue
        if not grid:
            print(f"[warn] no table found in {file_path}", file=sys.stderr)
            continue

        table = process_grid(grid, clean=not args.no_clean)
        if args.header_row:
            table = table.reheader(args.header_row)

        if args.export is not None:
            print(export(table.grid, args.export or settings.DEFAULT_EXPORT_FORMAT))
        else:
            summaries.append(describe(table, file_path))

    if summaries:
        print(json.dumps(summaries if len(summaries) > 1 else summaries[0], ensure_ascii=False, indent=2))
    return 1 if failed and failed == len(file_paths) else 0


if __name__ == "__main__":
    raise SystemExit(main())
