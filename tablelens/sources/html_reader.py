"""
HtmlReader: extract every ``<table>`` from an HTML document as rows of
span-carrying cells, and build selection candidates for nested layouts.

Only a table's *own* rows are read; rows belonging to a descendant table
are left to that table. A cell's text still includes the text of any
table nested inside it, which is what makes wrapper tables score poorly.
"""

from __future__ import annotations

import re
from typing import List

from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel

from tablelens.ir import Cell, Grid, TableCandidate
from tablelens.logger import get_logger
from tablelens.table.config import DEFAULT_CONFIG, TableConfig
from tablelens.table.grid_normalizer import normalize_grid
from tablelens.table.table_selector import build_candidate, rank_candidates

logger = get_logger(__name__)

PRESENTATION_ROLES = {"presentation", "none"}
PRESENTATION_NAMES = {"groupcontainer"}


class HtmlTable(BaseModel):
    """One ``<table>`` element as read from the document."""
    source_id: str
    rows: List[List[Cell]]
    contains_nested_table: bool = False
    presentation_marker: bool = False


def _cell_text(cell: Tag) -> str:
    for br in cell.find_all("br"):
        br.replace_with(" ")
    txt = cell.get_text(separator=" ").strip()
    return re.sub(r"\s+", " ", txt)


def _own_rows(table: Tag) -> List[Tag]:
    return [tr for tr in table.find_all("tr") if tr.find_parent("table") is table]


def _has_presentation_marker(table: Tag) -> bool:
    role = str(table.get("role") or "").strip().lower()
    name = str(table.get("name") or "").strip().lower()
    return role in PRESENTATION_ROLES or name in PRESENTATION_NAMES


def read_html_tables(html: str) -> List[HtmlTable]:
    """Parse *html* and return one :class:`HtmlTable` per ``<table>``, document order."""
    soup = BeautifulSoup(html or "", "html.parser")
    tables: List[HtmlTable] = []
    for idx, table in enumerate(soup.find_all("table")):
        rows: List[List[Cell]] = []
        for tr in _own_rows(table):
            cells = [
                Cell(
                    content=_cell_text(td),
                    row_span=td.get("rowspan", 1),
                    col_span=td.get("colspan", 1),
                )
                for td in tr.find_all(["td", "th"], recursive=False)
            ]
            if cells:
                rows.append(cells)
        source_id = str(table.get("id") or table.get("name") or f"table-{idx}")
        tables.append(HtmlTable(
            source_id=source_id,
            rows=rows,
            contains_nested_table=table.find("table") is not None,
            presentation_marker=_has_presentation_marker(table),
        ))
    logger.debug("read_html_tables: found %d tables", len(tables))
    return tables


def extract_candidates(html: str, cfg: TableConfig = DEFAULT_CONFIG) -> List[TableCandidate]:
    """Normalise every table and keep those with at least a header and one data row."""
    candidates: List[TableCandidate] = []
    for table in read_html_tables(html):
        grid = normalize_grid(table.rows)
        if len(grid) < cfg.min_candidate_rows:
            continue
        candidates.append(build_candidate(
            grid,
            contains_nested_table=table.contains_nested_table,
            presentation_marker=table.presentation_marker,
            source_id=table.source_id,
            cfg=cfg,
        ))
    return candidates


def extract_best_table(html: str, cfg: TableConfig = DEFAULT_CONFIG) -> Grid:
    """Return the grid of the best data table in *html*, or ``[]``."""
    ranked = rank_candidates(extract_candidates(html, cfg), cfg)
    if not ranked:
        logger.info("No data table found in HTML input")
        return []
    best = ranked[0]
    logger.info(
        "Selected table %s (%d rows, density %.2f) out of %d candidates",
        best.source_id, len(best.grid), best.data_density, len(ranked),
    )
    return [list(r) for r in best.grid]
