"""
TableSelector: pick the table that actually holds data out of a set of
nested candidates (e.g. a layout table wrapping a statement table).

Selection works in two filters followed by a ranking:

1. drop presentation containers, unless that would leave nothing;
2. among the rest, keep tables that do not wrap other tables, if any;
3. sort by ``data_density * min(avg_filled_cells_per_row, cap)``.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

from tablelens.ir import Grid, TableCandidate
from tablelens.logger import get_logger
from tablelens.table.config import DEFAULT_CONFIG, TableConfig

logger = get_logger(__name__)


def _is_filled(value) -> bool:
    return value is not None and str(value).strip() != ""


def build_candidate(
    grid: Sequence[Sequence[str]],
    contains_nested_table: bool = False,
    presentation_marker: bool = False,
    source_id: Optional[str] = None,
    cfg: TableConfig = DEFAULT_CONFIG,
) -> TableCandidate:
    """Compute the selection metrics for one grid."""
    rows = [list(r) for r in grid]
    total_cells = sum(len(r) for r in rows)
    filled_per_row = [sum(1 for v in r if _is_filled(v)) for r in rows]
    filled = sum(filled_per_row)

    density = filled / total_cells if total_cells else 0.0
    avg_filled = filled / len(rows) if rows else 0.0
    width = len(rows[0]) if rows else 0

    is_presentation = (
        presentation_marker
        or density < cfg.presentation_max_density
        or (width > cfg.wide_table_min_columns and avg_filled < cfg.wide_table_max_filled_per_row)
    )
    return TableCandidate(
        grid=rows,
        data_density=density,
        contains_nested_table=contains_nested_table,
        is_presentation_container=is_presentation,
        avg_filled_cells_per_row=avg_filled,
        source_id=source_id,
    )


def rank_candidates(
    candidates: Sequence[TableCandidate],
    cfg: TableConfig = DEFAULT_CONFIG,
) -> List[TableCandidate]:
    """Apply both filters and return survivors best-first."""
    pool = list(candidates)
    if not pool:
        return []

    non_presentation = [c for c in pool if not c.is_presentation_container]
    if non_presentation:
        pool = non_presentation

    inner = [c for c in pool if not c.contains_nested_table]
    if inner:
        pool = inner

    ranked = sorted(pool, key=lambda c: c.quality_score(cfg.score_row_cap), reverse=True)
    logger.debug(
        "rank_candidates: %d in, %d ranked, best=%s",
        len(candidates), len(ranked), ranked[0].source_id if ranked else None,
    )
    return ranked


def select_best_table(
    candidates: Sequence[Union[Grid, TableCandidate]],
    cfg: TableConfig = DEFAULT_CONFIG,
) -> Grid:
    """
    Return the grid of the best candidate, or ``[]`` when there is none.

    Plain grids carry no nesting information, so for them only density and
    width decide. Grids with fewer than ``cfg.min_candidate_rows`` rows are
    ignored unless nothing else is available.
    """
    built: List[TableCandidate] = []
    for idx, cand in enumerate(candidates or []):
        if isinstance(cand, TableCandidate):
            built.append(cand)
        else:
            built.append(build_candidate(cand, source_id=f"grid-{idx}", cfg=cfg))

    with_data = [c for c in built if len(c.grid) >= cfg.min_candidate_rows]
    ranked = rank_candidates(with_data or built, cfg)
    if not ranked:
        return []
    return [list(r) for r in ranked[0].grid]
