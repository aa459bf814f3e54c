# excel_utils.py
"""
Excel report population on top of openpyxl.

Everything written into the template is first described as a flat list of
`CellValue` entries (sheet, address, value, optional style) and then applied
generically, so a template layout change only touches the mapping functions.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import Any, Iterable, List

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import column_index_from_string

from .constants import (
    DATA_FILL_COLOR,
    DATE_FMT,
    SHEET_PROJECT_INFO,
    SHEET_SUBSTRUCTURES,
    SHEET_TOTAL_COST,
    SUBSTRUCTURE_ROW_STEP,
    SUBSTRUCTURE_START_ROW,
)
from .data_source import CostSummary, ProjectInfo, ReportDataSource, SubstructureRow
from .exceptions import ReportError

###############################################################################
# Substructure block layout: name in B, figures every other column D → R      #
###############################################################################
_BLOCK_FIRST_COL = "B"
_BLOCK_LAST_COL = "R"
_NAME_COL = "B"
_FIGURE_COLS = [
    ("quantity", "D"),
    ("unit", "F"),
    ("material", "H"),
    ("labor", "J"),
    ("machine", "L"),
    ("subcontract", "N"),
    ("price", "P"),
]
_TOTAL_COL = "R"

# TotalKostnad rows per cost figure; J holds the total, L the per-m² value
_COST_ROWS = [
    ("quantity", 11),
    ("unit", 13),
    ("material", 15),
    ("labor", 17),
    ("machine", 19),
    ("subcontract", 21),
    ("price", 23),
    ("total", 31),
]

_THIN = Side(style="thin")
_DOUBLE = Side(style="double")
_DOTTED = Side(style="dotted")
_DATA_FILL = PatternFill(
    fill_type="solid", start_color=DATA_FILL_COLOR, end_color=DATA_FILL_COLOR
)


@dataclass(frozen=True)
class CellValue:
    sheet: str
    address: str
    value: Any
    style: str | None = None  # "name" | "data" | "total"


# ───────────────────────────── CELL MAPPINGS ──────────────────────────────
def project_cells(
    project: ProjectInfo, costs: CostSummary, today: date
) -> List[CellValue]:
    """Fixed-address cells on the ProjektInformation and TotalKostnad sheets."""
    stamp = today.strftime(DATE_FMT)
    cells = [
        CellValue(SHEET_PROJECT_INFO, "B5", project.name),
        CellValue(SHEET_PROJECT_INFO, "B9", project.code),
        CellValue(SHEET_PROJECT_INFO, "E12", project.gross_area),
        CellValue(SHEET_PROJECT_INFO, "E14", project.floor_count),
        CellValue(SHEET_PROJECT_INFO, "E16", project.building_area),
        CellValue(SHEET_TOTAL_COST, "D5", project.name),
        CellValue(SHEET_TOTAL_COST, "L4", project.code),
        CellValue(SHEET_TOTAL_COST, "L5", stamp),
        CellValue(SHEET_TOTAL_COST, "L6", project.gross_area),
        CellValue(SHEET_SUBSTRUCTURES, "D5", project.name),
        CellValue(SHEET_SUBSTRUCTURES, "O5", stamp),
    ]
    per_m2 = costs.per_area(project.gross_area)
    for attr, row in _COST_ROWS:
        cells.append(CellValue(SHEET_TOTAL_COST, f"J{row}", getattr(costs, attr)))
        cells.append(CellValue(SHEET_TOTAL_COST, f"L{row}", getattr(per_m2, attr)))
    return cells


def substructure_rows(count: int) -> List[int]:
    """Sheet rows used by the first *count* substructures (11, 14, 17, …)."""
    return [SUBSTRUCTURE_START_ROW + i * SUBSTRUCTURE_ROW_STEP for i in range(count)]


def substructure_cells(rows: Iterable[SubstructureRow]) -> List[CellValue]:
    rows = list(rows)
    cells: List[CellValue] = []
    for sub, row in zip(rows, substructure_rows(len(rows))):
        cells.append(CellValue(SHEET_SUBSTRUCTURES, f"{_NAME_COL}{row}", sub.name, "name"))
        for attr, col in _FIGURE_COLS:
            cells.append(
                CellValue(SHEET_SUBSTRUCTURES, f"{col}{row}", getattr(sub, attr), "data")
            )
        cells.append(CellValue(SHEET_SUBSTRUCTURES, f"{_TOTAL_COL}{row}", sub.total, "total"))
    return cells


# ───────────────────────────── STYLING ────────────────────────────────────
def _style_name(cell) -> None:
    cell.font = Font(bold=True, size=12)
    cell.alignment = Alignment(horizontal="left")


def _style_data(cell) -> None:
    cell.fill = _DATA_FILL
    cell.border = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)


def _style_total(cell) -> None:
    cell.fill = _DATA_FILL
    cell.border = Border(left=_DOUBLE, right=_DOUBLE, top=_DOUBLE, bottom=_DOUBLE)


_STYLES = {
    "name": _style_name,
    "data": _style_data,
    "total": _style_total,
}


def style_substructure_block(ws, row: int) -> None:
    """Bold/centred header row plus a dotted rule along the row beneath it."""
    first = column_index_from_string(_BLOCK_FIRST_COL)
    last = column_index_from_string(_BLOCK_LAST_COL)
    for col in range(first, last + 1):
        cell = ws.cell(row=row, column=col)
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center")

        below = ws.cell(row=row + 1, column=col)
        b = below.border
        below.border = Border(left=b.left, right=b.right, top=b.top, bottom=_DOTTED)


def autofit_column(ws, col: str) -> None:
    """Widen *col* to its longest text; openpyxl has no native autofit."""
    lengths = [
        len(str(c.value))
        for c in ws[col]
        if c.value is not None
    ]
    if lengths:
        ws.column_dimensions[col].width = max(lengths) + 2


def apply_cells(wb: Workbook, cells: Iterable[CellValue]) -> None:
    """Write each mapped value (and style, if any) into *wb*."""
    for cv in cells:
        cell = wb[cv.sheet][cv.address]
        cell.value = cv.value
        if cv.style:
            _STYLES[cv.style](cell)


# ───────────────────────────── WORKBOOK I/O ───────────────────────────────
def load_template(path: str | Path) -> bytes:
    path = Path(path)
    if not path.exists():
        raise ReportError(f"Template not found: {path}")
    return path.read_bytes()


def populate_workbook(
    wb: Workbook,
    source: ReportDataSource,
    project_id: str | None,
    today: date,
    log: logging.Logger,
) -> None:
    project = source.project_info(project_id)
    costs = source.cost_summary(project_id)
    subs = source.substructures(project_id)

    log.info("Writing project and cost cells for %s", project.name)
    apply_cells(wb, project_cells(project, costs, today))

    ws = wb[SHEET_SUBSTRUCTURES]
    for row in substructure_rows(len(subs)):
        style_substructure_block(ws, row)
    apply_cells(wb, substructure_cells(subs))
    autofit_column(ws, _NAME_COL)
    log.info("Wrote %d substructure rows", len(subs))


def build_excel_report(
    template: bytes,
    source: ReportDataSource,
    project_id: str | None,
    today: date,
    log: logging.Logger,
) -> bytes:
    """Populate the workbook in *template* and return it serialised."""
    with BytesIO(template) as src:
        wb = load_workbook(src)
    try:
        populate_workbook(wb, source, project_id, today, log)
        with BytesIO() as out:
            wb.save(out)
            return out.getvalue()
    finally:
        wb.close()


__all__ = [
    "CellValue",
    "project_cells",
    "substructure_rows",
    "substructure_cells",
    "style_substructure_block",
    "autofit_column",
    "apply_cells",
    "load_template",
    "populate_workbook",
    "build_excel_report",
]
