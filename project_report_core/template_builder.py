"""
Write a blank ExcelTemplate.xlsx with the three worksheets the report fills.

Usage:
    python -m project_report_core.template_builder templates/ExcelTemplate.xlsx

The deployed template is normally designed by hand in Excel. The one shipped
in ``templates/`` carries only the sheet names and headings below; rebuild it
with this module after changing them.
"""
from __future__ import annotations

import argparse
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font

from .constants import SHEET_PROJECT_INFO, SHEET_SUBSTRUCTURES, SHEET_TOTAL_COST

_HEADINGS = {
    SHEET_PROJECT_INFO: [
        ("A1", "Projektinformation"),
        ("A5", "Projektnamn"),
        ("A9", "Projektkod"),
        ("A12", "Bruttoarea"),
        ("A14", "Antal våningar"),
        ("A16", "Byggnadsarea"),
    ],
    SHEET_TOTAL_COST: [
        ("A1", "Total kostnad"),
        ("B5", "Projekt"),
        ("K4", "Projektkod"),
        ("K5", "Datum"),
        ("K6", "BTA"),
        ("J9", "Totalt"),
        ("L9", "Per m²"),
        ("B11", "Mängd"),
        ("B13", "EnH"),
        ("B15", "Material"),
        ("B17", "Arbete"),
        ("B19", "Maskin"),
        ("B21", "UE"),
        ("B23", "Pris"),
        ("B31", "TOTAL"),
    ],
    SHEET_SUBSTRUCTURES: [
        ("A1", "Substrukturer"),
        ("B5", "Projekt"),
        ("N5", "Datum"),
        ("B9", "Namn"),
        ("D9", "Mängd"),
        ("F9", "EnH"),
        ("H9", "Material"),
        ("J9", "Arbete"),
        ("L9", "Maskin"),
        ("N9", "UE"),
        ("P9", "Pris"),
        ("R9", "TOTAL"),
    ],
}


def build_template(path: str | Path) -> Path:
    wb = Workbook()
    wb.remove(wb.active)
    for title, cells in _HEADINGS.items():
        ws = wb.create_sheet(title)
        for addr, text in cells:
            ws[addr] = text
        ws["A1"].font = Font(bold=True, size=16)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Write a blank report template")
    ap.add_argument("path")
    print(build_template(ap.parse_args().path))
