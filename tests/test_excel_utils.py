import logging
from io import BytesIO

import pytest
from openpyxl import Workbook, load_workbook

from project_report_core import excel_utils
from project_report_core.data_source import MockReportDataSource
from project_report_core.exceptions import ReportError

log = logging.getLogger("test")


def _build(template, today):
    data = excel_utils.build_excel_report(
        template, MockReportDataSource(), "p1", today, log
    )
    return load_workbook(BytesIO(data))


def test_project_and_cost_cells(excel_template, today):
    wb = _build(excel_template, today)

    info = wb["ProjektInformation"]
    assert info["B5"].value == "AFRY Head Office"
    assert info["B9"].value == "99435"
    assert info["E12"].value == 123456
    assert info["E14"].value == 12
    assert info["E16"].value == 1234

    cost = wb["TotalKostnad"]
    assert cost["D5"].value == "AFRY Head Office"
    assert cost["L4"].value == "99435"
    assert cost["L5"].value == "2024-05-17"
    assert cost["L6"].value == 123456
    assert [cost[f"J{r}"].value for r in (11, 13, 15, 17, 19, 21, 23, 31)] == [
        5000000, 0, 3000000, 2000000, 1000000, 0, 0, 30000000,
    ]
    assert [cost[f"L{r}"].value for r in (11, 13, 15, 17, 19, 21, 23, 31)] == [
        40, 0, 24, 16, 8, 0, 0, 243,
    ]


def test_substructure_rows(excel_template, today):
    ws = _build(excel_template, today)["SubStrukturer"]
    assert ws["D5"].value == "AFRY Head Office"
    assert ws["O5"].value == "2024-05-17"

    for row, name in ((11, "Garage"), (14, "Basement"), (17, "Attic")):
        assert ws[f"B{row}"].value == name
        assert [ws[f"{c}{row}"].value for c in "DFHJLNPR"] == [
            321, 0, 322, 323, 324, 0, 0, 1234,
        ]
    assert ws["B20"].value is None


def test_substructure_styling(excel_template, today):
    ws = _build(excel_template, today)["SubStrukturer"]

    name = ws["B11"]
    assert name.font.b and name.font.sz == 12
    assert name.alignment.horizontal == "left"

    header = ws["C11"]
    assert header.font.b
    assert header.alignment.horizontal == "center"

    data = ws["H11"]
    assert data.fill.fill_type == "solid"
    assert data.fill.fgColor.rgb.endswith("FFFFCC")
    assert {data.border.left.style, data.border.right.style,
            data.border.top.style, data.border.bottom.style} == {"thin"}

    total = ws["R11"]
    assert total.fill.fgColor.rgb.endswith("FFFFCC")
    assert {total.border.left.style, total.border.right.style,
            total.border.top.style, total.border.bottom.style} == {"double"}

    for col in "BJR":
        assert ws[f"{col}12"].border.bottom.style == "dotted"

    assert ws.column_dimensions["B"].width >= len("Basement")


def test_identical_runs_match_except_dates(excel_template, today):
    from datetime import date

    a = _build(excel_template, today)
    b = _build(excel_template, date(2030, 1, 2))
    date_cells = {("TotalKostnad", "L5"), ("SubStrukturer", "O5")}
    for ws in a.worksheets:
        other = b[ws.title]
        for row in ws.iter_rows():
            for cell in row:
                if (ws.title, cell.coordinate) in date_cells:
                    assert cell.value != other[cell.coordinate].value
                else:
                    assert cell.value == other[cell.coordinate].value


def test_missing_worksheet_raises(today):
    wb = Workbook()
    wb.active.title = "ProjektInformation"
    buf = BytesIO()
    wb.save(buf)
    with pytest.raises(KeyError):
        excel_utils.build_excel_report(
            buf.getvalue(), MockReportDataSource(), None, today, log
        )


def test_apply_cells_generic():
    wb = Workbook()
    wb.active.title = "S"
    excel_utils.apply_cells(
        wb,
        [
            excel_utils.CellValue("S", "A1", "x"),
            excel_utils.CellValue("S", "B2", 7, "total"),
        ],
    )
    assert wb["S"]["A1"].value == "x"
    assert wb["S"]["B2"].border.top.style == "double"


def test_substructure_rows_step():
    assert excel_utils.substructure_rows(4) == [11, 14, 17, 20]


def test_load_template_missing(tmp_path):
    with pytest.raises(ReportError) as exc:
        excel_utils.load_template(tmp_path / "nope.xlsx")
    assert "Template not found" in str(exc.value)
