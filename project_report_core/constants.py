from __future__ import annotations

import os
from pathlib import Path

# Blob storage
BLOB_CONN_ENV = "AzureBlobStorageConnectionString"
TEMPLATE_CONTAINER = os.getenv("REPORT_TEMPLATE_CONTAINER", "report-templates")
SAS_TTL_MINUTES = int(os.getenv("REPORT_SAS_TTL_MINUTES", "30"))

# Templates
TEMPLATE_DIR = Path(
    os.getenv("REPORT_TEMPLATE_DIR", Path(__file__).resolve().parent.parent / "templates")
)
EXCEL_TEMPLATE_NAME = "ExcelTemplate.xlsx"
PDF_TEMPLATE_NAME = "PDFTemplate.html"
ROW_TEMPLATE_NAME = "SubstructureTableTemplate.html"

# Worksheets in ExcelTemplate.xlsx
SHEET_PROJECT_INFO = "ProjektInformation"
SHEET_TOTAL_COST = "TotalKostnad"
SHEET_SUBSTRUCTURES = "SubStrukturer"

SUBSTRUCTURE_START_ROW = 11
SUBSTRUCTURE_ROW_STEP = 3
DATA_FILL_COLOR = "FFFFCC"

PDF_PAGE_WIDTH = 657.6  # points
PDF_PAGE_HEIGHT = 842.4

REPORT_NAME_PREFIX = "ProjektRapport-"
DATE_FMT = "%Y-%m-%d"

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

LOG_DIR = Path(os.environ["LOG_DIR"]).resolve() if os.getenv("LOG_DIR") else None

__all__ = [
    "BLOB_CONN_ENV",
    "TEMPLATE_CONTAINER",
    "SAS_TTL_MINUTES",
    "TEMPLATE_DIR",
    "EXCEL_TEMPLATE_NAME",
    "PDF_TEMPLATE_NAME",
    "ROW_TEMPLATE_NAME",
    "SHEET_PROJECT_INFO",
    "SHEET_TOTAL_COST",
    "SHEET_SUBSTRUCTURES",
    "SUBSTRUCTURE_START_ROW",
    "SUBSTRUCTURE_ROW_STEP",
    "DATA_FILL_COLOR",
    "PDF_PAGE_WIDTH",
    "PDF_PAGE_HEIGHT",
    "REPORT_NAME_PREFIX",
    "DATE_FMT",
    "XLSX_MIME",
    "LOG_DIR",
]
