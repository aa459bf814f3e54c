"""HTML template rendering and HTML → PDF conversion for the PDF report."""
from __future__ import annotations

import logging
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup
from pypdf import PdfReader, PdfWriter
from pypdf.generic import RectangleObject

from .constants import (
    DATE_FMT,
    PDF_PAGE_HEIGHT,
    PDF_PAGE_WIDTH,
    PDF_TEMPLATE_NAME,
    ROW_TEMPLATE_NAME,
)
from .data_source import ReportDataSource, SubstructureRow

log = logging.getLogger(__name__)


def template_env(template_dir: str | Path) -> Environment:
    """
    Jinja environment for the ``{{{token}}}`` placeholder templates.

    Unknown tokens raise instead of rendering empty, so a rendered page can
    never carry an unresolved placeholder.
    """
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        variable_start_string="{{{",
        variable_end_string="}}}",
        undefined=StrictUndefined,
        autoescape=select_autoescape(["html"]),
        keep_trailing_newline=True,
    )


def _row_context(sub: SubstructureRow) -> Dict[str, Any]:
    return {
        "substructureName": sub.name,
        "substructureMangd": sub.quantity,
        "substructureEnh": sub.unit,
        "substructureMaterial": sub.material,
        "substructureArbete": sub.labor,
        "substructureMaskin": sub.machine,
        "substructureUe": sub.subcontract,
        "substructurePris": sub.price,
        "substructureTotal": sub.total,
    }


def report_context(
    source: ReportDataSource, project_id: str | None, today: date
) -> Dict[str, Any]:
    """Token → value mapping for the main template (rows excluded)."""
    project = source.project_info(project_id)
    costs = source.cost_summary(project_id)
    per_m2 = costs.per_area(project.gross_area)
    ctx: Dict[str, Any] = {
        "projectName": project.name,
        "projectCode": project.code,
        "bruttoarea": project.gross_area,
        "antalVaningar": project.floor_count,
        "byggnadsarea": project.building_area,
        "date": today.strftime(DATE_FMT),
    }
    for suffix, attr in (
        ("Mangd", "quantity"),
        ("Enh", "unit"),
        ("Material", "material"),
        ("Arbete", "labor"),
        ("Maskin", "machine"),
        ("Ue", "subcontract"),
        ("Pris", "price"),
        ("Total", "total"),
    ):
        ctx[f"totalt{suffix}"] = getattr(costs, attr)
        ctx[f"m2{suffix}"] = getattr(per_m2, attr)
    return ctx


def render_report_html(
    source: ReportDataSource,
    project_id: str | None,
    today: date,
    template_dir: str | Path,
) -> str:
    """Fill the row template once per substructure, then the main template."""
    env = template_env(template_dir)
    row_tpl = env.get_template(ROW_TEMPLATE_NAME)
    rows = "".join(
        row_tpl.render(**_row_context(sub)) for sub in source.substructures(project_id)
    )
    ctx = report_context(source, project_id, today)
    ctx["substructureRows"] = Markup(rows)
    return env.get_template(PDF_TEMPLATE_NAME).render(**ctx)


def resize_pages(pdf: bytes, width: float, height: float) -> bytes:
    """Force every page of *pdf* to *width* × *height* points."""
    reader = PdfReader(BytesIO(pdf))
    writer = PdfWriter()
    for page in reader.pages:
        page.mediabox = RectangleObject([0, 0, width, height])
        page.cropbox = RectangleObject([0, 0, width, height])
        writer.add_page(page)
    with BytesIO() as out:
        writer.write(out)
        return out.getvalue()


def html_to_pdf(html: str, base_url: str | None = None) -> bytes:
    from weasyprint import HTML  # heavy native deps; import on first use

    pdf = HTML(string=html, base_url=base_url).write_pdf()
    log.info("Rendered %d-byte PDF", len(pdf))
    return resize_pages(pdf, PDF_PAGE_WIDTH, PDF_PAGE_HEIGHT)


def build_pdf_report(
    source: ReportDataSource,
    project_id: str | None,
    today: date,
    template_dir: str | Path,
) -> bytes:
    html = render_report_html(source, project_id, today, template_dir)
    return html_to_pdf(html, base_url=str(template_dir))


__all__ = [
    "template_env",
    "report_context",
    "render_report_html",
    "resize_pages",
    "html_to_pdf",
    "build_pdf_report",
]
