import importlib
import re
import sys
from io import BytesIO
from types import SimpleNamespace

import pytest
from jinja2 import UndefinedError
from pypdf import PdfReader, PdfWriter

from project_report_core import pdf_utils
from project_report_core.data_source import MockReportDataSource, SubstructureRow


def test_rendered_html_has_no_placeholders(template_dir, today):
    html = pdf_utils.render_report_html(MockReportDataSource(), "p1", today, template_dir)
    assert re.search(r"\{\{\{.*?\}\}\}", html) is None
    assert "{{{" not in html and "}}}" not in html


def test_rendered_html_values(template_dir, today):
    html = pdf_utils.render_report_html(MockReportDataSource(), "p1", today, template_dir)
    assert "AFRY Head Office" in html
    assert "2024-05-17" in html
    assert "<td>5000000</td><td>40</td>" in html
    assert "<td>30000000</td><td>243</td>" in html
    for name in ("Garage", "Basement", "Attic"):
        assert f"<strong>{name}</strong>" in html
    assert html.count('<td class="total">1234</td>') == 3


def test_row_values_are_escaped(template_dir, today):
    class Source(MockReportDataSource):
        def substructures(self, project_id=None):
            return [SubstructureRow("A<b>&", 0, 0, 0, 0, 0, 0, 0, 0)]

    html = pdf_utils.render_report_html(Source(), None, today, template_dir)
    assert "A&lt;b&gt;&amp;" in html
    # the row block itself must not be escaped
    assert '<td class="total">0</td>' in html


def test_unknown_placeholder_fails(template_dir, today):
    main = template_dir / "PDFTemplate.html"
    main.write_text(main.read_text(encoding="utf-8") + "{{{notAField}}}", encoding="utf-8")
    with pytest.raises(UndefinedError):
        pdf_utils.render_report_html(MockReportDataSource(), None, today, template_dir)


def test_missing_row_template_fails(template_dir, today):
    (template_dir / "SubstructureTableTemplate.html").unlink()
    with pytest.raises(Exception):
        pdf_utils.render_report_html(MockReportDataSource(), None, today, template_dir)


def _blank_pdf(pages):
    w = PdfWriter()
    for _ in range(pages):
        w.add_blank_page(width=595, height=842)
    buf = BytesIO()
    w.write(buf)
    return buf.getvalue()


def test_resize_pages_forces_every_page():
    out = pdf_utils.resize_pages(_blank_pdf(3), 657.6, 842.4)
    reader = PdfReader(BytesIO(out))
    assert len(reader.pages) == 3
    for page in reader.pages:
        assert float(page.mediabox.width) == pytest.approx(657.6)
        assert float(page.mediabox.height) == pytest.approx(842.4)
        assert float(page.cropbox.width) == pytest.approx(657.6)


def test_build_pdf_report_uses_renderer(monkeypatch, template_dir, today):
    seen = {}

    class _HTML:
        def __init__(self, string, base_url=None):
            seen["html"] = string

        def write_pdf(self):
            return _blank_pdf(1)

    monkeypatch.setitem(sys.modules, "weasyprint", SimpleNamespace(HTML=_HTML))
    data = pdf_utils.build_pdf_report(MockReportDataSource(), "p1", today, template_dir)
    assert data.startswith(b"%PDF")
    assert "AFRY Head Office" in seen["html"]
    page = PdfReader(BytesIO(data)).pages[0]
    assert float(page.mediabox.width) == pytest.approx(657.6)


@pytest.mark.parametrize("module", ["pdf_utils", "response_utils"])
def test_module_docstrings(module):
    mod = importlib.import_module(f"project_report_core.{module}")
    assert mod.__doc__
