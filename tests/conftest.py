import shutil
from datetime import date
from pathlib import Path

import pytest

from project_report_core.constants import EXCEL_TEMPLATE_NAME
from project_report_core.template_builder import build_template

REPO_TEMPLATES = Path(__file__).resolve().parent.parent / "templates"


@pytest.fixture
def today():
    return date(2024, 5, 17)


@pytest.fixture
def template_dir(tmp_path):
    """HTML templates from the repo plus a freshly built Excel template."""
    dst = tmp_path / "templates"
    dst.mkdir()
    for f in REPO_TEMPLATES.glob("*.html"):
        shutil.copy(f, dst / f.name)
    build_template(dst / EXCEL_TEMPLATE_NAME)
    return dst


@pytest.fixture
def excel_template(template_dir):
    return (template_dir / EXCEL_TEMPLATE_NAME).read_bytes()
