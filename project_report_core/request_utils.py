from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping

from .constants import DATE_FMT, REPORT_NAME_PREFIX
from .exceptions import ReportError

# format query value -> (generator kind, file extension)
_FORMATS = {
    "excel": ("excel", "xlsx"),
    "xlsx": ("excel", "xlsx"),
    "pdf": ("pdf", "pdf"),
}


@dataclass(frozen=True)
class ReportRequest:
    report_format: str  # "excel" | "pdf"
    extension: str
    base_name: str
    project_id: str | None = None

    @property
    def file_name(self) -> str:
        return f"{self.base_name}.{self.extension}"


def resolve_format(
    params: Mapping[str, str],
    project_id: str | None = None,
    today: date | None = None,
) -> ReportRequest:
    """
    Map the ``format`` / ``name`` query parameters to a `ReportRequest`.

    Raises `ReportError` (400) when ``format`` is missing or not one of
    excel / xlsx / pdf.
    """
    raw = params.get("format")
    if raw is None:
        raise ReportError(
            "Please specify a file format (pdf || xlsx) via the 'format' query parameter.",
            status_code=400,
        )
    try:
        report_format, extension = _FORMATS[raw.lower()]
    except KeyError:
        raise ReportError(f"Format not supported: {raw}", status_code=400) from None

    name = params.get("name")
    if name is None:
        base = f"{REPORT_NAME_PREFIX}{(today or date.today()).strftime(DATE_FMT)}"
    else:
        base = name.replace(" ", "")
    return ReportRequest(report_format, extension, base, project_id)


__all__ = ["ReportRequest", "resolve_format"]
