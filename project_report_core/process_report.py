#!/usr/bin/env python3
"""
Project report entry points – request handling, logging & CLI
=============================================================

Key behaviour
─────────────
* **Two endpoints**
    • `Project/{projectId}/report`          → Excel or PDF streamed back
    • `Project/{projectId}/storage-report`  → Excel uploaded to blob storage,
      answered with the blob name and a 30-minute read/delete SAS link
* **Populators never raise** – every `generate_*` function catches and
  returns the failure inside a `ReportPayload`; exactly one of `report` /
  `error` is set. The handler turns that into a response.
* Errors are always `{StatusCode, StatusName, Message}` JSON on both
  endpoints.

Data comes from a `ReportDataSource`; the mock source is the default.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
import time
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping

import azure.functions as func

from .constants import EXCEL_TEMPLATE_NAME, LOG_DIR, TEMPLATE_DIR
from .data_source import MockReportDataSource, ReportDataSource
from .excel_utils import build_excel_report, load_template
from .exceptions import ReportError
from .pdf_utils import build_pdf_report
from .request_utils import ReportRequest, resolve_format
from .response_utils import error_response, file_download_response, stored_report_response
from .storage_utils import container_client, download_template, upload_report


@dataclass
class ReportPayload:
    report: Any = None
    error: Exception | None = None

    def __post_init__(self) -> None:
        if (self.report is None) == (self.error is None):
            raise ValueError("ReportPayload needs exactly one of report / error")

    @property
    def ok(self) -> bool:
        return self.error is None


# ───────────────────────────── LOGGING ─────────────────────────────────────
_FMT = logging.Formatter(
    "%(asctime)s | %(levelname)s | %(message)s", "%Y-%m-%dT%H:%M:%SZ"
)
_FMT.converter = time.gmtime


def get_logger() -> logging.Logger:
    """
    The ``project_report`` logger.

    Under the Functions host the root logger already has the host's handler,
    so records just propagate. Standalone (CLI, local runner) the logger gets
    its own stderr handler and stops propagating, so nothing prints twice.
    """
    log = logging.getLogger("project_report")
    log.setLevel(logging.INFO)
    if not log.handlers and not logging.getLogger().handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(_FMT)
        log.addHandler(h)
        log.propagate = False
    return log


def _run_file_handler(run_id: str) -> logging.Handler | None:
    if LOG_DIR is None:
        return None
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / f"{datetime.now(timezone.utc):%Y-%m-%d-%H-%M-%S}_{run_id}.log"
    h = logging.FileHandler(log_file, encoding="utf-8")
    h.setFormatter(_FMT)
    return h


# ───────────────────────────── GENERATORS ──────────────────────────────────
def generate_excel_report(
    source: ReportDataSource,
    project_id: str | None,
    log: logging.Logger,
    today: date | None = None,
    template_path: str | Path | None = None,
) -> ReportPayload:
    """Populate the local Excel template; bytes for direct download."""
    try:
        template = load_template(template_path or TEMPLATE_DIR / EXCEL_TEMPLATE_NAME)
        report = build_excel_report(template, source, project_id, today or date.today(), log)
        return ReportPayload(report=report)
    except Exception as exc:
        return ReportPayload(error=exc)


def generate_pdf_report(
    source: ReportDataSource,
    project_id: str | None,
    log: logging.Logger,
    today: date | None = None,
    template_dir: str | Path | None = None,
) -> ReportPayload:
    try:
        report = build_pdf_report(
            source, project_id, today or date.today(), template_dir or TEMPLATE_DIR
        )
        return ReportPayload(report=report)
    except Exception as exc:
        return ReportPayload(error=exc)


def generate_storage_excel_report(
    container,
    report_name: str,
    source: ReportDataSource,
    project_id: str | None,
    log: logging.Logger,
    today: date | None = None,
    template_name: str = EXCEL_TEMPLATE_NAME,
) -> ReportPayload:
    """Populate the template held in *container* and upload the result."""
    try:
        template = download_template(container, template_name)
        content = build_excel_report(template, source, project_id, today or date.today(), log)
        stored = upload_report(container, report_name, content)
        log.info("Uploaded %s", stored.name)
        return ReportPayload(report=stored)
    except Exception as exc:
        return ReportPayload(error=exc)


def _status_for(exc: Exception) -> int:
    return exc.status_code if isinstance(exc, ReportError) else 500


def _generate(
    request: ReportRequest, source: ReportDataSource, log: logging.Logger, today: date | None
) -> ReportPayload:
    log.info("----- Generating new %s project report -----", request.extension)
    t0 = time.perf_counter()
    generate = generate_excel_report if request.report_format == "excel" else generate_pdf_report
    payload = generate(source, request.project_id, log, today)
    elapsed = int((time.perf_counter() - t0) * 1000)
    log.info("----- %s report created in %d ms -----", request.extension, elapsed)
    return payload


# ───────────────────────────── HTTP HANDLERS ───────────────────────────────
def handle_report_request(
    params: Mapping[str, str],
    project_id: str | None,
    source: ReportDataSource | None = None,
    today: date | None = None,
) -> func.HttpResponse:
    """Body of ``GET Project/{projectId}/report``."""
    log = get_logger()
    log.info("Processing report request for project %s", project_id)
    try:
        request = resolve_format(params, project_id, today)
    except ReportError as exc:
        log.warning("Rejected report request: %s", exc)
        return error_response(exc.status_code, exc)

    payload = _generate(request, source or MockReportDataSource(), log, today)
    if not payload.ok:
        log.error("ERROR during report creation: %s", payload.error, exc_info=payload.error)
        return error_response(_status_for(payload.error), payload.error)
    return file_download_response(request.file_name, payload.report)


def handle_storage_report_request(
    params: Mapping[str, str],
    project_id: str | None,
    source: ReportDataSource | None = None,
    today: date | None = None,
    container=None,
) -> func.HttpResponse:
    """Body of ``GET Project/{projectId}/storage-report`` (Excel only)."""
    log = get_logger()
    log.info("Processing storage report request for project %s", project_id)
    try:
        request = resolve_format(params, project_id, today)
        if request.report_format != "excel":
            raise ReportError(
                f"Format not supported for storage reports: {params.get('format')}",
                status_code=400,
            )
    except ReportError as exc:
        log.warning("Rejected storage report request: %s", exc)
        return error_response(exc.status_code, exc)

    try:
        container = container or container_client()
    except Exception as exc:
        log.error("Blob container unavailable: %s", exc)
        return error_response(_status_for(exc), exc)

    payload = generate_storage_excel_report(
        container, request.base_name, source or MockReportDataSource(), project_id, log, today
    )
    if not payload.ok:
        log.error("ERROR during storage report creation: %s", payload.error, exc_info=payload.error)
        return error_response(_status_for(payload.error), payload.error)
    return stored_report_response(payload.report)


# ------------------------------ CLI ---------------------------------------
def run_report(
    report_format: str,
    out_dir: str | Path,
    name: str | None = None,
    project_id: str | None = None,
) -> Dict[str, Any]:
    """Generate one report to *out_dir*; returns ``{ok, path, error}``."""
    run_id = uuid.uuid4().hex[:8]
    log = get_logger()
    fh = _run_file_handler(run_id)
    if fh is not None:
        log.addHandler(fh)
    log.info("----- Report run %s -----", run_id)

    params = {"format": report_format}
    if name is not None:
        params["name"] = name
    try:
        request = resolve_format(params, project_id)
        payload = _generate(request, MockReportDataSource(), log, None)
        if not payload.ok:
            raise payload.error

        out = Path(out_dir).expanduser().resolve()
        out.mkdir(parents=True, exist_ok=True)
        path = out / request.file_name
        path.write_bytes(payload.report)
        log.info("Report written to %s", path)
        return {"ok": True, "path": str(path), "error": ""}
    except Exception as exc:
        log.exception("Run failed")
        return {"ok": False, "path": "", "error": str(exc)}
    finally:
        if fh is not None:
            log.removeHandler(fh)
            fh.close()


def _cli(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Generate a project report to disk")
    ap.add_argument("--format", required=True, help="excel | xlsx | pdf")
    ap.add_argument("--out", default=".", help="Output folder")
    ap.add_argument("--name", help="Report name (spaces are removed)")
    ap.add_argument("--project-id")
    args = ap.parse_args(argv)
    result = run_report(args.format, args.out, args.name, args.project_id)
    print(json.dumps(result, indent=2))
    if not result["ok"]:
        sys.exit(1)


if __name__ == "__main__":
    _cli()
