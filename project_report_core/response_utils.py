"""HttpResponse builders shared by the report functions."""
from __future__ import annotations

import json
import mimetypes
from http import HTTPStatus

import azure.functions as func

from .constants import XLSX_MIME
from .storage_utils import StoredReport

# not every platform's mime table knows xlsx
mimetypes.add_type(XLSX_MIME, ".xlsx")


def status_name(status_code: int) -> str:
    """``500`` → ``"InternalServerError"``."""
    return "".join(p.capitalize() for p in HTTPStatus(status_code).name.split("_"))


def _json_response(payload: dict, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(payload, ensure_ascii=False),
        status_code=status_code,
        mimetype="application/json",
    )


def error_response(
    status_code: int, exc: BaseException | None = None
) -> func.HttpResponse:
    """
    JSON ``{StatusCode, StatusName, Message}`` for *exc*; a bare response
    with the given status when *exc* is None.
    """
    if exc is None:
        return func.HttpResponse(status_code=status_code)
    return _json_response(
        {
            "StatusCode": status_code,
            "StatusName": status_name(status_code),
            "Message": str(exc),
        },
        status_code,
    )


def file_download_response(file_name: str, content: bytes) -> func.HttpResponse:
    mime, _ = mimetypes.guess_type(file_name)
    return func.HttpResponse(
        content,
        status_code=200,
        headers={"Content-Disposition": f"attachment;filename={file_name}"},
        mimetype=mime or "application/octet-stream",
    )


def stored_report_response(report: StoredReport) -> func.HttpResponse:
    return _json_response({"Name": report.name, "Uri": report.uri}, 201)


__all__ = [
    "status_name",
    "error_response",
    "file_download_response",
    "stored_report_response",
]
