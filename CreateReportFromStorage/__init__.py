"""
HTTP-triggered Azure Function: populate the Excel template held in blob
storage, upload the result and answer with a time-limited download link.

GET Project/{projectId}/storage-report?format=excel[&name=...]
"""

import logging

import azure.functions as func

from project_report_core import handle_storage_report_request


def main(req: func.HttpRequest) -> func.HttpResponse:  # noqa: N802 – Azure sig
    project_id = req.route_params.get("projectId")
    logging.info("CreateReportFromStorage function triggered for project %s", project_id)
    return handle_storage_report_request(req.params, project_id)
