"""
HTTP-triggered Azure Function: build an Excel or PDF project report and
return it as a file download.

GET Project/{projectId}/report?format=excel|xlsx|pdf[&name=...]
"""

import logging

import azure.functions as func

from project_report_core import handle_report_request


def main(req: func.HttpRequest) -> func.HttpResponse:  # noqa: N802 – Azure sig
    project_id = req.route_params.get("projectId")
    logging.info("CreateReport function triggered for project %s", project_id)
    return handle_report_request(req.params, project_id)
