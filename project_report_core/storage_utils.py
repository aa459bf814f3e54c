from __future__ import annotations

import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import (
    BlobSasPermissions,
    ContainerClient,
    ContentSettings,
    generate_blob_sas,
)

from .constants import BLOB_CONN_ENV, SAS_TTL_MINUTES, TEMPLATE_CONTAINER, XLSX_MIME
from .exceptions import ReportError


@dataclass(frozen=True)
class StoredReport:
    name: str
    uri: str


def blob_connection_string() -> str:
    """Read at call time so a rotated secret is picked up without a restart."""
    conn = os.getenv(BLOB_CONN_ENV)
    if not conn:
        raise ReportError(f"{BLOB_CONN_ENV} not configured")
    return conn


def container_client(container: str = TEMPLATE_CONTAINER) -> ContainerClient:
    return ContainerClient.from_connection_string(blob_connection_string(), container)


def download_template(container: ContainerClient, name: str) -> bytes:
    try:
        return container.get_blob_client(name).download_blob().readall()
    except ResourceNotFoundError as exc:
        raise ReportError(f"Template not found in storage: {name}") from exc
    except AzureError as exc:
        raise ReportError(f"Template download failed: {exc}") from exc


def new_blob_name(report_name: str, extension: str = "xlsx") -> str:
    return f"{report_name}{uuid.uuid4()}.{extension}"


def sas_uri(blob_client, ttl_minutes: int = SAS_TTL_MINUTES, now: datetime | None = None) -> str:
    """Read/delete-scoped SAS URI for *blob_client*, valid *ttl_minutes*."""
    key = getattr(blob_client.credential, "account_key", None)
    if not key:
        raise ReportError("Storage credential has no account key; cannot sign SAS")
    expiry = (now or datetime.now(timezone.utc)) + timedelta(minutes=ttl_minutes)
    token = generate_blob_sas(
        account_name=blob_client.account_name,
        container_name=blob_client.container_name,
        blob_name=blob_client.blob_name,
        account_key=key,
        permission=BlobSasPermissions(read=True, delete=True),
        expiry=expiry,
    )
    return f"{blob_client.url}?{token}"


def upload_report(
    container: ContainerClient,
    report_name: str,
    content: bytes,
    content_type: str = XLSX_MIME,
) -> StoredReport:
    blob = container.get_blob_client(new_blob_name(report_name))
    try:
        blob.upload_blob(content, content_settings=ContentSettings(content_type=content_type))
    except AzureError as exc:
        raise ReportError(f"Report upload failed: {exc}") from exc
    return StoredReport(name=blob.blob_name, uri=sas_uri(blob))


__all__ = [
    "StoredReport",
    "blob_connection_string",
    "container_client",
    "download_template",
    "new_blob_name",
    "sas_uri",
    "upload_report",
]
