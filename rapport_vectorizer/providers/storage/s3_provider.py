"""Amazon S3 object-storage provider adapter.

Wraps a synchronous ``boto3`` S3 client to implement
:class:`IObjectStorageProvider`.  boto3 has no async API, so each call runs
in a worker thread via ``asyncio.to_thread`` and the event loop stays free.
"""

from __future__ import annotations

import asyncio
from typing import Any

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from rapport_vectorizer.config.settings import Settings
from rapport_vectorizer.interfaces.object_storage_provider import IObjectStorageProvider
from rapport_vectorizer.utils.errors import StorageError

logger = structlog.get_logger(logger_name=__name__)


class S3ObjectStorageProvider(IObjectStorageProvider):
    """Read-only access to report objects in S3 or an S3-compatible store."""

    def __init__(self, settings: Settings | None = None, client: Any | None = None) -> None:
        if client is not None:
            self._client = client
            return

        client_kwargs: dict[str, Any] = {}
        if settings is not None:
            if settings.aws_region:
                client_kwargs["region_name"] = settings.aws_region
            if settings.s3_endpoint_url:
                client_kwargs["endpoint_url"] = settings.s3_endpoint_url
        self._client = boto3.client("s3", **client_kwargs)

    # -- Sync helpers (executed via asyncio.to_thread) -------------------------

    def _get_object_sync(self, bucket: str, key: str) -> bytes:
        response = self._client.get_object(Bucket=bucket, Key=key)
        body = response["Body"]
        try:
            return body.read()
        finally:
            body.close()

    # -- IObjectStorageProvider implementation ---------------------------------

    async def get_object(self, bucket: str, key: str) -> bytes:
        try:
            data = await asyncio.to_thread(self._get_object_sync, bucket, key)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "Unknown")
            raise StorageError(
                message=f"Cannot fetch s3://{bucket}/{key} ({code})",
                provider_name=self.get_provider_name(),
            ) from exc
        except BotoCoreError as exc:
            raise StorageError(
                message=f"Cannot fetch s3://{bucket}/{key}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.info("s3_object_fetched", bucket=bucket, key=key, size=len(data))
        return data

    def get_provider_name(self) -> str:
        return "s3"
