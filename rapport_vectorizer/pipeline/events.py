"""Parsing of object-storage "new object" notifications.

The notification carries the bucket name and a URL-encoded key.  Report
keys look like ``reports/42_7.pdf``: exactly two path segments, the second
holding ``<projectId>_<objectId>`` optionally followed by a file extension.
"""

from __future__ import annotations

import posixpath
from typing import Any
from urllib.parse import unquote_plus

from rapport_vectorizer.models.report import ReportLocation
from rapport_vectorizer.utils.errors import InvalidReportKeyError

_ID_SEPARATOR = "_"


def parse_report_key(bucket: str, raw_key: str) -> ReportLocation:
    """Decode *raw_key* and split it into project and object identifiers.

    The file stem is split on its first ``_`` only, so the object id keeps
    any later underscores: ``reports/42_7_v2.pdf`` gives project ``42`` and
    object ``7_v2``.  Dropping the tail would make ``42_7_v2.pdf`` and
    ``42_7.pdf`` collide on the same vector record.

    Raises
    ------
    InvalidReportKeyError
        If the key does not have exactly two path segments, or the second
        segment has no ``_`` separating two non-empty identifiers.
    """
    key = unquote_plus(raw_key)
    parts = key.split("/")
    if len(parts) != 2 or _ID_SEPARATOR not in parts[1]:
        raise InvalidReportKeyError(message=f"Invalid key format: {key!r}")

    stem, _ext = posixpath.splitext(parts[1])
    project_id, _, object_id = stem.partition(_ID_SEPARATOR)
    if not project_id or not object_id:
        raise InvalidReportKeyError(message=f"Invalid key format: {key!r}")

    return ReportLocation(
        bucket=bucket,
        key=key,
        project_id=project_id,
        object_id=object_id,
    )


def parse_report_location(event: dict[str, Any]) -> ReportLocation:
    """Extract the report location from the first record of an S3 notification.

    Raises
    ------
    InvalidReportKeyError
        If the event has no S3 record or its key is malformed.
    """
    try:
        s3 = event["Records"][0]["s3"]
        bucket = s3["bucket"]["name"]
        raw_key = s3["object"]["key"]
    except (KeyError, IndexError, TypeError) as exc:
        raise InvalidReportKeyError(message="Event carries no S3 object record") from exc

    return parse_report_key(bucket, raw_key)


def build_s3_event(bucket: str, key: str) -> dict[str, Any]:
    """Build a minimal ``ObjectCreated`` notification for *bucket*/*key*.

    Used by the CLI to replay an upload without the storage trigger.
    """
    return {
        "Records": [
            {
                "eventSource": "aws:s3",
                "eventName": "ObjectCreated:Put",
                "s3": {
                    "bucket": {"name": bucket},
                    "object": {"key": key},
                },
            }
        ]
    }
