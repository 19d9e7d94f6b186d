"""S3 output helpers."""

import json
import logging
from datetime import datetime
from typing import Any, Mapping

import boto3

logger = logging.getLogger(__name__)


def get_s3_client():
    """Create S3 client."""
    return boto3.client("s3")


def build_s3_key(prefix: str, timestamp: datetime, filename: str) -> str:
    """Build a partitioned S3 key path."""
    return (
        f"{prefix}/"
        f"year={timestamp.year:04d}/"
        f"month={timestamp.month:02d}/"
        f"day={timestamp.day:02d}/"
        f"{filename}"
    )


def upload_json_to_s3(
    document: Mapping[str, Any],
    bucket: str,
    key: str,
) -> None:
    """Upload a single JSON document to S3."""
    body = json.dumps(document, default=str, ensure_ascii=False)

    s3 = get_s3_client()
    s3.put_object(
        Bucket=bucket,
        Key=key,
        Body=body.encode("utf-8"),
        ContentType="application/json",
    )
    logger.info("Uploaded %d bytes to s3://%s/%s", len(body), bucket, key)
