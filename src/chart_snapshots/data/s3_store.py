"""S3-compatible object storage backend (AWS S3, Cloudflare R2, MinIO)."""

from __future__ import annotations

from typing import Any, Dict, List

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from chart_snapshots.data.blob_store import normalize_key
from chart_snapshots.errors import StorageError
from chart_snapshots.ports import StorageAdapter
from chart_snapshots.settings import Settings


class S3BlobStore(StorageAdapter):
    """Stores blobs as objects in a bucket; ``upload`` returns the object key."""

    name = "s3"

    def __init__(
        self,
        bucket: str,
        *,
        endpoint_url: str | None = None,
        region: str = "auto",
        access_key: str | None = None,
        secret_key: str | None = None,
        client: Any | None = None,
    ) -> None:
        self.bucket = bucket
        if client is None:
            client_kwargs: Dict[str, Any] = {
                "service_name": "s3",
                "region_name": region,
                "config": Config(signature_version="s3v4"),
            }
            if endpoint_url:
                client_kwargs["endpoint_url"] = endpoint_url
            if access_key and secret_key:
                client_kwargs["aws_access_key_id"] = access_key
                client_kwargs["aws_secret_access_key"] = secret_key
            client = boto3.client(**client_kwargs)
        self.client = client
        logger.info("S3 storage initialised", bucket=bucket, endpoint=endpoint_url)

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3BlobStore":
        if not settings.s3_bucket:
            raise StorageError("S3_BUCKET must be set when STORAGE_BACKEND=s3")
        return cls(
            settings.s3_bucket,
            endpoint_url=settings.s3_endpoint_url,
            region=settings.s3_region,
            access_key=settings.s3_access_key_id,
            secret_key=settings.s3_secret_access_key,
        )

    def upload(self, key: str, data: bytes) -> str:
        object_key = normalize_key(key)
        try:
            self.client.put_object(Bucket=self.bucket, Key=object_key, Body=data, ContentType="image/png")
        except (BotoCoreError, ClientError) as exc:
            logger.exception("S3 upload failed", bucket=self.bucket, key=object_key)
            raise StorageError(f"Failed to upload {object_key}: {exc}") from exc
        logger.debug("Stored object", bucket=self.bucket, key=object_key, size=len(data))
        return object_key

    def download(self, key: str) -> bytes | None:
        object_key = normalize_key(key)
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=object_key)
            return response["Body"].read()
        except ClientError as exc:
            if _is_missing(exc):
                return None
            logger.exception("S3 download failed", bucket=self.bucket, key=object_key)
            raise StorageError(f"Failed to download {object_key}: {exc}") from exc
        except BotoCoreError as exc:
            logger.exception("S3 download failed", bucket=self.bucket, key=object_key)
            raise StorageError(f"Failed to download {object_key}: {exc}") from exc

    def exists(self, key: str) -> bool:
        object_key = normalize_key(key)
        try:
            self.client.head_object(Bucket=self.bucket, Key=object_key)
        except ClientError as exc:
            if _is_missing(exc):
                return False
            logger.exception("S3 head failed", bucket=self.bucket, key=object_key)
            raise StorageError(f"Failed to stat {object_key}: {exc}") from exc
        except BotoCoreError as exc:
            logger.exception("S3 head failed", bucket=self.bucket, key=object_key)
            raise StorageError(f"Failed to stat {object_key}: {exc}") from exc
        return True

    def delete(self, key: str) -> bool:
        if not self.exists(key):
            return False
        object_key = normalize_key(key)
        try:
            self.client.delete_object(Bucket=self.bucket, Key=object_key)
        except (BotoCoreError, ClientError) as exc:
            logger.exception("S3 delete failed", bucket=self.bucket, key=object_key)
            raise StorageError(f"Failed to delete {object_key}: {exc}") from exc
        return True

    def list(self, prefix: str = "") -> List[str]:
        keys: List[str] = []
        paginator = self.client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix.lstrip("/")):
                keys.extend(obj["Key"] for obj in page.get("Contents", []))
        except (BotoCoreError, ClientError) as exc:
            logger.exception("S3 list failed", bucket=self.bucket, prefix=prefix)
            raise StorageError(f"Failed to list {prefix!r}: {exc}") from exc
        return keys


def _is_missing(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") in ("NoSuchKey", "404")
