"""
Document storage backends and the factory that builds one per location

A backend is built fresh for each call from the DocumentLocation row, so
credential changes take effect without a restart.
"""
import logging
from pathlib import Path
from typing import Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.core.errors import NotFoundError, ValidationError
from app.models.document_location import DocumentLocation, LocationType

logger = logging.getLogger(__name__)

WASABI_ENDPOINT_TEMPLATE = "https://s3.{region}.wasabisys.com"


class LocalStorage:
    """Files under a root directory; keys may not escape the root"""

    def __init__(self, root_path: str):
        self.root = Path(root_path).resolve()

    def _path(self, key: str) -> Path:
        full_path = (self.root / key).resolve()
        try:
            full_path.relative_to(self.root)
        except ValueError:
            raise ValidationError(
                "Invalid storage key",
                errors={"key": [f"Path escapes storage root: {key}"]},
            )
        return full_path

    def put(self, key: str, content: bytes) -> str:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return key

    def get(self, key: str) -> bytes:
        path = self._path(key)
        if not path.is_file():
            raise NotFoundError(f"File not found: {key}")
        return path.read_bytes()

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.is_file():
            return False
        path.unlink()
        return True

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def check(self) -> Dict:
        ok = self.root.is_dir()
        return {
            "ok": ok,
            "message": "Directory is accessible" if ok else f"Directory does not exist: {self.root}",
        }


class S3Storage:
    """S3-compatible object storage (AWS S3, Wasabi)"""

    def __init__(
        self,
        bucket: str,
        region: str,
        endpoint_url: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
    ):
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )

    def put(self, key: str, content: bytes) -> str:
        self._client.put_object(Bucket=self.bucket, Key=key, Body=content)
        return key

    def get(self, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if e.response["Error"]["Code"] in ("NoSuchKey", "404"):
                raise NotFoundError(f"File not found: {key}") from e
            raise
        return response["Body"].read()

    def exists(self, key: str) -> bool:
        try:
            self._client.head_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] in ("NoSuchKey", "404"):
                return False
            raise

    def delete(self, key: str) -> bool:
        if not self.exists(key):
            return False
        self._client.delete_object(Bucket=self.bucket, Key=key)
        return True

    def check(self) -> Dict:
        try:
            self._client.head_bucket(Bucket=self.bucket)
        except (ClientError, BotoCoreError) as e:
            logger.warning("Storage check failed for bucket %s: %s", self.bucket, e)
            return {"ok": False, "message": f"Bucket not reachable: {e}"}
        return {"ok": True, "message": "Bucket is accessible"}


def _require(location: DocumentLocation, *fields: str) -> None:
    missing = {f: [f"{f} is required for {location.location_type} locations"] for f in fields if not getattr(location, f)}
    if missing:
        raise ValidationError("Storage location is misconfigured", errors=missing)


def build_storage(location: DocumentLocation):
    """
    Build the backend for a document location

    Raises:
        ValidationError: Unknown location type or missing required settings
    """
    try:
        location_type = LocationType(location.location_type)
    except ValueError:
        raise ValidationError(
            "Storage location is misconfigured",
            errors={"location_type": [f"Unsupported location type: {location.location_type}"]},
        )

    if location_type == LocationType.LOCAL:
        _require(location, "root_path")
        return LocalStorage(location.root_path)

    _require(location, "bucket", "access_key", "secret_key")
    region = location.region or settings.STORAGE_DEFAULT_REGION
    endpoint = location.endpoint
    if location_type == LocationType.WASABI and not endpoint:
        endpoint = WASABI_ENDPOINT_TEMPLATE.format(region=region)

    return S3Storage(
        bucket=location.bucket,
        region=region,
        endpoint_url=endpoint,
        access_key=location.access_key,
        secret_key=location.secret_key,
    )
