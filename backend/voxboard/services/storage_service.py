"""
Voxboard Backend - Blob Storage Adapter
========================================

What:  Stores, checks, and deletes named byte buffers in Google Cloud Storage
       and derives their public URLs.
How:   Wraps the synchronous `google-cloud-storage` client; every network
       call runs through Starlette's `run_in_threadpool` so it never blocks
       the event loop.
Who:   SoundboardService (audio files) and ProfileService (profile pictures).

Failure policy per operation:
    upload(data, key, content_type)  raises StorageError
    exists(key)                      never raises; BlobPresence.UNKNOWN on error
    delete(key)                      raises StorageError; callers treat it as
                                     best effort (log and continue)

Public URL:
    {GCS_PUBLIC_BASE_URL}/{bucket}/{key}
    Deterministic, so the last path segment of the URL is always the key.
"""

import enum
import logging
from abc import ABC, abstractmethod
from typing import Optional

from google.cloud import storage
from starlette.concurrency import run_in_threadpool

from voxboard.config import Settings
from voxboard.exceptions import StorageError

logger = logging.getLogger(__name__)

# Uploaded objects are immutable (random keys), so they can be cached for a year
PUBLIC_CACHE_CONTROL = "public, max-age=31536000"


class BlobPresence(str, enum.Enum):
    """
    Outcome of an existence check.

    UNKNOWN means the check itself failed; it is not evidence that the
    object is missing.
    """

    PRESENT = "present"
    ABSENT = "absent"
    UNKNOWN = "unknown"

    @property
    def confirmed(self) -> bool:
        """True only when the store positively reported the object."""
        return self is BlobPresence.PRESENT


class BlobStore(ABC):
    """Abstract remote object store addressed by key."""

    def __init__(self, bucket_name: str, public_base_url: str):
        self.bucket_name = bucket_name
        self.public_base_url = public_base_url.rstrip("/")

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{self.bucket_name}/{key}"

    @abstractmethod
    async def upload(self, data: bytes, key: str, content_type: str) -> str:
        """Store `data` under `key` and return its public URL."""
        ...

    @abstractmethod
    async def exists(self, key: str) -> BlobPresence:
        """Report whether `key` exists. Never raises."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove `key`. Raises StorageError on failure."""
        ...


class GCSBlobStore(BlobStore):
    """Google Cloud Storage implementation of BlobStore."""

    def __init__(
        self,
        settings: Settings,
        client: Optional[storage.Client] = None,
    ):
        super().__init__(settings.gcp_bucket_name, settings.gcs_public_base_url)
        self.project_id = settings.gcp_project_id
        self.credentials_file = settings.gcp_credentials_file
        self._client = client
        self._bucket: Optional[storage.Bucket] = None

    @property
    def bucket(self) -> storage.Bucket:
        """Bucket handle, creating the client on first use."""
        if self._bucket is None:
            if self._client is None:
                if self.credentials_file:
                    self._client = storage.Client.from_service_account_json(
                        self.credentials_file, project=self.project_id
                    )
                else:
                    self._client = storage.Client(project=self.project_id)
                logger.info("Cloud Storage client initialized (bucket=%s)", self.bucket_name)
            self._bucket = self._client.bucket(self.bucket_name)
        return self._bucket

    def _upload_sync(self, data: bytes, key: str, content_type: str) -> None:
        blob = self.bucket.blob(key)
        blob.cache_control = PUBLIC_CACHE_CONTROL
        blob.upload_from_string(data, content_type=content_type)

    async def upload(self, data: bytes, key: str, content_type: str) -> str:
        try:
            await run_in_threadpool(self._upload_sync, data, key, content_type)
        except Exception as e:
            logger.error("Upload of %s to bucket %s failed: %s", key, self.bucket_name, str(e))
            raise StorageError(
                message=f"Error uploading to Google Cloud Storage: {e}",
                context={"key": key, "bucket": self.bucket_name, "error_type": type(e).__name__},
            ) from e

        logger.info("Uploaded %s (%d bytes, %s)", key, len(data), content_type)
        return self.public_url(key)

    async def exists(self, key: str) -> BlobPresence:
        try:
            found = await run_in_threadpool(self.bucket.blob(key).exists)
        except Exception as e:
            logger.warning("Existence check for %s failed: %s", key, str(e))
            return BlobPresence.UNKNOWN
        return BlobPresence.PRESENT if found else BlobPresence.ABSENT

    async def delete(self, key: str) -> None:
        try:
            await run_in_threadpool(self.bucket.blob(key).delete)
        except Exception as e:
            raise StorageError(
                message=f"Failed to delete file: {e}",
                context={"key": key, "bucket": self.bucket_name, "error_type": type(e).__name__},
            ) from e
        logger.info("Deleted blob %s", key)
