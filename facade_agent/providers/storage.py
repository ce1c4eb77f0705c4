"""Google Cloud Storage client for generated images."""

import asyncio
from datetime import timedelta
from typing import Optional

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import storage

from ..utils.logger import get_logger
from ..utils.errors import StorageError

logger = get_logger(__name__)


class GCSArtifactStorage:
    """Uploads images to a bucket and signs time-limited read links."""

    def __init__(
        self,
        bucket_name: str,
        url_ttl_seconds: int = 3600,
        client: Optional[storage.Client] = None,
    ):
        """
        Initialize storage.

        Args:
            bucket_name: Target GCS bucket
            url_ttl_seconds: Lifetime of signed read URLs
            client: Preconfigured storage client (created from ambient
                credentials on initialize() when omitted)
        """
        self.bucket_name = bucket_name
        self.url_ttl_seconds = url_ttl_seconds
        self.client = client

    def initialize(self):
        if self.client is None:
            self.client = storage.Client()
            logger.info(
                "GCS storage client initialized",
                extra={"bucket": self.bucket_name}
            )

    def _blob(self, destination: str):
        if self.client is None:
            raise RuntimeError(
                "GCSArtifactStorage not initialized. Call initialize() first."
            )
        return self.client.bucket(self.bucket_name).blob(destination)

    async def upload(
        self,
        data: bytes,
        destination: str,
        content_type: str = "image/png",
    ) -> str:
        """
        Upload bytes to the bucket.

        Returns:
            Destination path of the uploaded object

        Raises:
            StorageError: If the upload fails
        """
        blob = self._blob(destination)

        try:
            await asyncio.to_thread(
                blob.upload_from_string, data, content_type=content_type
            )
        except (GoogleAPIError, GoogleAuthError, OSError) as e:
            raise StorageError(f"Failed to upload {destination}: {e}")

        logger.info(
            f"{destination} uploaded to {self.bucket_name}",
            extra={"bucket": self.bucket_name, "size_kb": len(data) / 1024}
        )
        return destination

    async def signed_url(self, destination: str) -> str:
        """
        Generate a v4 signed read URL for an uploaded object.

        Raises:
            StorageError: If signing fails
        """
        blob = self._blob(destination)

        try:
            return await asyncio.to_thread(
                blob.generate_signed_url,
                version="v4",
                expiration=timedelta(seconds=self.url_ttl_seconds),
                method="GET",
            )
        # Credentials without a private key raise AttributeError when signing
        except (GoogleAPIError, GoogleAuthError, OSError, AttributeError) as e:
            raise StorageError(f"Failed to sign URL for {destination}: {e}")
