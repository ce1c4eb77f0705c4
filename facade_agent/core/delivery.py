"""Persistence of generated images and notification of the requester."""

import asyncio
import mimetypes
import re
import time
from typing import List, Optional

from ..models.enums import ArtifactRole
from ..models.schemas import GenerationOutcome, Requester, StoredArtifact
from ..providers.brevo import BrevoEmailClient
from ..providers.hubspot import HubSpotClient
from ..providers.storage import GCSArtifactStorage
from ..utils.logger import get_logger
from ..utils.errors import FacadeAgentError

logger = get_logger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def artifact_filename(
    role: ArtifactRole,
    email: str,
    timestamp_ms: int,
    mime_type: str = "image/png",
) -> str:
    """Object name for an artifact, e.g. ``glazed-jane.doe-1700000000000.png``."""
    local_part = _UNSAFE_NAME_CHARS.sub("-", email.split("@")[0]) or "anonymous"
    extension = mimetypes.guess_extension(mime_type) or ".png"
    return f"{role.value}-{local_part}-{timestamp_ms}{extension}"


class DeliveryService:
    """Stores artifacts, signs their links and sends notifications."""

    def __init__(
        self,
        storage: GCSArtifactStorage,
        email_client: BrevoEmailClient,
        crm_client: Optional[HubSpotClient] = None,
    ):
        self.storage = storage
        self.email_client = email_client
        self.crm_client = crm_client

    async def store(
        self,
        outcome: GenerationOutcome,
        requester: Requester,
    ) -> List[StoredArtifact]:
        """
        Upload every artifact and return signed links in role order.

        Uploads run concurrently, then signing runs concurrently.

        Raises:
            StorageError: If any upload or signing fails
        """
        timestamp_ms = int(time.time() * 1000)
        artifacts = outcome.artifacts()
        filenames = [
            artifact_filename(role, requester.email, timestamp_ms, payload.mime_type)
            for role, payload in artifacts
        ]

        logger.info(
            "Uploading images to cloud storage",
            extra={"filenames": filenames}
        )
        await asyncio.gather(*[
            self.storage.upload(payload.data, filename, payload.mime_type)
            for (_, payload), filename in zip(artifacts, filenames)
        ])

        urls = await asyncio.gather(*[
            self.storage.signed_url(filename) for filename in filenames
        ])
        logger.info("Signed URLs generated", extra={"count": len(urls)})

        return [
            StoredArtifact(role=role, filename=filename, url=url)
            for (role, _), filename, url in zip(artifacts, filenames, urls)
        ]

    async def notify(self, requester: Requester, artifacts: List[StoredArtifact]):
        """
        Send the results email and the CRM submission.

        Runs after the response has been returned, so failures are logged
        rather than raised.
        """
        try:
            await self.email_client.send_results(requester, artifacts)
        except FacadeAgentError as e:
            logger.error(
                f"Failed to send email for {requester.email}",
                extra={"error": str(e), "error_type": type(e).__name__}
            )

        if self.crm_client is None:
            return

        try:
            await self.crm_client.submit(requester)
        except FacadeAgentError as e:
            logger.error(
                f"Failed to submit {requester.email} to CRM",
                extra={"error": str(e), "error_type": type(e).__name__}
            )
