"""HubSpot Forms API client for lead capture."""

from typing import Optional
import httpx

from .base import BaseProvider
from ..models.schemas import Requester
from ..utils.logger import get_logger
from ..utils.errors import CRMError, ProviderError

logger = get_logger(__name__)


class HubSpotClient(BaseProvider):
    """Submits requester contact details to a HubSpot form."""

    provider_name = "hubspot"

    def __init__(
        self,
        portal_id: Optional[str],
        form_guid: Optional[str],
        page_uri: str = "https://ai-glazing-generator.com",
        page_name: str = "AI Balcony Glazing Generator",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            api_key=None,
            base_url="https://api.hsforms.com/submissions/v3/integration/submit",
            timeout=timeout,
            transport=transport,
        )
        self.portal_id = portal_id
        self.form_guid = form_guid
        self.page_uri = page_uri
        self.page_name = page_name

    @property
    def is_configured(self) -> bool:
        return bool(self.portal_id and self.form_guid)

    def _get_default_headers(self) -> dict:
        return {"Content-Type": "application/json"}

    def build_payload(self, requester: Requester) -> dict:
        # HubSpot's default property for the company name is "company"
        fields = [
            ("firstname", requester.first_name),
            ("lastname", requester.last_name),
            ("email", requester.email),
            ("phone", requester.phone_number),
            ("company", requester.housing_company),
        ]
        return {
            "fields": [{"name": name, "value": value} for name, value in fields if value],
            "context": {"pageUri": self.page_uri, "pageName": self.page_name},
        }

    async def submit(self, requester: Requester) -> bool:
        """
        Submit the requester to the configured form.

        Returns:
            False when portal/form ids are not configured, True on success

        Raises:
            CRMError: If HubSpot rejects the submission
        """
        if not self.is_configured:
            logger.warning("HubSpot portal/form ids are not set, skipping submission")
            return False

        self._ensure_client()

        logger.info(f"Submitting data for {requester.email} to HubSpot")
        try:
            response = await self.client.post(
                f"{self.base_url}/{self.portal_id}/{self.form_guid}",
                json=self.build_payload(requester),
            )
            self._handle_response_errors(response)
        except (httpx.HTTPError, ProviderError) as e:
            raise CRMError(f"HubSpot submission failed: {e}")

        logger.info(
            f"Successfully submitted data for {requester.email} to HubSpot",
            extra={"status_code": response.status_code}
        )
        return True
