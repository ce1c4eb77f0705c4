"""Brevo transactional email client for result notifications."""

from html import escape
from typing import List, Optional
import httpx

from .base import BaseProvider
from ..models.schemas import Requester, StoredArtifact
from ..utils.logger import get_logger
from ..utils.errors import ConfigurationError, EmailDeliveryError, ProviderError

logger = get_logger(__name__)

EMAIL_SUBJECT = "Your Generated Balcony Images"


class BrevoEmailClient(BaseProvider):
    """Sends the download links for generated images by email."""

    provider_name = "brevo"

    def __init__(
        self,
        api_key: Optional[str],
        sender_email: str,
        sender_name: str = "AI Balcony Generator",
        production: bool = False,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            api_key=api_key,
            base_url="https://api.brevo.com/v3",
            timeout=timeout,
            transport=transport,
        )
        self.sender_email = sender_email
        self.sender_name = sender_name
        self.production = production

    def _get_default_headers(self) -> dict:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.api_key:
            headers["api-key"] = self.api_key
        return headers

    def render_html(self, artifacts: List[StoredArtifact]) -> str:
        """HTML body with one titled preview and link per artifact."""
        items = []
        for artifact in artifacts:
            title = escape(artifact.role.display_title)
            url = escape(artifact.url, quote=True)
            items.append(
                f"""
            <li style="margin-bottom: 20px;">
                <strong style="display: block; margin-bottom: 5px;">{title}</strong>
                <a href="{url}" target="_blank">
                    <img src="{url}" alt="{title}" style="max-width: 400px; height: auto; border: 1px solid #ddd; border-radius: 4px;">
                </a>
                <br>
                <a href="{url}" target="_blank" style="font-size: 14px;">View full size</a>
            </li>"""
            )

        return (
            "<h1>Your AI Balcony Glazing Proposals are Ready!</h1>"
            "<p>Thank you for using our service. You can view your generated "
            "images using the links below.</p>"
            f"<ul>{''.join(items)}</ul>"
            "<p>Best regards,<br/>The AI Balcony Glazing Team</p>"
        )

    def build_payload(self, requester: Requester, artifacts: List[StoredArtifact]) -> dict:
        recipient = {"email": requester.email}
        full_name = " ".join(n for n in (requester.first_name, requester.last_name) if n)
        if full_name:
            recipient["name"] = full_name

        return {
            "sender": {"name": self.sender_name, "email": self.sender_email},
            "to": [recipient],
            "subject": EMAIL_SUBJECT,
            "htmlContent": self.render_html(artifacts),
        }

    async def send_results(
        self,
        requester: Requester,
        artifacts: List[StoredArtifact],
    ) -> Optional[str]:
        """
        Email the artifact links to the requester.

        Without an API key the links are only logged, except in production
        where a missing key is a configuration error.

        Returns:
            Brevo message ID, or None when sending was skipped or the
            reply carried no id

        Raises:
            ConfigurationError: Missing API key in production
            EmailDeliveryError: If Brevo rejects the request
        """
        if not self.api_key:
            logger.warning(
                "BREVO_API_KEY is not set, email not sent",
                extra={
                    "recipient": requester.email,
                    "urls": [a.url for a in artifacts],
                }
            )
            if self.production:
                raise ConfigurationError("Email service is not configured.")
            return None

        self._ensure_client()

        try:
            response = await self.client.post(
                f"{self.base_url}/smtp/email",
                json=self.build_payload(requester, artifacts),
            )
            self._handle_response_errors(response)
        except (httpx.HTTPError, ProviderError) as e:
            raise EmailDeliveryError(f"Failed to send results email: {e}")

        # Accepted by Brevo at this point
        try:
            body = response.json()
        except ValueError:
            body = None
        message_id = body.get("messageId") if isinstance(body, dict) else None
        logger.info(
            f"Email sent successfully to {requester.email}",
            extra={"message_id": message_id}
        )
        return message_id
