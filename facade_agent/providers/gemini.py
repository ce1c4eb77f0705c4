"""Gemini API client for image editing."""

import base64
from typing import List, Optional
import httpx
from pydantic import ValidationError

from .base import BaseProvider
from ..models.enums import ResponseModality
from ..models.schemas import ImageInput, ModelResponse
from ..utils.logger import get_logger
from ..utils.errors import GeminiError, ProviderError

logger = get_logger(__name__)


class GeminiClient(BaseProvider):
    """Client for the Gemini generateContent endpoint."""

    provider_name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash-image",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key
            model: Image editing model name
            base_url: API root
            timeout: Request timeout in seconds; the only bound on a model call
            transport: Optional httpx transport
        """
        super().__init__(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )
        self.model = model

    def _get_default_headers(self) -> dict:
        return {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    def build_payload(
        self,
        image: ImageInput,
        prompt: str,
        response_modalities: List[ResponseModality],
    ) -> dict:
        """Request body: the image part followed by the instruction text."""
        return {
            "contents": [
                {
                    "parts": [
                        {
                            "inlineData": {
                                "mimeType": image.mime_type,
                                "data": base64.b64encode(image.data).decode("utf-8"),
                            }
                        },
                        {"text": prompt},
                    ]
                }
            ],
            "generationConfig": {
                "responseModalities": [m.value for m in response_modalities],
            },
        }

    async def invoke(
        self,
        image: ImageInput,
        prompt: str,
        response_modalities: List[ResponseModality],
    ) -> ModelResponse:
        """
        Run one image edit.

        No retry is attempted; the caller decides whether to re-run the
        whole request.

        Returns:
            Parsed ModelResponse (may still carry a block or refusal)

        Raises:
            AuthenticationError, RateLimitError, GeminiError: HTTP failures
            httpx.HTTPError: Network failures and timeouts
        """
        self._ensure_client()

        response = await self.client.post(
            f"{self.base_url}/models/{self.model}:generateContent",
            json=self.build_payload(image, prompt, response_modalities),
        )

        self._handle_response_errors(response)

        try:
            data = response.json()
        except ValueError as e:
            raise GeminiError(f"Invalid JSON in response: {e}", response.status_code)

        if not isinstance(data, dict):
            raise GeminiError(
                f"Unexpected response body of type {type(data).__name__}",
                response.status_code,
            )

        logger.info(
            "Gemini response received",
            extra={
                "model": self.model,
                "candidates": len(data.get("candidates") or []),
                "model_version": data.get("modelVersion"),
            }
        )

        try:
            return ModelResponse.model_validate(data)
        except ValidationError as e:
            raise GeminiError(f"Malformed response: {e}", response.status_code)

    def _error_for_status(self, response: httpx.Response) -> ProviderError:
        return GeminiError(self._extract_error_message(response), response.status_code)
