"""Abstract base class for API providers."""

from abc import ABC, abstractmethod
import httpx
from typing import List, Optional, Protocol

from ..models.enums import ResponseModality
from ..models.schemas import ImageInput, ModelResponse
from ..utils.logger import get_logger
from ..utils.errors import ProviderError, AuthenticationError, RateLimitError

logger = get_logger(__name__)


class ModelClient(Protocol):
    """Anything that can run one image edit against the generative model."""

    async def invoke(
        self,
        image: ImageInput,
        prompt: str,
        response_modalities: List[ResponseModality],
    ) -> ModelResponse:
        ...


class BaseProvider(ABC):
    """Abstract base class for all API providers."""

    provider_name = "provider"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize provider.

        Args:
            api_key: API key for authentication
            base_url: Base URL for API endpoints
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def initialize(self):
        """Initialize the HTTP client."""
        if self.client is None:
            self.client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._get_default_headers(),
                transport=self.transport,
            )
            logger.info(
                f"{self.__class__.__name__} initialized",
                extra={"provider": self.__class__.__name__}
            )

    async def close(self):
        """Close the HTTP client."""
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.info(
                f"{self.__class__.__name__} closed",
                extra={"provider": self.__class__.__name__}
            )

    @abstractmethod
    def _get_default_headers(self) -> dict:
        """Get default headers for requests."""
        pass

    def _ensure_client(self):
        """Ensure client is initialized."""
        if self.client is None:
            raise RuntimeError(
                f"{self.__class__.__name__} not initialized. "
                "Call initialize() or use as async context manager."
            )

    def _handle_response_errors(self, response: httpx.Response):
        """Map HTTP error statuses to provider errors."""
        if response.status_code in (401, 403):
            raise AuthenticationError(self.provider_name)
        elif response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                self.provider_name,
                int(retry_after) if retry_after and retry_after.isdigit() else None
            )
        elif response.status_code >= 400:
            raise self._error_for_status(response)

    def _error_for_status(self, response: httpx.Response) -> ProviderError:
        return ProviderError(
            self.provider_name,
            self._extract_error_message(response),
            response.status_code,
        )

    def _extract_error_message(self, response: httpx.Response) -> str:
        try:
            error_data = response.json()
            error_message = error_data.get("error", {}).get("message") or response.text
        except (ValueError, AttributeError):
            error_message = response.text

        logger.error(
            f"{self.provider_name} request failed",
            extra={
                "provider": self.provider_name,
                "status_code": response.status_code,
                "error": error_message,
            }
        )
        return error_message
