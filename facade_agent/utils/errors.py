"""Custom exception classes for the facade agent."""


class FacadeAgentError(Exception):
    """Base exception for all agent errors."""
    pass


class ConfigurationError(FacadeAgentError):
    """Configuration or initialization errors."""
    pass


class InputError(FacadeAgentError):
    """Client-side fault in the incoming request."""
    pass


class ImageProcessingError(InputError):
    """Uploaded image could not be decoded."""
    pass


class APIError(FacadeAgentError):
    """Base class for API-related errors."""
    pass


class ProviderError(APIError):
    """Generic provider API error with status code."""

    def __init__(self, provider: str, message: str, status_code: int = None):
        self.provider = provider
        self.status_code = status_code
        super().__init__(f"{provider} error: {message}")


class AuthenticationError(ProviderError):
    """API authentication failed."""

    def __init__(self, provider: str):
        super().__init__(provider, "Authentication failed", 401)


class RateLimitError(ProviderError):
    """API rate limit exceeded."""

    def __init__(self, provider: str, retry_after: int = None):
        self.retry_after = retry_after
        message = "Rate limit exceeded"
        if retry_after:
            message += f", retry after {retry_after}s"
        super().__init__(provider, message, 429)


class GeminiError(ProviderError):
    """Gemini API errors."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__("gemini", message, status_code)


class StorageError(APIError):
    """Blob upload or URL signing failed."""
    pass


class EmailDeliveryError(APIError):
    """Results email could not be sent."""
    pass


class CRMError(APIError):
    """CRM form submission failed."""
    pass


class GenerationError(FacadeAgentError):
    """Errors during image generation."""
    pass


class ModelContentError(GenerationError):
    """The model answered, but not with a usable image."""
    pass


class BlockedBySafety(ModelContentError):
    """The prompt was blocked before any candidate was produced."""

    def __init__(self, block_reason: str):
        self.block_reason = block_reason
        super().__init__(
            f"Image processing was blocked for safety reasons: {block_reason}. "
            "Please try another image."
        )


class NoCandidate(ModelContentError):
    """The model returned no candidates."""

    def __init__(self):
        super().__init__(
            "The AI did not return a response. "
            "Please try again or use a different image."
        )


class AbnormalFinish(ModelContentError):
    """Candidate generation stopped for a reason other than STOP."""

    def __init__(self, category, finish_reason: str):
        self.category = category
        self.finish_reason = finish_reason
        super().__init__(
            "The AI could not process the image. "
            f"Reason: {category.describe(finish_reason)} Please try another image."
        )


class EmptyContent(ModelContentError):
    """Candidate carried no content parts."""

    def __init__(self):
        super().__init__(
            "The AI returned an empty response. "
            "Please try again or use a different image."
        )


class TextualRefusal(ModelContentError):
    """Model explained in text why it produced no image."""

    def __init__(self, explanation: str):
        self.explanation = explanation
        super().__init__(
            f"The AI could not process the image. Reason: {explanation}. "
            "Please try another image."
        )


class NoImageNoExplanation(ModelContentError):
    """No image part and no usable text."""

    def __init__(self):
        super().__init__(
            "The AI did not return an image and provided no explanation. "
            "Please try another image or try again later."
        )
