"""Generation orchestrator coordinating the concurrent image edits."""

import asyncio
import time
from typing import Dict, List

from .assembler import assemble_outcome
from .prompt_builder import build_prompts
from .response_interpreter import interpret_response
from ..models.enums import ArtifactRole
from ..models.schemas import (
    GenerationOutcome,
    GenerationRequest,
    ImagePayload,
    ModelInvocation,
    ModelResponse,
)
from ..providers.base import ModelClient
from ..utils.errors import ModelContentError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class GenerationOrchestrator:
    """Runs every edit of a request concurrently and assembles the result."""

    def __init__(self, model_client: ModelClient):
        """
        Initialize orchestrator.

        Args:
            model_client: Client used for every model invocation
        """
        self.client = model_client

    def plan(self, request: GenerationRequest) -> List[ModelInvocation]:
        """
        Build one invocation per requested artifact.

        Glazing and modernization always run on the facade photo; the cozy
        balcony edit is planned only when a balcony photo was supplied.
        """
        prompts = build_prompts(request.choices, request.has_secondary)

        invocations = [
            ModelInvocation(
                role=ArtifactRole.GLAZED,
                image=request.primary,
                prompt=prompts.glazing,
            ),
            ModelInvocation(
                role=ArtifactRole.MODERNIZED,
                image=request.primary,
                prompt=prompts.modernization,
            ),
        ]

        if request.secondary is not None:
            invocations.append(
                ModelInvocation(
                    role=ArtifactRole.COZY,
                    image=request.secondary,
                    prompt=prompts.cozy_balcony,
                )
            )

        return invocations

    async def invoke_single(self, invocation: ModelInvocation) -> ModelResponse:
        """Send one invocation to the model client."""
        logger.info(
            f"Invoking image model for {invocation.role.value}",
            extra={
                "role": invocation.role.value,
                "mime_type": invocation.image.mime_type,
                "image_size_kb": len(invocation.image.data) / 1024,
                "prompt_length": len(invocation.prompt),
            }
        )
        return await self.client.invoke(
            invocation.image,
            invocation.prompt,
            invocation.response_modalities,
        )

    def _interpret(self, role: ArtifactRole, response: ModelResponse) -> ImagePayload:
        try:
            payload = interpret_response(response)
        except ModelContentError as e:
            logger.error(
                f"Model returned no usable image for {role.value}",
                extra={
                    "role": role.value,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            raise

        logger.info(
            f"Image received for {role.value}",
            extra={
                "role": role.value,
                "mime_type": payload.mime_type,
                "bytes_size": len(payload.data),
            }
        )
        return payload

    async def generate(self, request: GenerationRequest) -> GenerationOutcome:
        """
        Produce every artifact of a request.

        All invocations are put in flight before any is awaited. Glazing and
        modernization are awaited jointly and interpreted first, then the
        cozy balcony edit if one was launched. Any failure aborts the whole
        request; no partial outcome is returned.

        Args:
            request: Validated generation request

        Returns:
            GenerationOutcome with two or three images

        Raises:
            ModelContentError: If any response carries no usable image
            ProviderError, httpx.HTTPError: Transport failures, unmodified
        """
        start_time = time.time()
        invocations = self.plan(request)

        logger.info(
            f"Starting generation of {len(invocations)} images",
            extra={"roles": [inv.role.value for inv in invocations]}
        )

        tasks: Dict[ArtifactRole, asyncio.Task] = {
            inv.role: asyncio.create_task(self.invoke_single(inv))
            for inv in invocations
        }

        try:
            glazing_response, modernization_response = await asyncio.gather(
                tasks[ArtifactRole.GLAZED],
                tasks[ArtifactRole.MODERNIZED],
            )
            glazed = self._interpret(ArtifactRole.GLAZED, glazing_response)
            modernized = self._interpret(ArtifactRole.MODERNIZED, modernization_response)

            cozy = None
            if ArtifactRole.COZY in tasks:
                cozy_response = await tasks[ArtifactRole.COZY]
                cozy = self._interpret(ArtifactRole.COZY, cozy_response)

        except BaseException:
            for task in tasks.values():
                task.cancel()
            await asyncio.gather(*tasks.values(), return_exceptions=True)
            raise

        outcome = assemble_outcome(glazed, modernized, cozy)

        logger.info(
            "Generation complete",
            extra={
                "artifacts": list(outcome.as_mapping().keys()),
                "processing_time_seconds": time.time() - start_time,
            }
        )
        return outcome
