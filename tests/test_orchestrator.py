"""Tests for the generation orchestrator."""

import asyncio

import httpx
import pytest

from facade_agent.core.orchestrator import GenerationOrchestrator
from facade_agent.core.prompt_builder import COLOR_PHRASES, GLAZING_PROMPT, MATERIAL_PHRASES
from facade_agent.models.enums import ArtifactRole, FacadeColor, FinishCategory, RailingMaterial, ResponseModality
from facade_agent.models.schemas import GenerationRequest, ModelResponse, ModernizationChoices
from facade_agent.utils.errors import AbnormalFinish, NoCandidate, TextualRefusal

from fakes import FakeModelClient, image_response


def abnormal(reason: str) -> ModelResponse:
    return ModelResponse.model_validate({"candidates": [{"finishReason": reason}]})


def refusal(text: str) -> ModelResponse:
    return ModelResponse.model_validate(
        {"candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": "STOP"}]}
    )


class TestPlanning:
    """Invocations per request."""

    def test_two_invocations_without_balcony(self, facade_image):
        plan = GenerationOrchestrator(FakeModelClient()).plan(
            GenerationRequest(primary=facade_image)
        )
        assert [inv.role for inv in plan] == [ArtifactRole.GLAZED, ArtifactRole.MODERNIZED]
        assert all(inv.image == facade_image for inv in plan)

    def test_cozy_runs_on_balcony_image(self, facade_image, balcony_image):
        plan = GenerationOrchestrator(FakeModelClient()).plan(
            GenerationRequest(primary=facade_image, secondary=balcony_image)
        )
        assert [inv.role for inv in plan] == [
            ArtifactRole.GLAZED, ArtifactRole.MODERNIZED, ArtifactRole.COZY,
        ]
        assert plan[2].image == balcony_image

    def test_requests_image_and_text(self, facade_image):
        plan = GenerationOrchestrator(FakeModelClient()).plan(
            GenerationRequest(primary=facade_image)
        )
        assert all(
            inv.response_modalities == [ResponseModality.IMAGE, ResponseModality.TEXT]
            for inv in plan
        )


class TestGeneration:
    """End-to-end orchestration against a fake model."""

    @pytest.mark.asyncio
    async def test_facade_only_railings(self, facade_image):
        client = FakeModelClient()
        request = GenerationRequest(
            primary=facade_image,
            choices=ModernizationChoices(
                options=frozenset(["railings"]),
                railing_material="wood-slats",
            ),
        )

        outcome = await GenerationOrchestrator(client).generate(request)

        assert len(client.calls) == 2
        assert sorted(client.roles()) == sorted([ArtifactRole.GLAZED, ArtifactRole.MODERNIZED])
        assert MATERIAL_PHRASES[RailingMaterial.WOOD_SLATS] in client.prompt_for(ArtifactRole.MODERNIZED)
        assert client.prompt_for(ArtifactRole.GLAZED) == GLAZING_PROMPT

        mapping = outcome.as_mapping()
        assert set(mapping) == {"glazedImage", "modernizedImage"}
        assert "cozyBalconyImage" not in mapping
        assert mapping["glazedImage"] == b"glazed-result"
        assert mapping["modernizedImage"] == b"modernized-result"
        assert outcome.cozy_balcony_image is None

    @pytest.mark.asyncio
    async def test_all_three_concurrently(self, facade_image, balcony_image):
        client = FakeModelClient(delays={
            ArtifactRole.GLAZED: 0.05,
            ArtifactRole.MODERNIZED: 0.05,
            ArtifactRole.COZY: 0.05,
        })
        request = GenerationRequest(
            primary=facade_image,
            secondary=balcony_image,
            choices=ModernizationChoices(
                options=frozenset(["facade", "railings"]),
                facade_color="beige",
                railing_material="dark-metal",
            ),
        )

        outcome = await GenerationOrchestrator(client).generate(request)

        assert len(client.calls) == 3
        assert client.max_in_flight == 3
        latest_start = max(c["started"] for c in client.calls)
        earliest_finish = min(c["finished"] for c in client.calls)
        assert latest_start < earliest_finish

        modernization_prompt = client.prompt_for(ArtifactRole.MODERNIZED)
        assert COLOR_PHRASES[FacadeColor.BEIGE] in modernization_prompt
        assert MATERIAL_PHRASES[RailingMaterial.DARK_METAL] in modernization_prompt
        assert MATERIAL_PHRASES[RailingMaterial.DARK_METAL] in client.prompt_for(ArtifactRole.COZY)

        assert set(outcome.as_mapping()) == {"glazedImage", "modernizedImage", "cozyBalconyImage"}
        assert outcome.cozy_balcony_image.data == b"cozy-result"

    @pytest.mark.asyncio
    async def test_total_latency_bounded_by_slowest_call(self, facade_image, balcony_image):
        client = FakeModelClient(delays={
            ArtifactRole.GLAZED: 0.2,
            ArtifactRole.MODERNIZED: 0.2,
            ArtifactRole.COZY: 0.2,
        })
        loop = asyncio.get_running_loop()
        start = loop.time()

        await GenerationOrchestrator(client).generate(
            GenerationRequest(primary=facade_image, secondary=balcony_image)
        )

        assert loop.time() - start < 0.5

    @pytest.mark.asyncio
    async def test_images_keep_model_bytes(self, facade_image):
        client = FakeModelClient(responses={
            ArtifactRole.GLAZED: image_response(b"\x89PNG-glazed", "image/png"),
            ArtifactRole.MODERNIZED: image_response(b"\xff\xd8-modern", "image/jpeg"),
        })

        outcome = await GenerationOrchestrator(client).generate(
            GenerationRequest(primary=facade_image)
        )

        assert outcome.glazed_image.data == b"\x89PNG-glazed"
        assert outcome.modernized_image.mime_type == "image/jpeg"


class TestFailurePropagation:
    """Any failed artifact fails the whole request."""

    @pytest.mark.asyncio
    async def test_modernization_safety_finish_fails_request(self, facade_image):
        client = FakeModelClient(responses={ArtifactRole.MODERNIZED: abnormal("SAFETY")})

        with pytest.raises(AbnormalFinish) as exc_info:
            await GenerationOrchestrator(client).generate(
                GenerationRequest(primary=facade_image)
            )

        assert exc_info.value.category is FinishCategory.SAFETY
        assert len(client.calls) == 2

    @pytest.mark.asyncio
    async def test_cozy_failure_fails_request(self, facade_image, balcony_image):
        client = FakeModelClient(responses={ArtifactRole.COZY: refusal("No balcony visible")})

        with pytest.raises(TextualRefusal, match="No balcony visible"):
            await GenerationOrchestrator(client).generate(
                GenerationRequest(primary=facade_image, secondary=balcony_image)
            )

    @pytest.mark.asyncio
    async def test_glazing_failure_reported_before_modernization(self, facade_image):
        client = FakeModelClient(responses={
            ArtifactRole.GLAZED: ModelResponse.model_validate({"candidates": []}),
            ArtifactRole.MODERNIZED: abnormal("SAFETY"),
        })

        with pytest.raises(NoCandidate):
            await GenerationOrchestrator(client).generate(
                GenerationRequest(primary=facade_image)
            )

    @pytest.mark.asyncio
    async def test_transport_error_propagates_unmodified(self, facade_image):
        error = httpx.ConnectError("connection refused")
        client = FakeModelClient(responses={ArtifactRole.GLAZED: error})

        with pytest.raises(httpx.ConnectError) as exc_info:
            await GenerationOrchestrator(client).generate(
                GenerationRequest(primary=facade_image)
            )

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_pending_cozy_call_is_cancelled_on_failure(self, facade_image, balcony_image):
        client = FakeModelClient(
            responses={ArtifactRole.MODERNIZED: abnormal("MAX_TOKENS")},
            delays={ArtifactRole.COZY: 5.0},
        )

        with pytest.raises(AbnormalFinish):
            await asyncio.wait_for(
                GenerationOrchestrator(client).generate(
                    GenerationRequest(primary=facade_image, secondary=balcony_image)
                ),
                timeout=2.0,
            )

        assert client.cancelled == [ArtifactRole.COZY]
