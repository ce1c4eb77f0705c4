"""Pytest configuration and shared fixtures."""

import pytest

from facade_agent.models.schemas import ImageInput, Requester

from fakes import FakeEmailClient, FakeStorage, make_png


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def facade_image(png_bytes) -> ImageInput:
    return ImageInput(data=png_bytes, mime_type="image/png")


@pytest.fixture
def balcony_image() -> ImageInput:
    return ImageInput(data=make_png((90, 120, 60)), mime_type="image/png")


@pytest.fixture
def requester() -> Requester:
    return Requester(
        email="jane.doe@example.com",
        first_name="Jane",
        last_name="Doe",
        housing_company="As Oy Esimerkki",
        phone_number="+358401234567",
    )


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def fake_email() -> FakeEmailClient:
    return FakeEmailClient()
