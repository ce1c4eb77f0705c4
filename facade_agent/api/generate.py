"""Image generation endpoint for the facade form."""

import json
from typing import List, Optional

import httpx
from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from ..core.delivery import DeliveryService
from ..core.orchestrator import GenerationOrchestrator
from ..models.schemas import (
    GenerateImagesResponse,
    GenerationRequest,
    ImageInput,
    ModernizationChoices,
    Requester,
)
from ..utils.errors import FacadeAgentError, InputError
from ..utils.image_inspector import ImageInspector
from ..utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()

_inspector = ImageInspector()


# ============================================================================
# DEPENDENCIES
# ============================================================================

async def get_orchestrator(request: Request) -> GenerationOrchestrator:
    """Dependency to get the generation orchestrator from app state."""
    return request.app.state.orchestrator


async def get_delivery(request: Request) -> DeliveryService:
    """Dependency to get the delivery service from app state."""
    return request.app.state.delivery


# ============================================================================
# REQUEST PARSING
# ============================================================================

def parse_options(raw: Optional[str]) -> List[str]:
    """
    Parse the JSON-encoded option list sent by the form.

    Raises:
        InputError: If the field is not a JSON array of strings
    """
    try:
        options = json.loads(raw or "[]")
    except json.JSONDecodeError:
        raise InputError("modernizationChoices must be a JSON array.")

    if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
        raise InputError("modernizationChoices must be a JSON array of strings.")
    return options


async def read_image(upload: Optional[UploadFile], field_name: str) -> Optional[ImageInput]:
    if upload is None:
        return None
    data = await upload.read()
    return _inspector.inspect(data, upload.content_type, field_name)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


# ============================================================================
# ENDPOINT
# ============================================================================

@router.post("/generate-images", response_model=GenerateImagesResponse)
async def generate_images(
    background_tasks: BackgroundTasks,
    facade_image: Optional[UploadFile] = File(None, alias="facadeImage"),
    balcony_image: Optional[UploadFile] = File(None, alias="balconyImage"),
    email: str = Form(...),
    first_name: Optional[str] = Form(None, alias="firstName"),
    last_name: Optional[str] = Form(None, alias="lastName"),
    housing_company: Optional[str] = Form(None, alias="housingCompany"),
    phone_number: Optional[str] = Form(None, alias="phoneNumber"),
    modernization_choices: Optional[str] = Form(None, alias="modernizationChoices"),
    facade_color: Optional[str] = Form(None, alias="facadeColor"),
    railing_material: Optional[str] = Form(None, alias="railingMaterial"),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
    delivery: DeliveryService = Depends(get_delivery),
):
    """
    Generate the facade proposals and return their download links.

    The results email and CRM submission run after the response is sent.
    """
    logger.info("Received request for /generate-images")

    if facade_image is None:
        return error_response(400, "Facade image is required.")

    try:
        generation_request = GenerationRequest(
            primary=await read_image(facade_image, "facadeImage"),
            secondary=await read_image(balcony_image, "balconyImage"),
            choices=ModernizationChoices(
                options=frozenset(parse_options(modernization_choices)),
                facade_color=facade_color,
                railing_material=railing_material,
            ),
        )
    except InputError as e:
        logger.warning("Rejected request", extra={"error": str(e)})
        return error_response(400, str(e))

    requester = Requester(
        email=email,
        first_name=first_name,
        last_name=last_name,
        housing_company=housing_company,
        phone_number=phone_number,
    )

    try:
        outcome = await orchestrator.generate(generation_request)
        artifacts = await delivery.store(outcome, requester)
    except (FacadeAgentError, httpx.HTTPError) as e:
        logger.error(
            f"Error during image processing: {e}",
            extra={"error": str(e), "error_type": type(e).__name__}
        )
        return error_response(500, str(e) or "An internal server error occurred.")

    background_tasks.add_task(delivery.notify, requester, artifacts)

    return GenerateImagesResponse(urls=[a.url for a in artifacts])
