"""
Estimate Endpoints.

AI generated construction estimates, the regional pricing reference they are
grounded on, and the image preparation helpers used before and after model
calls on project photos.
"""

import asyncio
from typing import List

from fastapi import APIRouter, Query

from cdi_platform.ai import GeneratedEstimate
from cdi_platform.ai.images import (
    ImageProcessingError,
    crop_to_original_aspect_ratio,
    decode_data_url,
    image_dimensions,
    mark_image,
    resize_to_square,
    to_data_url,
)
from cdi_platform.ai.pricing import (
    TASKS,
    TaskCostEstimate,
    estimate_task_cost,
    find_matching_task,
    regional_multiplier,
    task_categories,
)
from cdi_platform.core.errors import ValidationError
from cdi_platform.core.logging_config import get_logger
from cdi_platform.server.deps import GeneratorDep
from cdi_platform.server.schemas import (
    CompletionRequest,
    CompletionResponse,
    CropRequest,
    EstimateFromDescription,
    EstimateFromImages,
    ImageRequest,
    ImageResponse,
    MarkRequest,
    TaskMatchResponse,
)

logger = get_logger(__name__)

router = APIRouter()

_ESTIMATE_RESPONSES = {
    400: {"description": "Invalid image payload"},
    502: {"description": "Model call failed or returned unparseable output"},
    503: {"description": "No model configured"},
}


def _decode(data_url: str) -> bytes:
    try:
        _, data = decode_data_url(data_url)
    except ImageProcessingError as e:
        logger.info(f"Rejected image payload: {e}")
        raise ValidationError(str(e)) from e
    return data


async def _image_response(func, *args) -> ImageResponse:
    try:
        data = await asyncio.to_thread(func, *args)
        width, height = await asyncio.to_thread(image_dimensions, data)
    except ImageProcessingError as e:
        raise ValidationError(str(e)) from e
    return ImageResponse(image=to_data_url(data), width=width, height=height)


@router.post(
    "/generate",
    response_model=GeneratedEstimate,
    response_model_by_alias=True,
    summary="Generate Estimate",
    description="Generate a line-item estimate from a written project description and ZIP code.",
    response_description="Estimate as returned by the model, validated.",
    responses=_ESTIMATE_RESPONSES,
)
async def generate_estimate(body: EstimateFromDescription, generator: GeneratorDep) -> GeneratedEstimate:
    return await generator.from_description(body.description, body.zip_code)


@router.post(
    "/generate-from-images",
    response_model=GeneratedEstimate,
    response_model_by_alias=True,
    summary="Generate Estimate From Photos",
    description="Generate an estimate from a description plus project photos. "
    "Photos are letterboxed into a 1024px square before upload; with no photos the text-only flow is used.",
    response_description="Estimate as returned by the model, validated.",
    responses=_ESTIMATE_RESPONSES,
)
async def generate_estimate_from_images(body: EstimateFromImages, generator: GeneratorDep) -> GeneratedEstimate:
    images = [_decode(image) for image in body.images]
    try:
        return await generator.from_images(body.description, body.zip_code, images)
    except ImageProcessingError as e:
        raise ValidationError(str(e)) from e


@router.post(
    "/complete",
    response_model=CompletionResponse,
    summary="Free-form Completion",
    description="Send a prompt to the estimating model and return its text.",
    response_description="Model output text.",
    responses={502: {"description": "Model call failed"}, 503: {"description": "No model configured"}},
)
async def complete(body: CompletionRequest, generator: GeneratorDep) -> CompletionResponse:
    return CompletionResponse(text=await generator.complete(body.prompt))


@router.get(
    "/pricing/task",
    response_model=TaskCostEstimate,
    summary="Price A Task",
    description="Regional unit-cost estimate for a known task; unknown tasks use a flat default rate.",
    response_description="Priced task with a low/average/high range.",
)
async def price_task(
    task_name: str = Query(..., description="Task name, e.g. 'Interior Painting'"),
    zip_code: str = Query(..., description="Project ZIP code"),
    quantity: float = Query(..., ge=0, description="Units of work"),
) -> TaskCostEstimate:
    return estimate_task_cost(task_name, zip_code, quantity)


@router.get(
    "/pricing/multiplier",
    summary="Get Regional Multiplier",
    description="Cost multiplier applied for the region a ZIP code falls in.",
    response_description="ZIP code and multiplier.",
)
async def get_regional_multiplier(zip_code: str = Query(..., description="Project ZIP code")):
    return {"zip_code": zip_code, "multiplier": regional_multiplier(zip_code)}


@router.get(
    "/pricing/match",
    response_model=TaskMatchResponse,
    summary="Match Task",
    description="Map a free-text work description to a known pricing task by keyword.",
    response_description="Matched task, or nulls when no keyword matches.",
)
async def match_task(description: str = Query(..., min_length=1, description="Work description")) -> TaskMatchResponse:
    key = find_matching_task(description)
    if key is None:
        return TaskMatchResponse()
    name, category, _ = TASKS[key]
    return TaskMatchResponse(task_key=key, task_name=name, category=category)


@router.get(
    "/pricing/categories",
    response_model=List[str],
    summary="List Task Categories",
    description="Distinct categories of the tasks the pricing reference knows.",
    response_description="Sorted category names.",
)
async def list_task_categories() -> List[str]:
    return task_categories()


@router.post(
    "/images/square",
    response_model=ImageResponse,
    summary="Letterbox Image",
    description="Fit a photo inside a black square without cropping.",
    response_description="Padded JPEG.",
    responses={400: {"description": "Invalid image"}},
)
async def square_image(body: ImageRequest) -> ImageResponse:
    return await _image_response(resize_to_square, _decode(body.image), body.target_dimension)


@router.post(
    "/images/crop",
    response_model=ImageResponse,
    summary="Crop To Original Aspect Ratio",
    description="Remove the letterbox padding from a square image.",
    response_description="Cropped JPEG.",
    responses={400: {"description": "Invalid image"}},
)
async def crop_image(body: CropRequest) -> ImageResponse:
    return await _image_response(
        crop_to_original_aspect_ratio,
        _decode(body.image),
        body.original_width,
        body.original_height,
        body.target_dimension,
    )


@router.post(
    "/images/mark",
    response_model=ImageResponse,
    summary="Mark Image",
    description="Draw a red, white-outlined dot on a padded square image at a position given relative to the original photo.",
    response_description="Marked JPEG.",
    responses={400: {"description": "Invalid image"}},
)
async def mark(body: MarkRequest) -> ImageResponse:
    return await _image_response(
        mark_image,
        _decode(body.image),
        body.x_percent,
        body.y_percent,
        body.original_width,
        body.original_height,
    )
