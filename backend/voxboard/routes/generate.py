"""
Voxboard Backend - Text Generation Route
=========================================

What:  POST /generate asks the generative model about a topic.
How:   The topic is embedded in a fixed prompt by the TextGenerator; retries
       and error mapping happen there (GenerationError -> 500).
"""

from fastapi import APIRouter, Depends

from voxboard.dependencies import get_text_generator
from voxboard.exceptions import ValidationError
from voxboard.schemas.common import ApiResponse, ErrorResponse
from voxboard.schemas.generate import GenerateRequest, GenerateResponse
from voxboard.services.llm_base import TextGenerator

router = APIRouter(tags=["Generate"])


@router.post(
    "/generate",
    response_model=ApiResponse[GenerateResponse],
    responses={
        400: {"description": "Topic missing", "model": ErrorResponse},
        500: {"description": "Model call failed", "model": ErrorResponse},
    },
    summary="Generate text about a topic",
)
async def generate(
    body: GenerateRequest,
    generator: TextGenerator = Depends(get_text_generator),
):
    if not body.topic or not body.topic.strip():
        raise ValidationError(message="Topic is required", field="topic")

    text = await generator.generate(body.topic)
    return ApiResponse(
        message="Content generated successfully",
        data=GenerateResponse(response=text),
    )
