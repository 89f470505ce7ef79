# lumina/api/routes/interpret_routes.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from lumina.core.config import Settings, get_settings
from lumina.core.dependencies import get_text_generator
from lumina.core.exceptions import InterpretationServiceError
from lumina.models.interpret_models import ErrorResponse, InterpretationRequest, InterpretationResponse
from lumina.services.interpretation_services import TextGenerator, interpret_reading

router = APIRouter()


@router.post(
    "/interpret",
    response_model=InterpretationResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def interpret(
    request: InterpretationRequest,
    settings: Settings = Depends(get_settings),
    generator: Optional[TextGenerator] = Depends(get_text_generator),
):
    """
    Interpret a Past/Present/Future spread in the context of the querent's question.
    """
    try:
        interpretation = await interpret_reading(request, settings, generator)
    except InterpretationServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return InterpretationResponse(interpretation=interpretation)
