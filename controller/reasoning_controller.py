# controller/reasoning_controller.py
from fastapi import APIRouter, Depends, status
from controller.controller_dependencies import RATE_LIMITED, get_reasoning_service
from model.api import (
    CompilePromptRequest,
    CompilePromptResponse,
    ValidateResponseRequest,
    ValidateResponseResponse,
)
from service.reasoning_service import ReasoningService
from util.constants import InternalURIs

reasoning_router = APIRouter(dependencies=RATE_LIMITED)


@reasoning_router.post(
    InternalURIs.COMPILE_PROMPT,
    response_model=CompilePromptResponse,
    status_code=status.HTTP_200_OK,
)
async def compile_prompt(
    payload: CompilePromptRequest,
    service: ReasoningService = Depends(get_reasoning_service),
) -> CompilePromptResponse:
    return service.compile(
        payload.query_text,
        payload.chunks,
        payload.sources,
        project_type=payload.project_type,
        approach=payload.approach,
    )


@reasoning_router.post(
    InternalURIs.VALIDATE_RESPONSE,
    response_model=ValidateResponseResponse,
    status_code=status.HTTP_200_OK,
)
async def validate_response(
    payload: ValidateResponseRequest,
    service: ReasoningService = Depends(get_reasoning_service),
) -> ValidateResponseResponse:
    # Rejected answers are a normal outcome (ok=false), not an HTTP error.
    return service.validate(payload.raw, payload.chunks, payload.sources)
