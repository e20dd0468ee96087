"""
HealthRisk Assessment API
=========================
POST /api/v1/assessments/submit                 idempotent submission
GET  /api/v1/assessments/{session_id}/report    stored report
GET  /api/v1/assessments/questionnaire-schema   question vocabulary

Errors are returned as {ok: false, code, message} with the SubmissionError
HTTP code (400 VALIDATION, 404 NOT_FOUND, 409 CONFLICT, 500 SERVER_ERROR).
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..assessment.questionnaire import QUESTIONNAIRE_SCHEMA
from ..shared.hashing import fingerprint
from ..submission import IdempotencyGuard, SubmissionError, get_guard, validate_idempotency_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/assessments", tags=["Assessments"])

ANONYMOUS_USER_KEY = "anonymous"


# ============================================
# REQUEST / RESPONSE MODELS
# ============================================

class SubmitRequest(BaseModel):
    """Questionnaire submission."""
    # Shape is checked by the guard so malformed answers map to VALIDATION
    answers: Optional[Any] = Field(None, description="Question key -> scalar answer")
    user_id: Optional[str] = Field(None, description="Explicit caller identifier")
    idempotencyKey: Optional[str] = Field(None, description="Overrides the derived content hash")

    class Config:
        json_schema_extra = {
            "example": {
                "answers": {
                    "age": "42",
                    "family_history": "Yes, I have first-degree relative with BC",
                    "exercise": "No, little or no regular exercise",
                    "last_screening": "Within the last year",
                },
                "user_id": "user_123",
            }
        }


class SubmitResponse(BaseModel):
    ok: bool = True
    session_id: str
    cached: bool


class ErrorResponse(BaseModel):
    ok: bool = False
    code: str
    message: str


def _error_response(error: SubmissionError) -> JSONResponse:
    return JSONResponse(status_code=error.http_code, content=error.to_dict())


# ============================================
# USER KEY
# ============================================

def resolve_user_key(
    user_id: Optional[str],
    session_header: Optional[str],
    client_host: Optional[str],
    user_agent: Optional[str],
) -> str:
    """Explicit user id, else a request-context fingerprint, else anonymous."""
    if user_id and user_id.strip():
        return user_id.strip()
    if session_header and session_header.strip():
        return fingerprint("session", session_header.strip())
    if client_host or user_agent:
        return fingerprint("client", client_host or "", user_agent or "")
    return ANONYMOUS_USER_KEY


# ============================================
# ENDPOINTS
# ============================================

@router.post(
    "/submit",
    response_model=SubmitResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_assessment(
    body: SubmitRequest,
    request: Request,
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
    session_id_header: Optional[str] = Header(None, alias="X-Session-Id"),
    user_agent: Optional[str] = Header(None, alias="User-Agent"),
    guard: IdempotencyGuard = Depends(get_guard),
):
    """
    Submit a questionnaire response.

    Re-submitting identical answers for the same user returns the original
    session id with cached=true.
    """
    try:
        key = validate_idempotency_key(body.idempotencyKey if body.idempotencyKey is not None else idempotency_key)
        user_key = resolve_user_key(
            body.user_id,
            session_id_header,
            request.client.host if request.client else None,
            user_agent,
        )
        result = await guard.submit(user_key, key, body.answers)
    except SubmissionError as e:
        logger.info(f"[SUBMIT] Rejected with {e.error_code.value}: {e.message}")
        return _error_response(e)

    return result.to_dict()


@router.get("/questionnaire-schema")
def get_questionnaire_schema() -> Dict[str, Any]:
    """Question vocabulary for frontend forms."""
    return QUESTIONNAIRE_SCHEMA


@router.get("/{session_id}/report", responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def get_assessment_report(session_id: str, guard: IdempotencyGuard = Depends(get_guard)):
    try:
        return await guard.get_report(session_id)
    except SubmissionError as e:
        return _error_response(e)
