# model/api.py
from typing import Literal
from pydantic import BaseModel, Field, field_validator
from core.coverage import EvidenceMeta, SourceCoverage
from core.entities import NotificationRequest, StructuredAnswer, ValidationFailure
from model.approach import Approach
from model.evidence import EvidenceChunk, SourceDetail


class CompilePromptRequest(BaseModel):
    query_text: str = Field(min_length=1)
    chunks: list[EvidenceChunk] = Field(default_factory=list)
    sources: list[SourceDetail] = Field(default_factory=list)
    project_type: str | None = None
    approach: Approach | None = None

    @field_validator("query_text")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("query_text must not be blank")
        return v


class CompilePromptResponse(BaseModel):
    prompt: str
    evidenceIds: list[str]


class ValidateResponseRequest(BaseModel):
    # chunks must be the exact set the prompt was compiled from
    raw: str
    chunks: list[EvidenceChunk] = Field(default_factory=list)
    # source types drive primary-law coverage scoring
    sources: list[SourceDetail] = Field(default_factory=list)


class ValidateResponseResponse(BaseModel):
    ok: bool
    retryable: bool = False
    answer: StructuredAnswer | None = None
    failure: ValidationFailure | None = None
    evidenceIndex: dict[str, EvidenceMeta] | None = None
    coverage: SourceCoverage | None = None
    retryFeedback: str | None = None


Audience = Literal["owner", "collaborator"]


class PlanNotificationRequest(BaseModel):
    recipientId: str = Field(min_length=1)
    actorId: str = Field(min_length=1)
    documentId: str = Field(min_length=1)
    documentType: str = Field(min_length=1)
    audience: Audience = "owner"


class PlanNotificationResponse(BaseModel):
    suppressed: bool
    dedupeKey: str | None = None
    notification: NotificationRequest | None = None
