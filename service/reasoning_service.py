# service/reasoning_service.py
import logging
from typing import Optional, Sequence
from core.coverage import build_evidence_index, source_coverage
from core.entities import DEFAULT_CONTRACT, NormalizedEvidence, StructuralContract
from core.evidence_normalizer import normalize_evidence
from core.json_extract import extract_last_json_object
from core.prompt_compiler import compile_prompt
from core.response_validator import validate_response
from core.retry_feedback import build_retry_feedback
from model.api import CompilePromptResponse, ValidateResponseResponse
from model.approach import Approach
from model.evidence import EvidenceChunk, SourceDetail
from util.enums import ErrorMessage
from util.errors import (
    AppError,
    DuplicateEvidenceError,
    EmptyContentError,
    EmptyEvidenceError,
    GroundingInputError,
)
from util.timing import timed

logger = logging.getLogger(__name__)

_INPUT_ERRORS = {
    EmptyEvidenceError: ErrorMessage.EMPTY_EVIDENCE,
    EmptyContentError: ErrorMessage.EMPTY_CONTENT,
    DuplicateEvidenceError: ErrorMessage.DUPLICATE_EVIDENCE,
}


class ReasoningService:
    """
    HTTP-facing wrapper around the pure prompt/validation core.
    Owns logging and error translation; the core does neither.
    """

    def __init__(
        self,
        contract: StructuralContract = DEFAULT_CONTRACT,
        lenient_json: bool = False,
        excerpt_chars: int = 300,
    ) -> None:
        self._contract = contract
        self._lenient_json = lenient_json
        self._excerpt_chars = excerpt_chars

    @staticmethod
    def _normalize(chunks: Sequence[EvidenceChunk]) -> NormalizedEvidence:
        try:
            return normalize_evidence(chunks)
        except GroundingInputError as e:
            info = _INPUT_ERRORS[type(e)].value
            logger.warning("evidence.rejected err=%s", type(e).__name__)
            raise AppError(info.message, info.http_status) from e

    def compile(
        self,
        query_text: str,
        chunks: Sequence[EvidenceChunk],
        sources: Sequence[SourceDetail] = (),
        project_type: Optional[str] = None,
        approach: Optional[Approach] = None,
    ) -> CompilePromptResponse:
        evidence = self._normalize(chunks)
        with timed(logger, "prompt.compile", chunks=len(evidence)):
            prompt = compile_prompt(
                query_text,
                evidence,
                sources=sources,
                contract=self._contract,
                project_type=project_type,
                approach=approach,
            )
        logger.info(
            "prompt.compile.ok chars=%d project_type=%s approach=%s",
            len(prompt),
            project_type,
            approach is not None,
        )
        return CompilePromptResponse(
            prompt=prompt, evidenceIds=[c.id for c in evidence]
        )

    def validate(
        self,
        raw: str,
        chunks: Sequence[EvidenceChunk],
        sources: Sequence[SourceDetail] = (),
    ) -> ValidateResponseResponse:
        evidence = self._normalize(chunks)

        candidate = raw
        if self._lenient_json:
            # Fall back to raw so the validator reports it as malformed.
            candidate = extract_last_json_object(raw) or raw

        with timed(logger, "response.validate", chunks=len(evidence)):
            result = validate_response(candidate, evidence.ids, self._contract)

        if result.failure is not None:
            f = result.failure
            logger.warning(
                "response.rejected kind=%s section=%s paragraph=%s",
                f.kind.value,
                f.section_index,
                f.paragraph_index,
            )
            return ValidateResponseResponse(
                ok=False,
                retryable=True,
                failure=f,
                retryFeedback=build_retry_feedback(f, self._contract),
            )

        answer = result.unwrap()
        coverage = source_coverage(answer, evidence, sources)
        logger.info(
            "response.accepted cited=%d sources_cited=%d/%d quality=%d",
            len(answer.cited_ids()),
            len(coverage.cited_sources),
            len(coverage.cited_sources) + len(coverage.uncited_sources),
            coverage.quality_score,
        )
        return ValidateResponseResponse(
            ok=True,
            answer=answer,
            evidenceIndex=build_evidence_index(evidence, self._excerpt_chars),
            coverage=coverage,
        )
