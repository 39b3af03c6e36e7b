import json
import pytest
from fastapi import status
from core.entities import StructuralContract
from service.reasoning_service import ReasoningService
from util.enums import FailureKind
from util.errors import AppError

QUERY = "Is clause 4 enforceable?"


def test_compile_returns_prompt_and_offered_ids(chunks, chunk_ids):
    res = ReasoningService().compile(QUERY, chunks)
    assert res.evidenceIds == list(chunk_ids)
    assert res.prompt.count(QUERY) == 1


@pytest.mark.parametrize("bad", ["empty", "blank", "dupe"])
def test_grounding_input_errors_become_400(chunks, bad):
    if bad == "empty":
        given = []
    elif bad == "blank":
        given = [chunks[0].model_copy(update={"content": " "})]
    else:
        given = [chunks[0], chunks[0]]
    with pytest.raises(AppError) as exc:
        ReasoningService().compile(QUERY, given)
    assert exc.value.status_code == status.HTTP_400_BAD_REQUEST
    assert "grounded prompt" in exc.value.detail


def test_end_to_end_round_trip(chunks, chunk_ids, make_answer):
    service = ReasoningService()
    compiled = service.compile(QUERY, chunks)
    a, b = chunk_ids
    assert compiled.prompt.index(f"[{a}]") < compiled.prompt.index(f"[{b}]")

    raw = json.dumps(make_answer(ids=tuple(compiled.evidenceIds)))
    res = service.validate(raw, chunks)
    assert res.ok
    assert len(res.answer.sections) == 3
    assert set(res.evidenceIndex) == {a, b}
    assert res.coverage.coverage_ratio == 1.0


def test_rejection_carries_feedback(chunks, make_answer):
    raw = json.dumps(make_answer(word_counts=((90, 90), (90, 90), (90, 79))))
    res = ReasoningService().validate(raw, chunks)
    assert not res.ok
    assert res.retryable
    assert res.failure.kind is FailureKind.LENGTH_VIOLATION
    assert "section 3 paragraph 2" in res.retryFeedback
    assert res.answer is None and res.coverage is None


def test_lenient_extraction_is_opt_in(chunks, make_answer):
    raw = "```json\n" + json.dumps(make_answer()) + "\n```"
    assert ReasoningService().validate(raw, chunks).failure.kind is (
        FailureKind.MALFORMED_OUTPUT
    )
    assert ReasoningService(lenient_json=True).validate(raw, chunks).ok


def test_lenient_extraction_without_object_is_malformed(chunks):
    res = ReasoningService(lenient_json=True).validate("no object", chunks)
    assert res.failure.kind is FailureKind.MALFORMED_OUTPUT


def test_contract_is_shared_by_compile_and_validate(chunks, make_answer):
    service = ReasoningService(contract=StructuralContract(min_words=85))
    assert "between 85 and 100 words" in service.compile(QUERY, chunks).prompt
    raw = json.dumps(make_answer())  # contains 80-word paragraphs
    assert service.validate(raw, chunks).failure.kind is FailureKind.LENGTH_VIOLATION
