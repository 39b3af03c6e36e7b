import json
import pytest
from core.entities import (
    StructuralContract,
    StructuredAnswer,
    ValidationFailure,
    ValidationResult,
)
from core.response_validator import validate_response
from util.enums import FailureKind
from util.errors import ResponseValidationError


def test_accepts_boundary_word_counts(make_answer, known_ids):
    doc = make_answer(word_counts=((80, 100), (80, 100), (100, 80)))
    result = validate_response(json.dumps(doc), known_ids)

    assert result.ok
    answer = result.unwrap()
    assert isinstance(answer, StructuredAnswer)
    assert [s.section_index for s in answer.sections] == [1, 2, 3]
    assert all(len(s.paragraphs) == 2 for s in answer.sections)
    assert answer.cited_ids() == known_ids


@pytest.mark.parametrize("count", [79, 101])
def test_rejects_out_of_range_word_count(make_answer, known_ids, count):
    doc = make_answer(word_counts=((90, 90), (90, count), (90, 90)))
    result = validate_response(json.dumps(doc), known_ids)

    assert not result.ok
    assert result.failure.kind is FailureKind.LENGTH_VIOLATION
    assert (result.failure.section_index, result.failure.paragraph_index) == (2, 2)


def test_rejects_unknown_citation(make_answer, known_ids, chunk_ids):
    doc = make_answer()
    doc["sections"][0]["paragraphs"][1]["evidence_ids"] = [chunk_ids[0], "not-offered"]
    result = validate_response(json.dumps(doc), known_ids)

    assert result.failure.kind is FailureKind.CITATION_VIOLATION
    assert result.failure.offending_ids == ("not-offered",)
    assert result.failure.location() == "section 1 paragraph 2"


def test_rejects_empty_citation_list(make_answer, known_ids):
    doc = make_answer()
    doc["sections"][2]["paragraphs"][0]["evidence_ids"] = []
    result = validate_response(json.dumps(doc), known_ids)
    assert result.failure.kind is FailureKind.CITATION_VIOLATION
    assert result.failure.section_index == 3


def test_rejects_two_sections(make_answer, known_ids):
    doc = make_answer(word_counts=((90, 90), (90, 90)))
    result = validate_response(json.dumps(doc), known_ids)
    assert result.failure.kind is FailureKind.STRUCTURE_VIOLATION
    assert result.failure.section_index is None


def test_rejects_three_paragraphs_in_a_section(make_answer, known_ids):
    doc = make_answer(word_counts=((90, 90), (90, 90, 90), (90, 90)))
    result = validate_response(json.dumps(doc), known_ids)
    assert result.failure.kind is FailureKind.STRUCTURE_VIOLATION
    assert result.failure.section_index == 2


def test_rejects_out_of_order_indices(make_answer, known_ids):
    doc = make_answer()
    doc["sections"][1]["section_index"] = 3
    assert (
        validate_response(json.dumps(doc), known_ids).failure.kind
        is FailureKind.STRUCTURE_VIOLATION
    )

    doc = make_answer()
    doc["sections"][0]["paragraphs"][0]["paragraph_index"] = 2
    failure = validate_response(json.dumps(doc), known_ids).failure
    assert failure.kind is FailureKind.STRUCTURE_VIOLATION
    assert (failure.section_index, failure.paragraph_index) == (1, 1)


def test_rejects_blank_title(make_answer, known_ids):
    doc = make_answer()
    doc["sections"][1]["title"] = "   "
    failure = validate_response(json.dumps(doc), known_ids).failure
    assert failure.kind is FailureKind.STRUCTURE_VIOLATION
    assert failure.section_index == 2


@pytest.mark.parametrize(
    "raw",
    ["", "not json", "```json\n{}\n```", '{"sections": [', None],
)
def test_rejects_malformed_output(raw, known_ids):
    result = validate_response(raw, known_ids)
    assert result.failure.kind is FailureKind.MALFORMED_OUTPUT


@pytest.mark.parametrize(
    "doc",
    [[], {"answer": []}, {"sections": {}}, {"sections": "three"}, "sections"],
)
def test_rejects_wrong_top_level_shape(doc, known_ids):
    result = validate_response(json.dumps(doc), known_ids)
    assert result.failure.kind is FailureKind.SCHEMA_VIOLATION


def test_rejects_mistyped_fields(make_answer, known_ids):
    doc = make_answer()
    doc["sections"][0]["section_index"] = True
    assert validate_response(json.dumps(doc), known_ids).failure.kind is (
        FailureKind.SCHEMA_VIOLATION
    )

    doc = make_answer()
    doc["sections"][2]["paragraphs"][1]["evidence_ids"] = "abc"
    failure = validate_response(json.dumps(doc), known_ids).failure
    assert failure.kind is FailureKind.SCHEMA_VIOLATION
    assert (failure.section_index, failure.paragraph_index) == (3, 2)


def test_no_partial_success(make_answer, known_ids):
    doc = make_answer(word_counts=((90, 90), (90, 90), (90, 120)))
    result = validate_response(json.dumps(doc), known_ids)

    assert not result.ok
    assert result.answer is None
    assert result.failure.section_index == 3
    with pytest.raises(ResponseValidationError) as exc:
        result.unwrap()
    assert exc.value.failure is result.failure


def test_structure_checked_before_paragraph_content(make_answer, known_ids):
    # section 1 has a length problem, section 3 a structural one
    doc = make_answer(word_counts=((10, 90), (90, 90), (90,)))
    failure = validate_response(json.dumps(doc), known_ids).failure
    assert failure.kind is FailureKind.STRUCTURE_VIOLATION
    assert failure.section_index == 3


def test_duplicate_citations_collapse_in_order(make_answer, known_ids, chunk_ids):
    a, b = chunk_ids
    doc = make_answer(ids=(b, a, b))
    answer = validate_response(json.dumps(doc), known_ids).unwrap()
    assert answer.sections[0].paragraphs[0].evidence_ids == (b, a)


def test_custom_contract(make_answer, known_ids):
    doc = make_answer(word_counts=((50, 50),))
    contract = StructuralContract(section_count=1, min_words=40, max_words=60)
    assert validate_response(json.dumps(doc), known_ids, contract).ok


def test_extra_keys_are_ignored(make_answer, known_ids):
    doc = make_answer()
    doc["notes"] = "ignored"
    doc["sections"][0]["paragraphs"][0]["citations"] = []
    assert validate_response(json.dumps(doc), known_ids).ok


def test_answer_is_immutable(make_answer, known_ids):
    answer = validate_response(json.dumps(make_answer()), known_ids).unwrap()
    with pytest.raises(AttributeError):
        answer.sections = ()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_words": 101, "max_words": 100},
        {"min_words": 0},
        {"section_count": 0},
        {"paragraphs_per_section": 0},
    ],
)
def test_contract_rejects_impossible_rules(kwargs):
    with pytest.raises(ValueError):
        StructuralContract(**kwargs)


def test_result_holds_exactly_one_outcome(make_answer, known_ids):
    answer = validate_response(json.dumps(make_answer()), known_ids).unwrap()
    failure = ValidationFailure(kind=FailureKind.MALFORMED_OUTPUT, message="bad")
    with pytest.raises(ValueError):
        ValidationResult()
    with pytest.raises(ValueError):
        ValidationResult(answer=answer, failure=failure)
    assert ValidationResult(answer=answer).unwrap() is answer
    with pytest.raises(ResponseValidationError):
        ValidationResult(failure=failure).unwrap()
