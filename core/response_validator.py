# core/response_validator.py
"""
Checks a generator response against the structural contract the compiled
prompt encodes. Validation is total: any string input yields a
ValidationResult, never an exception. The first violation found rejects the
whole answer.

Check order: JSON parse, top-level shape, structure of every section and
paragraph, then per paragraph in document order: citations, word count.
"""
import json
from typing import AbstractSet, Any, List, Optional, Tuple
from core.entities import (
    DEFAULT_CONTRACT,
    Paragraph,
    Section,
    StructuralContract,
    StructuredAnswer,
    ValidationFailure,
    ValidationResult,
)
from util.enums import FailureKind
from util.functions import count_words


class _Reject(Exception):
    # Internal short-circuit; never escapes validate_response.
    def __init__(self, failure: ValidationFailure) -> None:
        self.failure = failure


def _fail(
    kind: FailureKind,
    message: str,
    section: Optional[int] = None,
    paragraph: Optional[int] = None,
    offending_ids: Tuple[str, ...] = (),
) -> _Reject:
    return _Reject(
        ValidationFailure(
            kind=kind,
            message=message,
            section_index=section,
            paragraph_index=paragraph,
            offending_ids=offending_ids,
        )
    )


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _parse(raw: Any) -> Any:
    if not isinstance(raw, str):
        raise _fail(FailureKind.MALFORMED_OUTPUT, "response is not text")
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise _fail(FailureKind.MALFORMED_OUTPUT, f"response is not valid JSON: {e}")


def _top_level_sections(doc: Any) -> List[Any]:
    if not isinstance(doc, dict):
        raise _fail(FailureKind.SCHEMA_VIOLATION, "top-level value must be an object")
    sections = doc.get("sections")
    if not isinstance(sections, list):
        raise _fail(FailureKind.SCHEMA_VIOLATION, "'sections' must be a list")
    return sections


def _check_structure(sections: List[Any], contract: StructuralContract) -> None:
    if len(sections) != contract.section_count:
        raise _fail(
            FailureKind.STRUCTURE_VIOLATION,
            f"expected exactly {contract.section_count} sections, got {len(sections)}",
        )

    for si, sec in enumerate(sections, start=1):
        if not isinstance(sec, dict):
            raise _fail(FailureKind.SCHEMA_VIOLATION, "section must be an object", si)

        idx = sec.get("section_index")
        if not _is_int(idx):
            raise _fail(
                FailureKind.SCHEMA_VIOLATION, "'section_index' must be an integer", si
            )
        if idx != si:
            raise _fail(
                FailureKind.STRUCTURE_VIOLATION,
                f"section_index {idx} out of order, expected {si}",
                si,
            )

        title = sec.get("title")
        if not isinstance(title, str):
            raise _fail(FailureKind.SCHEMA_VIOLATION, "'title' must be a string", si)
        if not title.strip():
            raise _fail(FailureKind.STRUCTURE_VIOLATION, "title is empty", si)

        paragraphs = sec.get("paragraphs")
        if not isinstance(paragraphs, list):
            raise _fail(FailureKind.SCHEMA_VIOLATION, "'paragraphs' must be a list", si)
        if len(paragraphs) != contract.paragraphs_per_section:
            raise _fail(
                FailureKind.STRUCTURE_VIOLATION,
                f"expected exactly {contract.paragraphs_per_section} paragraphs, "
                f"got {len(paragraphs)}",
                si,
            )

        for pi, para in enumerate(paragraphs, start=1):
            if not isinstance(para, dict):
                raise _fail(
                    FailureKind.SCHEMA_VIOLATION, "paragraph must be an object", si, pi
                )
            pidx = para.get("paragraph_index")
            if not _is_int(pidx):
                raise _fail(
                    FailureKind.SCHEMA_VIOLATION,
                    "'paragraph_index' must be an integer",
                    si,
                    pi,
                )
            if pidx != pi:
                raise _fail(
                    FailureKind.STRUCTURE_VIOLATION,
                    f"paragraph_index {pidx} out of order, expected {pi}",
                    si,
                    pi,
                )


def _check_paragraph(
    si: int,
    pi: int,
    para: dict,
    known_ids: AbstractSet[str],
    contract: StructuralContract,
) -> Paragraph:
    text = para.get("text")
    if not isinstance(text, str):
        raise _fail(FailureKind.SCHEMA_VIOLATION, "'text' must be a string", si, pi)

    ids = para.get("evidence_ids")
    if not isinstance(ids, list) or not all(isinstance(e, str) for e in ids):
        raise _fail(
            FailureKind.SCHEMA_VIOLATION,
            "'evidence_ids' must be a list of strings",
            si,
            pi,
        )
    if not ids:
        raise _fail(
            FailureKind.CITATION_VIOLATION, "paragraph cites no evidence", si, pi
        )
    unknown = tuple(dict.fromkeys(e for e in ids if e not in known_ids))
    if unknown:
        raise _fail(
            FailureKind.CITATION_VIOLATION,
            "cites unknown evidence id(s): " + ", ".join(unknown),
            si,
            pi,
            offending_ids=unknown,
        )

    words = count_words(text)
    if not contract.min_words <= words <= contract.max_words:
        raise _fail(
            FailureKind.LENGTH_VIOLATION,
            f"paragraph has {words} words, expected "
            f"{contract.min_words}-{contract.max_words}",
            si,
            pi,
        )

    return Paragraph(
        paragraph_index=pi,
        text=text,
        evidence_ids=tuple(dict.fromkeys(ids)),
    )


def validate_response(
    raw: str,
    known_evidence_ids: AbstractSet[str],
    contract: StructuralContract = DEFAULT_CONTRACT,
) -> ValidationResult:
    """
    Validate `raw` against the contract. `known_evidence_ids` must be exactly
    the ids offered in the prompt.
    """
    try:
        sections = _top_level_sections(_parse(raw))
        _check_structure(sections, contract)
        built = []
        for si, sec in enumerate(sections, start=1):
            paragraphs = tuple(
                _check_paragraph(si, pi, para, known_evidence_ids, contract)
                for pi, para in enumerate(sec["paragraphs"], start=1)
            )
            built.append(
                Section(section_index=si, title=sec["title"], paragraphs=paragraphs)
            )
    except _Reject as r:
        return ValidationResult.rejected(r.failure)

    return ValidationResult.accepted(StructuredAnswer(sections=tuple(built)))
