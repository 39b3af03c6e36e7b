# core/retry_feedback.py
from core.entities import DEFAULT_CONTRACT, StructuralContract, ValidationFailure
from util.enums import FailureKind

_RULES = {
    FailureKind.MALFORMED_OUTPUT: "Return a single valid JSON object and nothing else.",
    FailureKind.SCHEMA_VIOLATION: "Follow the OUTPUT FORMAT field names and types exactly.",
    FailureKind.STRUCTURE_VIOLATION: (
        "Produce exactly {sections} sections with exactly {paragraphs} paragraphs "
        "each, numbered from 1 in order."
    ),
    FailureKind.CITATION_VIOLATION: (
        "Every paragraph must cite at least one evidence ID, copied exactly "
        "from the EVIDENCE list."
    ),
    FailureKind.LENGTH_VIOLATION: (
        "Every paragraph must be between {min_words} and {max_words} words."
    ),
}


def build_retry_feedback(
    failure: ValidationFailure, contract: StructuralContract = DEFAULT_CONTRACT
) -> str:
    """Short correction note a caller appends when re-invoking the generator."""
    rule = _RULES[failure.kind].format(
        sections=contract.section_count,
        paragraphs=contract.paragraphs_per_section,
        min_words=contract.min_words,
        max_words=contract.max_words,
    )
    return (
        f"Your previous answer was rejected ({failure.kind.value}) at "
        f"{failure.location()}: {failure.message}. {rule}"
    )
