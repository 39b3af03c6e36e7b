# core/entities.py
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, FrozenSet, cast
from model.evidence import EvidenceChunk
from util.enums import FailureKind
from util.errors import ResponseValidationError


@dataclass(frozen=True)
class StructuralContract:
    """
    Shape every answer must have. The compiler writes these numbers into the
    prompt and the validator enforces the same numbers.
    """

    section_count: int = 3
    paragraphs_per_section: int = 2
    min_words: int = 80
    max_words: int = 100

    def __post_init__(self) -> None:
        if self.section_count < 1 or self.paragraphs_per_section < 1:
            raise ValueError("section and paragraph counts must be at least 1")
        if self.min_words < 1 or self.min_words > self.max_words:
            raise ValueError(
                f"invalid word range {self.min_words}-{self.max_words}"
            )


DEFAULT_CONTRACT = StructuralContract()


@dataclass(frozen=True)
class NormalizedEvidence:
    chunks: Tuple[EvidenceChunk, ...]

    @property
    def ids(self) -> FrozenSet[str]:
        return frozenset(c.id for c in self.chunks)

    def __iter__(self) -> Iterator[EvidenceChunk]:
        return iter(self.chunks)

    def __len__(self) -> int:
        return len(self.chunks)


@dataclass(frozen=True)
class Paragraph:
    paragraph_index: int
    text: str
    evidence_ids: Tuple[str, ...]


@dataclass(frozen=True)
class Section:
    section_index: int
    title: str
    paragraphs: Tuple[Paragraph, ...]


@dataclass(frozen=True)
class StructuredAnswer:
    sections: Tuple[Section, ...]

    def cited_ids(self) -> FrozenSet[str]:
        return frozenset(
            eid for s in self.sections for p in s.paragraphs for eid in p.evidence_ids
        )


@dataclass(frozen=True)
class ValidationFailure:
    kind: FailureKind
    message: str
    section_index: Optional[int] = None  # 1-based
    paragraph_index: Optional[int] = None  # 1-based
    offending_ids: Tuple[str, ...] = ()

    def location(self) -> str:
        if self.section_index is None:
            return "response"
        if self.paragraph_index is None:
            return f"section {self.section_index}"
        return f"section {self.section_index} paragraph {self.paragraph_index}"

    def __str__(self) -> str:
        return f"{self.kind.value} at {self.location()}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    """Tagged result: exactly one of `answer` / `failure` is set."""

    answer: Optional[StructuredAnswer] = None
    failure: Optional[ValidationFailure] = None

    def __post_init__(self) -> None:
        if (self.answer is None) == (self.failure is None):
            raise ValueError("exactly one of answer or failure must be set")

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> StructuredAnswer:
        if self.failure is not None:
            raise ResponseValidationError(self.failure)
        return cast(StructuredAnswer, self.answer)

    @classmethod
    def accepted(cls, answer: StructuredAnswer) -> "ValidationResult":
        return cls(answer=answer)

    @classmethod
    def rejected(cls, failure: ValidationFailure) -> "ValidationResult":
        return cls(failure=failure)


@dataclass(frozen=True)
class NotificationKey:
    event_type: str
    document_id: str

    @property
    def value(self) -> str:
        return f"{self.event_type}:{self.document_id}"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NotificationRequest:
    recipient_id: str
    actor_id: str
    document_id: str
    document_type: str
    type: str
    message: str
    dedupe_key: NotificationKey
