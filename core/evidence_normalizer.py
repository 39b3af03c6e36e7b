# core/evidence_normalizer.py
from typing import List, Optional, Sequence, Set
from core.entities import NormalizedEvidence
from model.evidence import EvidenceChunk
from util.errors import DuplicateEvidenceError, EmptyContentError, EmptyEvidenceError


def normalize_evidence(
    chunks: Optional[Sequence[EvidenceChunk]],
) -> NormalizedEvidence:
    """
    Validate the ranked evidence set and trim chunk content.
    Order is the caller's rank order and is never changed here.

    Raises EmptyEvidenceError, EmptyContentError or DuplicateEvidenceError.
    """
    if not chunks:
        raise EmptyEvidenceError()

    seen: Set[str] = set()
    out: List[EvidenceChunk] = []
    for ch in chunks:
        if ch.id in seen:
            raise DuplicateEvidenceError(ch.id)
        seen.add(ch.id)

        content = ch.content.strip()
        if not content:
            raise EmptyContentError(ch.id)
        if content != ch.content:
            ch = ch.model_copy(update={"content": content})
        out.append(ch)

    return NormalizedEvidence(chunks=tuple(out))
