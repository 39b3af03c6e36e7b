# core/coverage.py
import math
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple
from core.entities import NormalizedEvidence, StructuredAnswer
from model.evidence import SourceDetail
from util.constants import PRIMARY_LAW_TYPES
from util.functions import clip_chars

UNKNOWN_SOURCE_TYPE = "unknown"

# Answer paragraphs carry bare evidence ids, so every citation scores as a
# plain reference.
REFERENCE_WEIGHT = 1


@dataclass(frozen=True)
class EvidenceMeta:
    source_id: str
    page_number: int
    paragraph_index: int
    excerpt: str


@dataclass(frozen=True)
class SourceStats:
    source_id: str
    type: str
    total_chunks: int
    citations: int
    citation_rate: float


@dataclass(frozen=True)
class QualityBreakdown:
    coverage_score: int
    primary_law_score: int
    density_score: int
    usage_score: int


@dataclass(frozen=True)
class SourceCoverage:
    cited_sources: Tuple[str, ...]
    uncited_sources: Tuple[str, ...]
    citations_per_source: Dict[str, int]
    coverage_ratio: float
    source_stats: Tuple[SourceStats, ...]
    primary_law_cited: int
    primary_law_total: int
    primary_law_ratio: float
    total_citations: int
    citation_density: float
    quality_score: int
    quality_breakdown: QualityBreakdown


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def build_evidence_index(
    evidence: NormalizedEvidence, excerpt_chars: int = 300
) -> Dict[str, EvidenceMeta]:
    return {
        c.id: EvidenceMeta(
            source_id=c.source_id,
            page_number=c.page_number,
            paragraph_index=c.paragraph_index,
            excerpt=clip_chars(c.content, excerpt_chars),
        )
        for c in evidence
    }


def source_coverage(
    answer: StructuredAnswer,
    evidence: NormalizedEvidence,
    sources: Sequence[SourceDetail] = (),
) -> SourceCoverage:
    """
    Which offered sources the answer cites, and a 0-100 quality score:
    40% source coverage, 30% primary-law coverage, 20% citation density
    (saturating at 10 citations per section), 10% citation usage.
    Sources keep first-seen order from the evidence list; a source with no
    SourceDetail has type "unknown".
    """
    chunk_source = {c.id: c.source_id for c in evidence}
    chunk_totals = Counter(c.source_id for c in evidence)
    source_ids = tuple(chunk_totals)
    types = {s.id: s.type for s in sources}

    counts: Counter = Counter()
    usage_points = 0
    for sec in answer.sections:
        for para in sec.paragraphs:
            for eid in para.evidence_ids:
                sid = chunk_source.get(eid)
                if sid is not None:
                    counts[sid] += 1
                    usage_points += REFERENCE_WEIGHT

    cited = tuple(s for s in source_ids if counts[s] > 0)
    uncited = tuple(s for s in source_ids if counts[s] == 0)
    total = sum(counts.values())

    stats = tuple(
        SourceStats(
            source_id=s,
            type=types.get(s, UNKNOWN_SOURCE_TYPE),
            total_chunks=chunk_totals[s],
            citations=counts[s],
            citation_rate=counts[s] / chunk_totals[s],
        )
        for s in source_ids
    )
    primary = [st for st in stats if st.type in PRIMARY_LAW_TYPES]
    primary_cited = sum(1 for st in primary if st.citations > 0)

    coverage_ratio = len(cited) / len(source_ids) if source_ids else 0.0
    primary_ratio = primary_cited / len(primary) if primary else 1.0
    density = total / (len(answer.sections) or 1)
    usage = min(usage_points / total, 2) if total else 0.0

    breakdown = QualityBreakdown(
        coverage_score=_round_half_up(coverage_ratio * 40),
        primary_law_score=_round_half_up(primary_ratio * 30),
        density_score=_round_half_up(min(density / 10, 1) * 20),
        usage_score=_round_half_up(usage * 10),
    )
    score = min(
        100,
        _round_half_up(
            coverage_ratio * 40
            + primary_ratio * 30
            + min(density / 10, 1) * 20
            + usage * 10
        ),
    )

    return SourceCoverage(
        cited_sources=cited,
        uncited_sources=uncited,
        citations_per_source={s: counts[s] for s in source_ids},
        coverage_ratio=coverage_ratio,
        source_stats=stats,
        primary_law_cited=primary_cited,
        primary_law_total=len(primary),
        primary_law_ratio=primary_ratio,
        total_citations=total,
        citation_density=density,
        quality_score=score,
        quality_breakdown=breakdown,
    )
