import json
from core.coverage import QualityBreakdown, build_evidence_index, source_coverage
from core.evidence_normalizer import normalize_evidence
from core.response_validator import validate_response
from model.evidence import EvidenceChunk, SourceDetail


def test_evidence_index(chunks, chunk_ids):
    index = build_evidence_index(normalize_evidence(chunks), excerpt_chars=12)
    meta = index[chunk_ids[0]]
    assert meta.source_id == "src-contract-2024"
    assert (meta.page_number, meta.paragraph_index) == (3, 0)
    assert meta.excerpt == "Clause 4 req"


def test_source_coverage_reports_uncited_sources(chunks, make_answer, chunk_ids):
    other = EvidenceChunk(
        id="c-other",
        source_id="src-other",
        page_number=1,
        paragraph_index=0,
        chunk_index=0,
        content="Unrelated.",
    )
    evidence = normalize_evidence(chunks + [other])
    answer = validate_response(
        json.dumps(make_answer(ids=chunk_ids)), evidence.ids
    ).unwrap()

    cov = source_coverage(answer, evidence)
    assert cov.cited_sources == ("src-contract-2024",)
    assert cov.uncited_sources == ("src-other",)
    # 6 paragraphs x 2 citations each
    assert cov.citations_per_source == {"src-contract-2024": 12, "src-other": 0}
    assert cov.coverage_ratio == 0.5
    # no source details: nothing counts as primary law
    assert cov.primary_law_total == 0 and cov.primary_law_ratio == 1.0
    assert cov.quality_score == 68


def test_quality_score_mixes_primary_law_and_secondary(
    chunks, make_answer, chunk_ids
):
    extra = [
        EvidenceChunk(
            id="c-article",
            source_id="src-article",
            page_number=7,
            paragraph_index=2,
            chunk_index=0,
            content="Commentators read clause 4 narrowly.",
        ),
        EvidenceChunk(
            id="c-case",
            source_id="src-case",
            page_number=12,
            paragraph_index=0,
            chunk_index=0,
            content="The court held that oral notice was ineffective.",
        ),
    ]
    sources = [
        SourceDetail(id="src-contract-2024", type="statute", title="Contracts Act"),
        SourceDetail(id="src-article", type="journal_article", title="Notice Rules"),
        SourceDetail(id="src-case", type="case", title="Smith v Jones"),
    ]
    evidence = normalize_evidence(chunks + extra)
    answer = validate_response(
        json.dumps(make_answer(ids=chunk_ids)), evidence.ids
    ).unwrap()

    cov = source_coverage(answer, evidence, sources)

    assert cov.cited_sources == ("src-contract-2024",)
    assert cov.uncited_sources == ("src-article", "src-case")
    assert (cov.primary_law_cited, cov.primary_law_total) == (1, 2)
    assert cov.primary_law_ratio == 0.5
    assert cov.total_citations == 12
    assert cov.citation_density == 4.0

    statute, article, case = cov.source_stats
    assert (statute.type, statute.total_chunks, statute.citations) == (
        "statute",
        2,
        12,
    )
    assert statute.citation_rate == 6.0
    assert (article.type, article.citations, article.citation_rate) == (
        "journal_article",
        0,
        0.0,
    )
    assert case.type == "case"

    # 13.33 coverage + 15 primary law + 8 density + 10 usage
    assert cov.quality_breakdown == QualityBreakdown(13, 15, 8, 10)
    assert cov.quality_score == 46


def test_unknown_source_type_when_detail_missing(chunks, make_answer, chunk_ids):
    evidence = normalize_evidence(chunks)
    answer = validate_response(
        json.dumps(make_answer(ids=chunk_ids[:1])), evidence.ids
    ).unwrap()

    cov = source_coverage(answer, evidence, [])
    (stats,) = cov.source_stats
    assert stats.type == "unknown"
    assert (stats.total_chunks, stats.citations) == (2, 6)
    # 40 + 30 + min(2/10, 1) * 20 + 10
    assert cov.quality_score == 84
