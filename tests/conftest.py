"""
Shared fixtures. All data is explicit and fixed; no random generation.
"""

import json
import pytest
from model.evidence import EvidenceChunk

CHUNK_A = "3f2b6c1e-0a4d-4c1b-9a52-5f0e2d7c9a11"
CHUNK_B = "8d1e4a7f-6b2c-4e3d-8f19-0c7a5b3e2d44"
SOURCE = "src-contract-2024"


def words(n: int, token: str = "word") -> str:
    return " ".join(f"{token}{i}" for i in range(n))


def answer_doc(
    ids=(CHUNK_A, CHUNK_B),
    word_counts=((80, 100), (90, 90), (100, 80)),
) -> dict:
    """A response dict shaped like the generator output contract."""
    sections = []
    for si, counts in enumerate(word_counts, start=1):
        sections.append(
            {
                "section_index": si,
                "title": f"Section {si}",
                "paragraphs": [
                    {
                        "paragraph_index": pi,
                        "text": words(n),
                        "evidence_ids": list(ids),
                    }
                    for pi, n in enumerate(counts, start=1)
                ],
            }
        )
    return {"sections": sections}


@pytest.fixture
def chunks():
    return [
        EvidenceChunk(
            id=CHUNK_A,
            source_id=SOURCE,
            page_number=3,
            paragraph_index=0,
            chunk_index=0,
            content="  Clause 4 requires written notice within thirty days.  ",
        ),
        EvidenceChunk(
            id=CHUNK_B,
            source_id=SOURCE,
            page_number=3,
            paragraph_index=1,
            chunk_index=1,
            content="Notice given orally shall be of no effect.",
        ),
    ]


@pytest.fixture
def known_ids():
    return frozenset({CHUNK_A, CHUNK_B})


@pytest.fixture
def make_answer():
    def _make(**kw) -> dict:
        return answer_doc(**kw)

    return _make


@pytest.fixture
def as_raw():
    return json.dumps


@pytest.fixture
def chunk_ids():
    return (CHUNK_A, CHUNK_B)


@pytest.fixture
def make_words():
    return words
