# model/evidence.py
from pydantic import BaseModel, ConfigDict, Field


class ChunkMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    section_header: str | None = None
    heading_context: str | None = None
    case_citations: list[str] | None = None
    statute_references: list[str] | None = None
    detected_patterns: list[str] | None = None


class EvidenceChunk(BaseModel):
    """
    One retrieved passage. `chunk_index` is the canonical order within its
    source; ranking across sources is the caller's list order.
    Content is not constrained here so the normalizer can classify it.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    source_id: str
    page_number: int = Field(gt=0)
    paragraph_index: int = Field(ge=0)
    chunk_index: int = Field(ge=0)
    content: str
    metadata: ChunkMetadata | None = None


class SourceDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    title: str
