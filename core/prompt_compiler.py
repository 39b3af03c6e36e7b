# core/prompt_compiler.py
from typing import Dict, List, Optional, Sequence
from core.entities import DEFAULT_CONTRACT, NormalizedEvidence, StructuralContract
from model.approach import Approach, ApproachSection, ArgumentationLine
from model.evidence import EvidenceChunk, SourceDetail
from util.constants import (
    DEFAULT_PROJECT_TYPE,
    METADATA_LIST_LIMIT,
    PROJECT_TYPE_DESCRIPTIONS,
    RULE,
    SOURCE_TYPE_LABELS,
)

OUTPUT_SCHEMA = """{
  "sections": [
    {
      "section_index": 1,
      "title": "string",
      "paragraphs": [
        {
          "paragraph_index": 1,
          "text": "formal academic prose advancing a clear argument",
          "evidence_ids": ["<chunk-uuid>"]
        }
      ]
    }
  ]
}"""

PROHIBITIONS = (
    "No markdown",
    "No commentary",
    "No explanations",
    "No apologies",
    "No meta-discussion",
    "No text outside the JSON object",
    "No missing fields",
)


def _heading(title: str) -> str:
    return f"{RULE}\n{title}\n{RULE}"


def _bullets(lines: Sequence[str]) -> str:
    return "\n".join(f"- {line}" for line in lines)


def _source_label(source_type: str) -> str:
    return SOURCE_TYPE_LABELS.get(source_type, source_type)


def _project_type_line(project_type: str) -> str:
    description = PROJECT_TYPE_DESCRIPTIONS.get(
        project_type, PROJECT_TYPE_DESCRIPTIONS[DEFAULT_PROJECT_TYPE]
    )
    return f"PROJECT TYPE: {description}"


def _preamble(project_type: Optional[str] = None) -> str:
    intro = [
        "SYSTEM ROLE",
        "You are a legal-reasoning engine operating in an audit-critical research system.",
        "",
        "You are performing REASONED SYNTHESIS.",
        "All evidence has already been retrieved, ranked, and fixed.",
        "",
    ]
    if project_type is not None:
        intro.extend([_project_type_line(project_type), ""])
    return "\n".join(
        intro
        + [
            _heading("NON-NEGOTIABLE CONSTRAINTS"),
            _bullets(
                [
                    "You may ONLY rely on the evidence provided below.",
                    "You may NOT use prior knowledge or background doctrine.",
                    "You may NOT invent facts or interpretations.",
                    "Every paragraph MUST cite at least one evidence ID.",
                    "Evidence IDs MUST match the UUIDs exactly.",
                    "Output MUST be valid JSON and NOTHING ELSE.",
                ]
            ),
        ]
    )


def _structure_lines(sections: Sequence[ApproachSection]) -> List[str]:
    return [f"  {s.section_index}. {s.title} - {s.description}" for s in sections]


def _combined_approach(approach: Approach) -> str:
    lines = approach.combined_lines or []
    n = len(lines)
    out = [
        _heading("COMBINED ARGUMENTATION APPROACH"),
        f"You are implementing a HYBRID approach that combines {n} complementary "
        "argumentation strategies.",
    ]
    for i, line in enumerate(lines, start=1):
        out.extend(
            [
                "",
                f"APPROACH {i}: {line.title}",
                _bullets(
                    [
                        f"Description: {line.description}",
                        f"Method: {line.approach}",
                        f"Focus Areas: {', '.join(line.focus_areas)}",
                        f"Tone: {line.tone}",
                    ]
                ),
            ]
        )

    focus = dict.fromkeys(f for line in lines for f in line.focus_areas)
    tones = dict.fromkeys(line.tone for line in lines)
    sections = approach.sections or lines[0].structure.sections
    out.extend(
        [
            "",
            "INTEGRATION GUIDANCE:",
            _bullets(
                [
                    f"Synthesize the perspectives from all {n} approaches into a coherent argument",
                    "Draw on the strengths of each approach: "
                    + ", ".join(line.approach for line in lines),
                    "Ensure the combined focus areas are addressed: " + ", ".join(focus),
                    "Maintain a consistent tone that balances: " + " and ".join(tones),
                    "Use evidence that supports multiple approaches when possible to strengthen synthesis",
                ]
            ),
            "",
            "PROPOSED STRUCTURE (merged from combined approaches):",
            *_structure_lines(sections),
        ]
    )
    return "\n".join(out)


def _selected_line(line: ArgumentationLine) -> str:
    return "\n".join(
        [
            _heading("SELECTED ARGUMENTATION APPROACH"),
            _bullets(
                [
                    f"Title: {line.title}",
                    f"Description: {line.description}",
                    f"Approach Type: {line.approach}",
                    f"Focus Areas: {', '.join(line.focus_areas)}",
                    f"Recommended Tone: {line.tone}",
                    "Proposed Structure:",
                ]
            ),
            *_structure_lines(line.structure.sections),
        ]
    )


def _approach_configuration(approach: Approach) -> str:
    out = [
        _heading("SELECTED APPROACH CONFIGURATION"),
        _bullets(
            [
                f"Tone: {approach.tone or 'analytical'}",
                f"Structure Type: {approach.structure_type or 'traditional'}",
                "Focus Areas: " + (", ".join(approach.focus_areas or []) or "general analysis"),
            ]
        ),
    ]
    if approach.sections:
        out.append("- Custom Sections:")
        out.extend(_structure_lines(approach.sections))
    return "\n".join(out)


def render_approach(approach: Approach) -> str:
    """Combined lines win over a single line, which wins over bare configuration."""
    if approach.combined_lines and len(approach.combined_lines) > 1:
        return _combined_approach(approach)
    if approach.argumentation_line is not None:
        return _selected_line(approach.argumentation_line)
    return _approach_configuration(approach)


def _structure_rules(contract: StructuralContract) -> str:
    return "\n".join(
        [
            _heading("STRUCTURE (STRICT)"),
            _bullets(
                [
                    f"Produce EXACTLY {contract.section_count} sections.",
                    f"Each section MUST contain EXACTLY {contract.paragraphs_per_section} paragraphs.",
                    f"Each paragraph MUST be between {contract.min_words} and {contract.max_words} words.",
                    "Each paragraph MUST list the evidence IDs it relies on in evidence_ids.",
                    "Each evidence ID MUST be copied exactly as it appears in brackets below.",
                    "Return a single JSON object and nothing else.",
                ]
            ),
            "",
            _heading("HOW TO WRITE"),
            "This is NOT a summary.",
            "",
            "Each paragraph MUST:",
            _bullets(
                [
                    "Make a clear argumentative claim.",
                    "Use the cited evidence to SUPPORT or QUALIFY that claim.",
                    "Explain the implication of the evidence for the argument.",
                ]
            ),
            "",
            "Do NOT paraphrase evidence mechanically.",
            "Do NOT introduce material not grounded in the evidence.",
        ]
    )


def _source_details(sources: Sequence[SourceDetail]) -> str:
    return "\n".join(
        [
            _heading("SOURCE DETAILS"),
            _bullets([f"{s.title} ({_source_label(s.type)})" for s in sources]),
        ]
    )


def _metadata_lines(chunk: EvidenceChunk) -> List[str]:
    meta = chunk.metadata
    if meta is None:
        return []
    lines: List[str] = []
    if meta.section_header:
        lines.append(f"Section: {meta.section_header}")
    if meta.heading_context:
        lines.append(f"Context: {meta.heading_context}")
    if meta.case_citations:
        lines.append(
            "Case Citations: " + "; ".join(meta.case_citations[:METADATA_LIST_LIMIT])
        )
    if meta.statute_references:
        lines.append(
            "Statute Refs: " + "; ".join(meta.statute_references[:METADATA_LIST_LIMIT])
        )
    if meta.detected_patterns:
        lines.append("Patterns: " + ", ".join(meta.detected_patterns))
    return lines


def render_evidence_block(
    chunk: EvidenceChunk, source: Optional[SourceDetail] = None
) -> str:
    lines = [f"[{chunk.id}]", f"Source ID: {chunk.source_id}"]
    if source is not None:
        lines.append(f"Source Type: {_source_label(source.type)}")
        lines.append(f"Source Title: {source.title}")
    lines.append(f"Page Number: {chunk.page_number}")
    lines.append(f"Paragraph Index: {chunk.paragraph_index}")
    lines.extend(_metadata_lines(chunk))
    lines.append("Content:")
    lines.append(chunk.content)
    return "\n".join(lines)


def render_evidence(
    evidence: NormalizedEvidence, sources: Sequence[SourceDetail] = ()
) -> str:
    """Blocks in input order, separated by one blank line."""
    by_id: Dict[str, SourceDetail] = {s.id: s for s in sources}
    return "\n\n".join(
        render_evidence_block(ch, by_id.get(ch.source_id)) for ch in evidence
    )


def compile_prompt(
    query: str,
    evidence: NormalizedEvidence,
    *,
    sources: Sequence[SourceDetail] = (),
    contract: StructuralContract = DEFAULT_CONTRACT,
    project_type: Optional[str] = None,
    approach: Optional[Approach] = None,
) -> str:
    """
    Render the reasoning prompt. Pure: the same arguments always produce the
    same string. The query is inserted verbatim, exactly once.

    `project_type` and `approach` add context after the preamble; when both
    are None the prompt has only the fixed sections.
    """
    parts = [_preamble(project_type)]
    if approach is not None:
        parts.append(render_approach(approach))
    parts.extend(
        [
            _structure_rules(contract),
            _heading("QUERY") + "\n" + query,
        ]
    )
    if sources:
        parts.append(_source_details(sources))
    parts.extend(
        [
            _heading("EVIDENCE (READ-ONLY)") + "\n" + render_evidence(evidence, sources),
            _heading("OUTPUT FORMAT (JSON ONLY)")
            + "\nReturn ONLY valid JSON in the following structure:\n\n"
            + OUTPUT_SCHEMA,
            _heading("PROHIBITIONS") + "\n" + _bullets(PROHIBITIONS),
        ]
    )
    return "\n\n".join(parts)
