# model/approach.py
from pydantic import BaseModel, ConfigDict, Field


class ApproachSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    section_index: int
    title: str
    description: str = ""


class ApproachStructure(BaseModel):
    model_config = ConfigDict(frozen=True)

    sections: list[ApproachSection] = Field(default_factory=list)


class ArgumentationLine(BaseModel):
    """One suggested line of argument, as produced by the approach picker."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    approach: str = ""
    focus_areas: list[str] = Field(default_factory=list)
    tone: str = ""
    structure: ApproachStructure = Field(default_factory=ApproachStructure)


class Approach(BaseModel):
    """
    Writing approach for a synthesis. Either a single argumentation line, a
    combination of lines, or a bare configuration (tone/structure/focus).
    """

    model_config = ConfigDict(frozen=True)

    argumentation_line: ArgumentationLine | None = None
    combined_lines: list[ArgumentationLine] | None = None
    tone: str | None = None
    structure_type: str | None = None
    focus_areas: list[str] | None = None
    sections: list[ApproachSection] | None = None
