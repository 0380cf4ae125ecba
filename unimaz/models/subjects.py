"""Pydantic models for the subject mapping table."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

LessonType = Literal["lecture", "seminar", "lab", "practice"]


class SubjectMapping(BaseModel):
    """One canonical subject and the spellings that resolve to it."""
    canonical_name: str = Field(..., description="Authoritative display name")
    variants: List[str] = Field(
        default_factory=list,
        description="Exact spellings seen in timetable data, including type-decorated forms",
    )
    aliases: List[str] = Field(
        default_factory=list,
        description="Extra names compared in normalized form",
    )
    lesson_type: Optional[LessonType] = None

    @field_validator("canonical_name")
    @classmethod
    def validate_canonical_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("canonical_name must not be empty")
        return v.strip()


class UniversitySubjectConfig(BaseModel):
    """Subject mappings used by a single university."""
    university_id: int
    university_name: str
    subject_mappings: List[SubjectMapping] = Field(default_factory=list)
