"""Pydantic model for composite lesson keys."""

from pydantic import BaseModel, Field


class LessonKey(BaseModel):
    """Position of one lesson in the timetable plus its subject string."""
    week_id: str = Field(..., description="ISO week id, e.g. 2025-W40")
    day_index: int = Field(..., ge=0)
    lesson_index: int = Field(..., ge=0)
    subject: str

    def __str__(self) -> str:
        return f"{self.week_id}|{self.day_index}|{self.lesson_index}|{self.subject}"
