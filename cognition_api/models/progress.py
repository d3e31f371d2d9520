"""
Lesson progress schemas.

Dependencies: pydantic
System role: Progress API contracts
"""

from typing import Any

from pydantic import BaseModel, Field


class UpdateProgressRequest(BaseModel):
    courseId: str = Field(..., min_length=1)
    completedLessons: list[str] | None = None
    videoPositions: dict[str, float] | None = None
    quizScores: dict[str, Any] | None = None
    lastOpenedLesson: str | None = None


class AutosaveVideoRequest(BaseModel):
    courseId: str = Field(..., min_length=1)
    lessonId: str = Field(..., min_length=1)
    position: float = Field(..., ge=0)
    duration: float | None = Field(None, ge=0)


class CompleteLessonRequest(BaseModel):
    courseId: str = Field(..., min_length=1)
    lessonId: str = Field(..., min_length=1)
    quizScore: Any | None = None


class ResetProgressRequest(BaseModel):
    courseId: str = Field(..., min_length=1)


class AdminResetProgressRequest(BaseModel):
    userId: str = Field(..., min_length=1)
    courseId: str = Field(..., min_length=1)
