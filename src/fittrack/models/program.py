"""
Program hierarchy models for the FitTrack application.

A training program is stored as nested documents:
Program → Week → Workout → Exercise → ExerciseSet. Every node carries the id
of the user owning the root program. Documents use camelCase field names, so
the models declare snake_case attributes with camelCase aliases.

Classes:
    ExerciseType: Enum of exercise categories
    Program: Root of the hierarchy
    Week: A numbered week within a program
    Workout: A training day within a week
    Exercise: An ordered exercise within a workout
    ExerciseSet: A numbered set within an exercise
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExerciseType(str, Enum):
    """
    Enumeration of supported exercise categories.

    The category decides which set fields are meaningful (weight and reps for
    strength work, duration and distance for cardio).
    """

    STRENGTH = "strength"
    CARDIO = "cardio"
    BODYWEIGHT = "bodyweight"
    TIME_BASED = "time-based"
    CUSTOM = "custom"


class HierarchyNode(BaseModel):
    """
    Common base for documents in the program hierarchy.

    Attributes:
        id: Document id, assigned by the store and never written into the body
        user_id: Id of the user owning the root program
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    id: str = Field(default="", description="Document identifier")
    user_id: str = Field(..., min_length=1, description="Owning user identifier")

    def to_document(self) -> Dict[str, Any]:
        """
        Convert the model into a document body.

        The id is left out because it is part of the document path, and unset
        optional fields are dropped.

        Returns:
            Dictionary with camelCase keys and JSON-compatible values
        """
        return self.model_dump(
            mode="json", by_alias=True, exclude={"id"}, exclude_none=True
        )

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]):
        """
        Create a model from a stored document.

        Args:
            doc_id: Id of the document
            data: Document body as returned by the store

        Returns:
            Model instance
        """
        return cls.model_validate({**data, "id": doc_id})


class Program(HierarchyNode):
    """
    Root of a training program.

    Example:
        >>> program = Program(name="Strength Block", user_id="uid-123")
        >>> program.to_document()["userId"]
        'uid-123'
    """

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    is_archived: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank names."""
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Program name cannot be blank")
        return cleaned


class Week(HierarchyNode):
    """A week of a program, numbered from 1."""

    week_number: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, max_length=100)
    created_at: datetime = Field(default_factory=_utcnow)


class Workout(HierarchyNode):
    """A workout scheduled on a day of its week, numbered from 1."""

    name: str = Field(..., min_length=1, max_length=100)
    day: int = Field(..., ge=1)
    created_at: datetime = Field(default_factory=_utcnow)


class Exercise(HierarchyNode):
    """An exercise within a workout; ``order`` is 0-based."""

    name: str = Field(..., min_length=1, max_length=100)
    exercise_type: ExerciseType = ExerciseType.STRENGTH
    order: int = Field(..., ge=0)
    created_at: Optional[datetime] = None


class ExerciseSet(HierarchyNode):
    """
    A single set of an exercise.

    Attributes:
        set_number: Position of the set, numbered from 1
        reps: Repetitions performed or planned
        weight: Load, stored as a decimal number
        checked: Whether the set has been completed
    """

    set_number: int = Field(..., ge=1)
    reps: Optional[int] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0)
    checked: bool = False
