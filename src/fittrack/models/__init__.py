"""
Data models for the FitTrack application.

This module contains Pydantic models for the documents seeded into the
document store, the authenticated user identity and the theme mode.

Classes:
    Program, Week, Workout, Exercise, ExerciseSet: Program hierarchy documents
    ExerciseType: Enum of exercise categories
    AuthUser: Identity of a user in the auth service
    ThemeMode: Follow-system, light or dark colour scheme
"""

from .program import Exercise, ExerciseSet, ExerciseType, Program, Week, Workout
from .theme import ThemeMode
from .user import AuthUser

__all__ = [
    "Program",
    "Week",
    "Workout",
    "Exercise",
    "ExerciseSet",
    "ExerciseType",
    "AuthUser",
    "ThemeMode",
]
