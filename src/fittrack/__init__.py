"""
FitTrack: test support for the FitTrack fitness-tracking application.

This package wires integration tests to local emulators of the auth service
and the document store, seeds fixture program hierarchies, and provides the
theme state and settings screen exercised by the UI scenarios.

Modules:
    models: Data models and validation using Pydantic
    services: Backend app registry, auth, document store and theme services
    testing: Emulator harness and local emulator servers
    ui: Textual settings screen
"""

__version__ = "0.1.0"

from .models import AuthUser, Program, ThemeMode
from .services import DocumentStore, ThemeProvider

__all__ = [
    "AuthUser",
    "Program",
    "ThemeMode",
    "DocumentStore",
    "ThemeProvider",
]
