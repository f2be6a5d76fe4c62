"""
Service layer for the FitTrack application.

This module contains the backend integrations used by the app and its test
harness: the app registry that decides which endpoints clients talk to, the
authentication and document store services, and the theme service.

Classes:
    BackendApp: Session and client factory for one backend project
    AuthService: Email/password authentication against a user pool
    DocumentStore: Hierarchical documents in a DynamoDB table
    ThemeProvider: Observable holder of the current theme mode
"""

from .auth_service import AuthService
from .backend import BackendApp, BackendOptions, delete_app, get_app, initialize_app
from .document_store import CollectionReference, DocumentReference, DocumentStore
from .theme_service import (
    THEME_MODE_KEY,
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    ThemeProvider,
)

__all__ = [
    "AuthService",
    "BackendApp",
    "BackendOptions",
    "initialize_app",
    "get_app",
    "delete_app",
    "DocumentStore",
    "CollectionReference",
    "DocumentReference",
    "ThemeProvider",
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "THEME_MODE_KEY",
]
