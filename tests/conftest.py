"""
Pytest configuration and shared fixtures for FitTrack tests.

This module contains pytest configuration, shared fixtures, and test utilities
that are used across multiple test modules. It starts the local emulators,
connects the emulator harness to them, and provides mocked AWS services and
preference stores.

Fixtures:
    emulator_settings: Emulator settings pointing at free local ports
    local_emulators: Running auth and document store emulators
    harness: Initialized EmulatorHarness bound to the local emulators
    test_user: Signed-in disposable user, signed out after the test
    document_store: DocumentStore on a mocked DynamoDB
    prefs: Empty in-memory preference store
"""

import os
import socket
from typing import Dict, List

import boto3
import pytest
from moto import mock_aws

from fittrack.config import EmulatorSettings
from fittrack.services.backend import delete_app
from fittrack.services.document_store import CollectionReference, DocumentStore
from fittrack.services.theme_service import InMemoryPreferenceStore
from fittrack.testing.emulator import EmulatorHarness, programs_path
from fittrack.testing.local_emulators import start_local_emulators


# Test configuration constants
TEST_TABLE_NAME = "test-documents-table"
TEST_APP_NAME = "fittrack-tests"
TEST_REGION = "us-east-1"


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture(scope="session")
def aws_credentials():
    """
    Fixture to set up AWS credentials for testing.

    Sets fake credentials so no test can reach a real AWS account, even when
    a client is built without explicit credentials.
    """
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = TEST_REGION


@pytest.fixture(scope="session")
def emulator_settings(aws_credentials) -> EmulatorSettings:
    """
    Emulator settings bound to two free local ports.

    Free ports keep the suite independent of any emulator a developer already
    runs on the default ports.
    """
    return EmulatorSettings(
        app_name=TEST_APP_NAME,
        region=TEST_REGION,
        auth_emulator_host="127.0.0.1",
        auth_emulator_port=_free_port(),
        document_emulator_host="127.0.0.1",
        document_emulator_port=_free_port(),
    )


@pytest.fixture(scope="session")
def local_emulators(emulator_settings):
    """Run the auth and document store emulators for the whole session."""
    emulators = start_local_emulators(emulator_settings)
    yield emulators
    emulators.stop()


@pytest.fixture(scope="session")
def harness(local_emulators, emulator_settings):
    """
    Fixture that provides an initialized EmulatorHarness.

    The harness is shared by the session like the process-wide harness the
    integration suites use; its backend app is unregistered at teardown.

    Returns:
        EmulatorHarness: Harness connected to the local emulators
    """
    harness = EmulatorHarness(emulator_settings)
    harness.initialize()
    yield harness
    harness.cleanup_after_tests()
    delete_app(harness.app)


@pytest.fixture
def test_user(harness):
    """Fixture that provides a signed-in disposable user."""
    user = harness.create_test_user()
    yield user
    harness.sign_out()


@pytest.fixture
def document_store(aws_credentials):
    """
    Fixture that provides a DocumentStore on a mocked DynamoDB table.

    Uses moto to create an in-memory table, so store behaviour can be tested
    without the emulators.

    Returns:
        DocumentStore: Store with its table created
    """
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name=TEST_REGION)
        store = DocumentStore(TEST_TABLE_NAME, dynamodb=dynamodb)
        store.ensure_table()
        yield store


@pytest.fixture
def prefs() -> InMemoryPreferenceStore:
    """Fixture that provides an empty mocked preference store."""
    return InMemoryPreferenceStore({})


# Pytest configuration
def pytest_configure(config):
    """
    Pytest configuration function.

    Registers the custom markers used to organize test execution.
    """
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line(
        "markers", "integration: mark test as running against local emulators"
    )
    config.addinivalue_line(
        "markers", "widget: mark test as a UI scenario driven through the Textual pilot"
    )


# Test utilities
def list_documents(collection: CollectionReference) -> List:
    """Utility function returning the snapshots of a collection as a list."""
    return list(collection.stream())


def count_program_tree(store: DocumentStore, user_id: str, program_id: str) -> Dict[str, int]:
    """
    Utility function counting the documents below a seeded program.

    Walks the hierarchy level by level and returns the number of documents
    found at each level.

    Args:
        store: Document store holding the program
        user_id: Owner of the program
        program_id: Id of the program document

    Returns:
        Dict[str, int]: Counts keyed by weeks, workouts, exercises and sets
    """
    counts = {"weeks": 0, "workouts": 0, "exercises": 0, "sets": 0}
    program_ref = store.collection(programs_path(user_id)).document(program_id)

    for week in program_ref.collection("weeks").stream():
        counts["weeks"] += 1
        for workout in week.reference.collection("workouts").stream():
            counts["workouts"] += 1
            for exercise in workout.reference.collection("exercises").stream():
                counts["exercises"] += 1
                counts["sets"] += exercise.reference.collection("sets").count()

    return counts
