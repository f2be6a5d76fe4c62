"""
Backend app registry for the FitTrack application.

A ``BackendApp`` bundles the boto3 session of one project with the endpoints
its auth and document clients should talk to. Apps are registered per process
by name, mirroring how mobile backend SDKs keep a default app: initializing a
name twice raises ``DuplicateAppError``, and re-pointing a client at an
emulator raises ``EmulatorAlreadyConfiguredError``.

Classes:
    BackendOptions: Project identity and placeholder credentials
    BackendApp: Session and client factory for one project

Functions:
    initialize_app: Register a new app
    get_app: Look up a registered app
    delete_app: Unregister an app
"""

import logging
from typing import Dict, Optional

import boto3
from pydantic import BaseModel, Field

from ..exceptions import DuplicateAppError, EmulatorAlreadyConfiguredError
from .auth_service import AuthService
from .document_store import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "[DEFAULT]"

_apps: Dict[str, "BackendApp"] = {}


class BackendOptions(BaseModel):
    """Project identity and credentials used to build the boto3 session."""

    project_id: str = Field(..., min_length=1)
    access_key_id: str = Field(..., min_length=1)
    secret_access_key: str = Field(..., min_length=1, repr=False)
    region: str = "us-east-1"

    @property
    def documents_table(self) -> str:
        return f"{self.project_id}-documents"

    @property
    def user_pool_name(self) -> str:
        return f"{self.project_id}-users"


class BackendApp:
    """
    Session and lazily created clients for one backend project.

    Attributes:
        name: Registry name of the app
        options: Project identity and credentials
        session: Boto3 session built from the options
        auth_endpoint: Auth emulator URL, None for the real service
        document_endpoint: Document store emulator URL, None for the real service
    """

    def __init__(self, name: str, options: BackendOptions):
        self.name = name
        self.options = options
        self.session = boto3.session.Session(
            aws_access_key_id=options.access_key_id,
            aws_secret_access_key=options.secret_access_key,
            region_name=options.region,
        )
        self.auth_endpoint: Optional[str] = None
        self.document_endpoint: Optional[str] = None
        self._auth: Optional[AuthService] = None
        self._document_store: Optional[DocumentStore] = None

    def use_auth_emulator(self, host: str, port: int) -> None:
        """
        Point the auth client at a local emulator.

        Raises:
            EmulatorAlreadyConfiguredError: If an endpoint was already set or
                the auth client is already in use
        """
        if self.auth_endpoint is not None or self._auth is not None:
            raise EmulatorAlreadyConfiguredError(
                f"Auth client of app {self.name!r} is already configured"
            )
        self.auth_endpoint = f"http://{host}:{port}"

    def use_document_store_emulator(self, host: str, port: int) -> None:
        """
        Point the document store client at a local emulator.

        Raises:
            EmulatorAlreadyConfiguredError: If an endpoint was already set or
                the document store is already in use
        """
        if self.document_endpoint is not None or self._document_store is not None:
            raise EmulatorAlreadyConfiguredError(
                f"Document store of app {self.name!r} is already configured"
            )
        self.document_endpoint = f"http://{host}:{port}"

    def auth(self) -> AuthService:
        """Auth service of this app, provisioned on first use."""
        if self._auth is None:
            client = self.session.client("cognito-idp", endpoint_url=self.auth_endpoint)
            self._auth = AuthService.provision(client, self.options.user_pool_name)
        return self._auth

    def document_store(self) -> DocumentStore:
        """Document store of this app; the table is created on first use."""
        if self._document_store is None:
            dynamodb = self.session.resource(
                "dynamodb", endpoint_url=self.document_endpoint
            )
            store = DocumentStore(self.options.documents_table, dynamodb=dynamodb)
            store.ensure_table()
            self._document_store = store
        return self._document_store


def initialize_app(options: BackendOptions, name: str = DEFAULT_APP_NAME) -> BackendApp:
    """
    Register a new backend app.

    Raises:
        DuplicateAppError: If an app with this name already exists
    """
    if name in _apps:
        raise DuplicateAppError(f"Backend app {name!r} already exists")

    app = BackendApp(name, options)
    _apps[name] = app
    logger.debug("Initialized backend app %s for project %s", name, options.project_id)
    return app


def get_app(name: str = DEFAULT_APP_NAME) -> BackendApp:
    """
    Look up a registered backend app.

    Raises:
        ValueError: If no app with this name was initialized
    """
    try:
        return _apps[name]
    except KeyError:
        raise ValueError(f"Backend app {name!r} has not been initialized") from None


def delete_app(app: BackendApp) -> None:
    """Unregister an app so its name can be initialized again."""
    _apps.pop(app.name, None)
