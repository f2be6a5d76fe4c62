"""
Configuration for the FitTrack emulator harness.

Settings are read from ``FITTRACK_*`` environment variables (or a ``.env``
file) so CI and local runs can move the emulators without code changes. The
defaults match the ports the emulators listen on in a standard local setup.

Classes:
    EmulatorSettings: Emulator endpoints and placeholder project credentials
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class EmulatorSettings(BaseSettings):
    """Emulator endpoints and placeholder credentials loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="FITTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Placeholder project identity; emulators accept any credentials
    app_name: str = "[DEFAULT]"
    project_id: str = "demo-project"
    region: str = "us-east-1"
    access_key_id: str = "test-api-key"
    secret_access_key: str = "test-app-id"

    # Emulator endpoints
    auth_emulator_host: str = "localhost"
    auth_emulator_port: int = 9099
    document_emulator_host: str = "localhost"
    document_emulator_port: int = 8080

    # Startup checks
    verify_emulators: bool = True
    connect_timeout: float = 2.0

    @property
    def auth_endpoint(self) -> str:
        """Auth emulator as ``host:port``."""
        return f"{self.auth_emulator_host}:{self.auth_emulator_port}"

    @property
    def document_endpoint(self) -> str:
        """Document store emulator as ``host:port``."""
        return f"{self.document_emulator_host}:{self.document_emulator_port}"


@lru_cache
def get_settings() -> EmulatorSettings:
    """Get cached settings instance."""
    return EmulatorSettings()
