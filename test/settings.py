"""
Test Configuration Settings.

This module defines the test environment configuration using Pydantic's BaseSettings.
Pydantic automatically loads configuration from the test/.env file via env_file configuration.

Environment variables use double underscore (__) as delimiters for nested properties.
For example: DATABASE__URL maps to test_settings.database.url
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class TestDatabaseConfig(BaseModel):
    """Database configuration container for tests."""

    url: str = Field(
        default="sqlite+aiosqlite:///:memory:",
        description="Test database connection URL (defaults to in-memory SQLite)",
    )
    enable_postgres_tests: bool = Field(
        default=False,
        description="Enable PostgreSQL-based tests (requires PostgreSQL running)",
    )

    model_config = ConfigDict(strict=False)


class TestGoogleAIConfig(BaseModel):
    """Real model access for smoke tests; unset in CI."""

    api_key: Optional[SecretStr] = Field(default=None, description="Google API key for smoke tests")
    model: str = Field(default="gemini-2.5-flash", description="Model used by smoke tests")

    model_config = ConfigDict(strict=False)


class TestExecutionConfig(BaseModel):
    """Test execution configuration."""

    run_smoke_tests: bool = Field(
        default=False,
        description="Enable tests that call real external services",
    )

    model_config = ConfigDict(strict=False)


# =====================================================================
# Main Test Settings Class
# =====================================================================


class TestSettings(BaseSettings):
    """
    Test environment settings model.

    All properties are automatically bound from environment variables and .env file
    in the test directory. Pydantic's BaseSettings handles dotenv loading automatically
    via model_config.

    Environment variables use double underscore (__) as delimiters for nested properties.
    Examples:
    - GOOGLE_AI__API_KEY → test_settings.google_ai.api_key
    - DATABASE__ENABLE_POSTGRES_TESTS → test_settings.database.enable_postgres_tests
    - TEST__RUN_SMOKE_TESTS → test_settings.test.run_smoke_tests
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    test: TestExecutionConfig = Field(
        default_factory=TestExecutionConfig,
        description="Test execution configuration",
    )
    database: TestDatabaseConfig = Field(
        default_factory=TestDatabaseConfig,
        description="Database configuration (SQLite, PostgreSQL)",
    )
    google_ai: TestGoogleAIConfig = Field(
        default_factory=TestGoogleAIConfig,
        description="Google AI configuration for smoke tests",
    )


test_settings = TestSettings()
