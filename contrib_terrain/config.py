"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CONTRIB_TERRAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # GitHub API
    github_token: str = Field(default="", description="GitHub personal access token")
    github_api_url: str = Field(default="https://api.github.com/graphql", description="GraphQL endpoint")
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="plain", description="Logging format (plain or json)")

    # Output
    output_dir: str = Field(default=".", description="Directory for rendered SVG files")


settings = Settings()
