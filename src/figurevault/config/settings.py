"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (FIGUREVAULT_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=5000, description="Server port")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class DeploymentSettings(BaseModel):
    """Deployment tier and test markers.

    These three flags are the only inputs to search mode selection. They are
    read once into settings and handed to the search service; nothing in the
    matching code consults the process environment directly.
    """

    environment: str = Field(default="development", description="Deployment tier: development, test, production")
    test_mode: str | None = Field(default=None, description="Test-mode marker ('memory' forces local search)")
    integration_test: bool = Field(default=False, description="Set while integration tests run")

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_environment(cls, v: Any) -> str:
        return str(v or "development").strip().lower()


class SearchSettings(BaseModel):
    """Search behavior and managed index configuration."""

    hosts: list[str] = Field(default_factory=lambda: ["https://localhost:9200"], description="Managed index host URLs")
    username: str | None = Field(default=None, description="Managed index basic-auth username")
    password: str | None = Field(default=None, description="Managed index basic-auth password")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates of the managed index")
    autocomplete_index: str = Field(
        default="figures_search",
        description="Index used by the autocomplete and partial operations",
    )
    search_index: str = Field(default="figures", description="Index used by the general search operation")
    default_limit: int = Field(default=10, ge=1, le=50, description="Default page size")
    max_limit: int = Field(default=50, ge=1, le=50, description="Page size cap (never above 50)")
    min_query_length: int = Field(default=2, ge=2, description="Minimum query length (at least 2)")
    extra: dict[str, Any] = Field(default_factory=dict, description="Extra AsyncOpenSearch client options")

    @field_validator("hosts", mode="before")
    @classmethod
    def _parse_hosts(cls, v: Any) -> list[str]:
        """Parse hosts from JSON string (env var) or list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            # Single host as plain string
            return [v] if v else []
        return list(v)


class StoreSettings(BaseModel):
    """Record store configuration."""

    seed_file: str | None = Field(default=None, description="YAML/JSON file of figure records to preload")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the FIGUREVAULT_ prefix.
    Nested settings use double underscores: FIGUREVAULT_SERVER__PORT=9090

    Example:
        FIGUREVAULT_DEPLOYMENT__ENVIRONMENT=production
        FIGUREVAULT_SEARCH__HOSTS='["https://search.internal:9200"]'
        FIGUREVAULT_SEARCH__MAX_LIMIT=50
    """

    model_config = {
        "env_prefix": "FIGUREVAULT_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    # Application metadata
    app_name: str = Field(default="FigureVault", description="Application name")

    # Component settings
    server: ServerSettings = Field(default_factory=ServerSettings)
    deployment: DeploymentSettings = Field(default_factory=DeploymentSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file take precedence over environment variables.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
