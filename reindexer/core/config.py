"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Only the composition root (reindexer.main and the
store client factory) reads settings; pipeline components receive
explicit values.
"""

import json
from functools import lru_cache
from typing import Any

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from reindexer.shared.enums import BarrierMode, FilterOperator, WriteRefresh


class Settings(BaseSettings):
    """Reindexer settings loaded from environment and .env.

    Defaults search the ``.logstash`` collection for logstash pipelines,
    rewrite the ``pipeline`` field of document ``main1`` and write it to
    the ``test`` collection.
    """

    # App
    app_name: str = "docstore-reindexer"
    app_version: str = "1.0.0"
    debug: bool = False

    # Document store connection
    store_url: str = "http://127.0.0.1:9200"
    store_username: str | None = None
    store_password: SecretStr | None = None
    store_timeout_seconds: float = 30.0

    # Query
    source_collection: str = ".logstash"
    filter_field: str = "pipeline_metadata.type"
    filter_operator: str = FilterOperator.TERM.value
    # A JSON list (FILTER_VALUE='["a", "b"]') for the terms operator.
    filter_value: str | list[str] = "logstash_pipeline"
    track_total_hits: bool = True
    pretty: bool = True
    query_deadline_seconds: float | None = None

    # Selection and transform
    target_document_id: str = "main1"
    transform_field: str = "pipeline"
    transform_marker: str = "##testpipeline2\n"
    # Field whose presence is checked and logged before transforming (not a gate).
    presence_field: str = "username"

    # Write-back
    target_collection: str = "test"
    write_refresh: WriteRefresh = WriteRefresh.TRUE
    write_deadline_seconds: float | None = None
    barrier_mode: BarrierMode = BarrierMode.PER_HIT

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("filter_value", mode="before")
    @classmethod
    def filter_value_as_text(cls, value: Any) -> Any:
        """Keep scalars decoded from the environment (5, true) as their JSON text."""
        if isinstance(value, (bool, int, float)):
            return json.dumps(value)
        return value

    @model_validator(mode="after")
    def validate_store_and_query(self) -> "Settings":
        """Validate connection and query settings.

        - store_url must be an http(s) URL.
        - store_password requires store_username.
        - filter_operator must be a supported query clause; terms takes a
          list filter_value, the other operators a single value.
        - deadlines, when set, must be positive.
        """
        if not self.store_url.startswith(("http://", "https://")):
            raise ValueError(
                f"STORE_URL must start with http:// or https://, got: {self.store_url!r}"
            )
        if self.store_password is not None and not self.store_username:
            raise ValueError("STORE_PASSWORD is set but STORE_USERNAME is empty.")
        if self.filter_operator not in FilterOperator.values():
            raise ValueError(
                f"Invalid filter_operator '{self.filter_operator}'. "
                f"Must be one of: {', '.join(FilterOperator.values())}"
            )
        is_list = isinstance(self.filter_value, list)
        if self.filter_operator == FilterOperator.TERMS.value and not is_list:
            raise ValueError("filter_operator 'terms' requires a list filter_value.")
        if is_list and self.filter_operator not in (
            FilterOperator.TERMS.value,
            FilterOperator.EXISTS.value,
        ):
            raise ValueError(
                f"filter_operator '{self.filter_operator}' takes a single filter_value, got a list."
            )
        for name in ("query_deadline_seconds", "write_deadline_seconds"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive, got: {value}")
        if self.store_timeout_seconds <= 0:
            raise ValueError("store_timeout_seconds must be positive")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
