"""Configuration models used by the SVG loader.

LoaderOptions

`source` (`str`)
: URL, inline `<svg>` markup, or `data:image/svg+xml` URI to load. Used
  verbatim as the cache key.

`use_cache` (`bool`)
: Share and reuse fetched content across consumers. When `False` every load
  issues its own request and never reads or writes the cache.

`base_url` (`str`)
: Prefix inserted in rewritten `url(...)` references.

`uniquify_ids` (`bool`)
: Append the instance hash to identifier-bearing attributes.

`unique_hash` (`str | None`)
: Fixed suffix used for uniquification. A random token is generated once per
  consumer when omitted.

`title` / `description` (`str | None`)
: Replace any existing `<title>` / `<desc>` with the given markup.

`pre_processor` (`Callable[[str], str] | None`)
: Transform applied to the raw text before parsing.

`on_ready` (`Callable[[str, bool], None] | None`)
: Called with the source and whether the content came from the cache.

`on_error` (`Callable[[Exception], None] | None`)
: Called with the classified error after the status change.

`loader` / `fallback` (`str`)
: Markup rendered while loading, and after a failure.

`attributes` (`dict[str, str]`)
: Extra attributes merged onto the rendered root element.

RuntimeSettings

`environment` (`str`)
: Read from `INLINESVG_ENV`. Error diagnostics are silenced in `production`.

`http_timeout` (`float`)
: Read from `INLINESVG_HTTP_TIMEOUT`, seconds before a request is abandoned.

`user_agent` (`str | None`)
: Read from `INLINESVG_HTTP_USER_AGENT`.
"""

from __future__ import annotations

from collections.abc import Callable
import os

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoaderOptions(BaseModel):
    """Options accepted by an :class:`~inlinesvg.loader.InlineSVG` consumer."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    source: str = ""
    use_cache: bool = True
    base_url: str = ""
    uniquify_ids: bool = False
    unique_hash: str | None = None
    title: str | None = None
    description: str | None = None
    pre_processor: Callable[[str], str] | None = None
    on_ready: Callable[[str, bool], None] | None = None
    on_error: Callable[[Exception], None] | None = None
    loader: str = ""
    fallback: str = ""
    attributes: dict[str, str] = Field(default_factory=dict)

    @field_validator("unique_hash")
    @classmethod
    def _reject_blank_hash(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value


class RuntimeSettings(BaseModel):
    """Process-level settings resolved from the environment."""

    model_config = ConfigDict(extra="forbid")

    environment: str = "development"
    http_timeout: float = Field(default=10.0, gt=0)
    user_agent: str | None = None

    @property
    def production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @classmethod
    def from_env(cls) -> RuntimeSettings:
        """Build settings from ``INLINESVG_*`` environment variables."""
        values: dict[str, object] = {}
        env = os.environ.get("INLINESVG_ENV")
        if env:
            values["environment"] = env
        timeout = os.environ.get("INLINESVG_HTTP_TIMEOUT")
        if timeout:
            values["http_timeout"] = timeout
        agent = os.environ.get("INLINESVG_HTTP_USER_AGENT")
        if agent and agent.strip():
            values["user_agent"] = agent.strip()
        return cls.model_validate(values)


__all__ = ["LoaderOptions", "RuntimeSettings"]
