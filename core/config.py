"""Configuration models and loading."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from core.exceptions import ConfigurationError

DEFAULT_GITHUB_REPO_URL = "https://github.com/devs-talha/langgraph-agent-ui"

_TRUTHY = ("1", "true", "yes", "on")


class ProxySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = "127.0.0.1"
    port: int = 3000
    route_prefix: str = "/api"
    debug: bool = False

    @property
    def route_marker(self) -> str:
        """Path segment separating the local prefix from the forwarded path."""
        return self.route_prefix.rstrip("/") + "/"


class UpstreamSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str = ""
    username: str = ""
    password: str = ""
    timeout: float | None = None


class AppSettings(BaseModel):
    """Display strings and endpoints consumed by the chat UI."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    app_title: str = Field("Agent Chat", alias="appTitle")
    app_description: str = Field("Agent Chat UX by LangChain", alias="appDescription")
    allow_attachments: bool = Field(False, alias="allowAttachments")
    github_repo_url: str = Field(DEFAULT_GITHUB_REPO_URL, alias="githubRepoUrl")
    proxy_api_url: str = Field("http://localhost:3000/api", alias="proxyApiUrl")
    assistant_id: str = Field("agent", alias="assistantId")


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    proxy: ProxySettings = Field(default_factory=ProxySettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    app: AppSettings = Field(default_factory=AppSettings)

    @property
    def has_basic_auth(self) -> bool:
        return bool(self.upstream.username and self.upstream.password)

    def public_settings(self) -> dict[str, str | bool]:
        """Application settings keyed by their camelCase names."""
        return self.app.model_dump(by_alias=True)


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Build the configuration from environment variables with fallbacks."""
    env = os.environ if environ is None else environ

    def get(name: str, default: str = "") -> str:
        return env.get(name) or default

    timeout = get("PROXY_TIMEOUT")
    return Config(
        proxy=ProxySettings(
            host=get("HOST", "127.0.0.1"),
            port=int(get("PORT", "3000")),
            route_prefix=get("PROXY_ROUTE_PREFIX", "/api"),
            debug=get("PROXY_DEBUG").lower() in _TRUTHY,
        ),
        upstream=UpstreamSettings(
            base_url=get("LANGGRAPH_API_URL"),
            username=get("BASIC_AUTH_USERNAME"),
            password=get("BASIC_AUTH_PASSWORD"),
            timeout=float(timeout) if timeout else None,
        ),
        app=AppSettings(
            app_title=get("NEXT_PUBLIC_APP_TITLE", "Agent Chat"),
            app_description=get("NEXT_PUBLIC_APP_DESCRIPTION", "Agent Chat UX by LangChain"),
            allow_attachments=get("NEXT_PUBLIC_ALLOW_ATTACHMENTS").lower() in _TRUTHY,
            github_repo_url=get("NEXT_PUBLIC_GITHUB_REPO_URL", DEFAULT_GITHUB_REPO_URL),
            proxy_api_url=get("NEXT_PUBLIC_PROXY_API_URL", "http://localhost:3000/api"),
            assistant_id=get("NEXT_PUBLIC_ASSISTANT_ID", "agent"),
        ),
    )


def check_upstream(config: Config) -> None:
    """Raise ConfigurationError when no upstream base URL is configured."""
    if not config.upstream.base_url:
        raise ConfigurationError("LANGGRAPH_API_URL is not set; requests will fail with 500")
