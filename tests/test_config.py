import pytest
from pydantic import ValidationError

from core.config import DEFAULT_GITHUB_REPO_URL, Config, UpstreamSettings, check_upstream, load_config
from core.exceptions import ConfigurationError


def test_defaults_without_environment():
    config = load_config({})

    assert config.public_settings() == {
        "appTitle": "Agent Chat",
        "appDescription": "Agent Chat UX by LangChain",
        "allowAttachments": False,
        "githubRepoUrl": DEFAULT_GITHUB_REPO_URL,
        "proxyApiUrl": "http://localhost:3000/api",
        "assistantId": "agent",
    }
    assert config.upstream == UpstreamSettings()
    assert config.proxy.port == 3000
    assert config.proxy.route_marker == "/api/"
    assert config.upstream.timeout is None


def test_environment_overrides():
    config = load_config(
        {
            "NEXT_PUBLIC_APP_TITLE": "Support Bot",
            "NEXT_PUBLIC_APP_DESCRIPTION": "Internal helpdesk",
            "NEXT_PUBLIC_ALLOW_ATTACHMENTS": "true",
            "NEXT_PUBLIC_GITHUB_REPO_URL": "https://github.com/acme/bot",
            "NEXT_PUBLIC_PROXY_API_URL": "https://bot.acme.dev/api",
            "NEXT_PUBLIC_ASSISTANT_ID": "helpdesk",
            "LANGGRAPH_API_URL": "https://graph.acme.dev",
            "BASIC_AUTH_USERNAME": "acme",
            "BASIC_AUTH_PASSWORD": "s3cret",
            "PORT": "8080",
            "PROXY_TIMEOUT": "30",
            "PROXY_DEBUG": "1",
        }
    )

    assert config.app.app_title == "Support Bot"
    assert config.app.app_description == "Internal helpdesk"
    assert config.app.allow_attachments is True
    assert config.app.github_repo_url == "https://github.com/acme/bot"
    assert config.app.proxy_api_url == "https://bot.acme.dev/api"
    assert config.app.assistant_id == "helpdesk"
    assert config.upstream.base_url == "https://graph.acme.dev"
    assert config.has_basic_auth
    assert config.proxy.port == 8080
    assert config.proxy.debug is True
    assert config.upstream.timeout == 30.0


def test_empty_values_fall_back_to_defaults():
    config = load_config({"NEXT_PUBLIC_APP_TITLE": "", "NEXT_PUBLIC_ASSISTANT_ID": "", "PORT": ""})

    assert config.app.app_title == "Agent Chat"
    assert config.app.assistant_id == "agent"
    assert config.proxy.port == 3000


@pytest.mark.parametrize("value", ["false", "0", "no", "whatever"])
def test_attachment_flag_is_false_unless_truthy(value):
    assert load_config({"NEXT_PUBLIC_ALLOW_ATTACHMENTS": value}).app.allow_attachments is False


def test_basic_auth_requires_both_credentials():
    assert not load_config({"BASIC_AUTH_USERNAME": "user"}).has_basic_auth
    assert not load_config({"BASIC_AUTH_PASSWORD": "pass"}).has_basic_auth


def test_route_marker_ignores_trailing_slash():
    config = load_config({"PROXY_ROUTE_PREFIX": "/langgraph/"})

    assert config.proxy.route_marker == "/langgraph/"


def test_config_is_frozen():
    config = load_config({})

    with pytest.raises(ValidationError):
        config.upstream.base_url = "https://elsewhere.example"


def test_load_config_reads_process_environment(monkeypatch):
    monkeypatch.setenv("LANGGRAPH_API_URL", "http://localhost:2024")

    assert load_config().upstream.base_url == "http://localhost:2024"


def test_check_upstream():
    check_upstream(Config(upstream=UpstreamSettings(base_url="http://localhost:2024")))

    with pytest.raises(ConfigurationError):
        check_upstream(Config())
