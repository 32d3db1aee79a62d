"""Unit tests for server settings and how the processes are wired together."""

import httpx
import pytest

from streamchat.main import separate_commands
from streamchat.settings import RunMode, ServerSettings, get_server_settings
from streamchat.ui.client import ConversationClient

SERVER_ENV = ("HOST", "PORT", "UI_PORT", "RUN_MODE", "LOG_LEVEL", "API_BASE_URL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in SERVER_ENV:
        monkeypatch.delenv(name, raising=False)


class TestServerSettings:
    def test_defaults(self) -> None:
        settings = get_server_settings()

        assert settings.port == 8000
        assert settings.ui_port == 8080
        assert settings.run_mode is RunMode.INTEGRATED
        assert settings.log_level == "INFO"
        assert settings.relay_url == "http://localhost:8000"

    def test_relay_url_follows_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "9000")

        assert get_server_settings().relay_url == "http://localhost:9000"

    def test_explicit_base_url_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("API_BASE_URL", "http://relay.internal:7000/")

        assert get_server_settings().relay_url == "http://relay.internal:7000"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("separate", RunMode.SEPARATE),
            (" SEPARATE ", RunMode.SEPARATE),
            ("integrated", RunMode.INTEGRATED),
            ("something-else", RunMode.INTEGRATED),
        ],
    )
    def test_run_mode(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: RunMode
    ) -> None:
        monkeypatch.setenv("RUN_MODE", value)

        assert get_server_settings().run_mode is expected

    def test_out_of_range_port_rejected(self) -> None:
        with pytest.raises(ValueError):
            ServerSettings(port=70000)


class TestClientWiring:
    async def test_client_posts_to_server_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "9000")
        seen: list[httpx.Request] = []

        def relay(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"ok")

        client = ConversationClient(transport=httpx.MockTransport(relay))
        await client.submit("Hi")

        assert str(seen[0].url) == "http://localhost:9000/api/chat"


class TestSeparateMode:
    def test_commands_share_port_settings(self) -> None:
        settings = ServerSettings(port=9100, ui_port=9200)

        api_cmd, ui_cmd, ui_env = separate_commands(settings)

        assert "--reload" not in api_cmd
        assert api_cmd[api_cmd.index("--port") + 1] == "9100"
        assert ui_env["API_BASE_URL"] == "http://localhost:9100"
        assert "--reload" not in ui_cmd
