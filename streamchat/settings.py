"""Process settings for serving the relay and the chat page."""

import os
from enum import Enum

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class RunMode(str, Enum):
    INTEGRATED = "integrated"
    SEPARATE = "separate"


def _run_mode_from_env() -> RunMode:
    # Anything but "separate" serves both from one process.
    if os.getenv("RUN_MODE", "").strip().lower() == RunMode.SEPARATE.value:
        return RunMode.SEPARATE
    return RunMode.INTEGRATED


class ServerSettings(BaseModel):
    """Where the API and the UI listen, and how the UI reaches the API.

    Attributes:
        host: Interface both servers bind to.
        port: API port (also the UI port in integrated mode).
        ui_port: UI port in separate mode.
        run_mode: Serve API and UI from one process or two.
        log_level: Level name for logging and uvicorn.
        api_base_url: Explicit relay URL for the UI; derived from ``port``
            when unset.
    """

    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "8000")), ge=1, le=65535)
    ui_port: int = Field(
        default_factory=lambda: int(os.getenv("UI_PORT", "8080")), ge=1, le=65535
    )
    run_mode: RunMode = Field(default_factory=_run_mode_from_env)
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    api_base_url: str | None = Field(default_factory=lambda: os.getenv("API_BASE_URL") or None)

    @property
    def relay_url(self) -> str:
        """Base URL the chat page posts conversations to."""
        if self.api_base_url:
            return self.api_base_url.rstrip("/")
        return f"http://localhost:{self.port}"


def get_server_settings() -> ServerSettings:
    """Read server settings from the environment."""
    return ServerSettings()
