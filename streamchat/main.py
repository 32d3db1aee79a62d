"""Command-line entry point.

Integrated mode serves the relay and the NiceGUI page from one uvicorn
process on PORT. Separate mode runs the relay on PORT and the page on
UI_PORT as two child processes, with the page pointed at the relay through
API_BASE_URL.
"""

import logging
import os
import subprocess
import sys
import time

from streamchat.settings import RunMode, ServerSettings, get_server_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def run_integrated(settings: ServerSettings) -> None:
    """Mount the chat page on the API app and serve both on one port."""
    import uvicorn
    from nicegui import ui

    from streamchat.api.app import create_app
    from streamchat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()
    ui.run_with(
        app,
        title="streamchat",
        favicon="💬",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "streamchat-secret"),
    )

    logger.info(f"Chat UI on http://localhost:{settings.port}/, relay at {settings.relay_url}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def separate_commands(settings: ServerSettings) -> tuple[list[str], list[str], dict[str, str]]:
    """Build the API and UI child commands and the UI's environment."""
    api_cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "streamchat.api.app:app",
        "--host",
        settings.host,
        "--port",
        str(settings.port),
        "--log-level",
        settings.log_level.lower(),
    ]
    ui_cmd = [sys.executable, "-c", "from streamchat.ui.chat_page import main; main()"]
    ui_env = {**os.environ, "API_BASE_URL": settings.relay_url}
    return api_cmd, ui_cmd, ui_env


def run_separate(settings: ServerSettings) -> None:
    """Run the relay and the chat page as two processes until either exits."""
    api_cmd, ui_cmd, ui_env = separate_commands(settings)
    logger.info(f"Relay on port {settings.port}, chat UI on port {settings.ui_port}")

    processes = [subprocess.Popen(api_cmd), subprocess.Popen(ui_cmd, env=ui_env)]
    try:
        while all(proc.poll() is None for proc in processes):
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in processes:
            proc.terminate()
        for proc in processes:
            proc.wait()


def main() -> None:
    settings = get_server_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting streamchat in {settings.run_mode.value} mode")

    if settings.run_mode is RunMode.SEPARATE:
        run_separate(settings)
    else:
        run_integrated(settings)


if __name__ == "__main__":
    main()
