"""Server management commands."""

import subprocess
import sys

import click

from status_page.cli.utils import error, info, success, warning
from status_page.core.settings import get_app_settings

APP_PATH = "status_page.app.main:app"
LOG_LEVELS = ["critical", "error", "warning", "info", "debug", "trace"]


@click.group(name="server")
def server() -> None:
    """Server management commands."""


def _run_uvicorn(cmd: list[str]) -> None:
    try:
        success("Starting uvicorn...")
        subprocess.run(cmd, check=False)
    except KeyboardInterrupt:
        info("\nShutting down server...")
    except OSError as e:
        error(f"Failed to start server: {e}")
        sys.exit(1)


@server.command()
@click.option("--host", default=None, help="Host to bind (default: APP_HOST)")
@click.option("--port", default=None, type=int, help="Port to bind (default: APP_PORT)")
@click.option("--reload/--no-reload", default=True, help="Enable auto-reload on code changes")
@click.option("--log-level", default="info", type=click.Choice(LOG_LEVELS), help="Log level")
def dev(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Run development server with auto-reload."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    info(f"Server will run at: http://{host}:{port}")
    info(f"Environment: {settings.environment}")
    info(f"Auto-reload: {'enabled' if reload else 'disabled'}")

    cmd = [
        "uvicorn",
        APP_PATH,
        "--host",
        host,
        "--port",
        str(port),
        "--log-level",
        log_level,
    ]
    if reload:
        cmd.append("--reload")
    _run_uvicorn(cmd)


@server.command()
@click.option("--host", default=None, help="Host to bind (default: APP_HOST)")
@click.option("--port", default=None, type=int, help="Port to bind (default: APP_PORT)")
@click.option("--workers", default=2, type=int, help="Number of worker processes")
@click.option("--log-level", default="warning", type=click.Choice(LOG_LEVELS), help="Log level")
def prod(host: str | None, port: int | None, workers: int, log_level: str) -> None:
    """Run production server with multiple workers."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    if settings.debug:
        warning("APP_DEBUG is enabled; disable it for production")

    info(f"Server will run at: http://{host}:{port} with {workers} worker(s)")
    _run_uvicorn(
        [
            "uvicorn",
            APP_PATH,
            "--host",
            host,
            "--port",
            str(port),
            "--workers",
            str(workers),
            "--log-level",
            log_level,
            "--proxy-headers",
        ]
    )
