"""tfmhook entry point: wires settings into the webhook server and runs it."""

from __future__ import annotations

import asyncio
import signal
import sys
from pathlib import Path
from typing import Any

import click

from tfmhook.config import Settings, load_settings
from tfmhook.core.signature import sign_payload
from tfmhook.utils.logging import get_logger, setup_logging
from tfmhook.webhooks.server import WebhookServer

log = get_logger(__name__)


async def run(settings: Settings) -> None:
    server = WebhookServer(settings)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        log.info("shutdown_signal")
        stop_event.set()

    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _signal_handler)

    await server.start()

    try:
        if sys.platform == "win32":
            while not stop_event.is_set():
                await asyncio.sleep(1)
        else:
            await stop_event.wait()
    except KeyboardInterrupt:
        pass
    finally:
        await server.stop()


@click.group()
def cli() -> None:
    """Pull repositories and restart containers when a push webhook arrives."""


@cli.command()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--port", type=int, default=None, help="Port to listen on")
def serve(config_path: str | None, log_level: str | None, port: int | None) -> None:
    """Start the webhook server."""
    settings = load_settings(config_path)
    overrides: dict[str, Any] = {}
    if log_level:
        overrides["log_level"] = log_level
    if port is not None:
        overrides["port"] = port
    if overrides:
        settings = settings.model_copy(update=overrides)
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    asyncio.run(run(settings))


@cli.command()
@click.argument("payload", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
def sign(payload: Path, config_path: str | None) -> None:
    """Print the X-Hub-Signature-256 value for a payload file."""
    settings = load_settings(config_path)
    if not settings.has_secret:
        raise click.ClickException("GITHUB_WEBHOOK_SECRET is not configured")
    click.echo(sign_payload(payload.read_bytes(), settings.github_webhook_secret))


if __name__ == "__main__":
    cli()
