"""Webhook HTTP server using aiohttp."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any

from aiohttp import web

from tfmhook.config import Settings
from tfmhook.core.orchestrator import SignatureMismatch, WebhookOrchestrator
from tfmhook.core.runner import CommandRunner, Runner
from tfmhook.utils.logging import get_logger
from tfmhook.webhooks.handlers import describe_delivery

log = get_logger(__name__)

WEBHOOK_PATH = "/hook/refresh"
HEALTH_PATH = "/health"


def _log_detached_run(run: asyncio.Future[Any]) -> None:
    """Report the outcome of a run whose request handler was cancelled."""
    if run.cancelled():
        return
    exc = run.exception()
    if isinstance(exc, SignatureMismatch):
        log.info("detached_run_rejected")
    elif exc is not None:
        log.error("detached_run_failed", exc_info=exc)
    else:
        log.info("detached_run_completed", success=run.result().overall_succeeded)


class WebhookServer:
    """Receives push webhooks and drives a refresh cycle for each one."""

    def __init__(self, settings: Settings, runner: Runner | None = None) -> None:
        self._settings = settings
        self._orchestrator = WebhookOrchestrator(
            settings, runner or CommandRunner(timeout=settings.command_timeout)
        )
        self._runner: web.AppRunner | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        if not self._settings.has_secret:
            log.warning(
                "webhook_no_secret",
                msg="No webhook secret configured, signature verification is disabled for all requests.",
            )
        app = self._build_app()
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._settings.bind, self._settings.port)
        await site.start()
        log.info(
            "webhook_server_started",
            bind=self._settings.bind,
            port=self._settings.port,
            repositories=len(self._settings.repositories),
            docker_services=len(self._settings.docker_services),
            has_secret=self._settings.has_secret,
        )

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        log.info("webhook_server_stopped")

    # ------------------------------------------------------------------
    # App construction
    # ------------------------------------------------------------------

    def _build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post(WEBHOOK_PATH, self._handle_webhook)
        app.router.add_get(HEALTH_PATH, self._handle_health)
        app.router.add_get("/", self._handle_root)
        return app

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def _handle_webhook(self, request: web.Request) -> web.Response:
        # Signature is computed over the exact bytes received
        body = await request.read()
        signature = request.headers.get("X-Hub-Signature-256")

        try:
            payload: Any = await request.json()
        except ValueError:
            return web.json_response({"error": "Invalid JSON"}, status=400)

        delivery = describe_delivery(request.headers.get("X-GitHub-Event", "unknown"), payload)
        log.info(
            "webhook_received",
            event_type=delivery.event_type,
            repository=delivery.repository,
            summary=delivery.summary,
        )
        log.debug("webhook_details", signature=signature, payload_preview=body[:200].decode("utf-8", errors="replace"))

        run = asyncio.ensure_future(self._orchestrator.handle(body, signature))
        try:
            # Clients that hang up do not abort a run halfway
            result = await asyncio.shield(run)
        except asyncio.CancelledError:
            run.add_done_callback(_log_detached_run)
            raise
        except SignatureMismatch:
            return web.json_response({"error": "Invalid signature"}, status=401)
        except Exception:
            log.exception("webhook_processing_failed")
            return web.json_response(
                {"error": "Internal server error", "message": "Webhook processing failed"},
                status=500,
            )

        status = 200 if result.overall_succeeded else 500
        log.info("webhook_processed", status=status)
        return web.json_response(
            {
                "message": (
                    "Webhook processed successfully"
                    if result.overall_succeeded
                    else "Webhook processed with errors"
                ),
                "results": result.to_dict(),
            },
            status=status,
        )

    async def _handle_health(self, request: web.Request) -> web.Response:
        return web.json_response(
            {
                "status": "healthy",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "config": {
                    "repositories": len(self._settings.repositories),
                    "dockerServices": len(self._settings.docker_services),
                    "hasSecret": self._settings.has_secret,
                },
            }
        )

    async def _handle_root(self, request: web.Request) -> web.Response:
        return web.json_response(
            {
                "message": "TFM-hook server is running",
                "endpoints": {
                    "webhook": WEBHOOK_PATH,
                    "health": HEALTH_PATH,
                },
            }
        )
