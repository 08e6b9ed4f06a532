"""Verify, pull, restart: one refresh cycle per webhook delivery."""

from __future__ import annotations

import asyncio

from tfmhook.config import Settings
from tfmhook.core.models import OperationOutcome, WebhookResult
from tfmhook.core.restart import ServiceRestarter
from tfmhook.core.runner import Runner
from tfmhook.core.signature import verify_signature
from tfmhook.core.sync import RepositorySyncer
from tfmhook.utils.logging import get_logger

log = get_logger(__name__)


class SignatureMismatch(Exception):
    """The delivery's signature does not match the configured secret."""


class WebhookOrchestrator:
    """Runs the refresh pipeline against an immutable configuration.

    Every repository is attempted even if earlier ones fail; the service
    batch stops at its first failure. Runs are serialized with a lock so two
    deliveries never pull into the same checkout at once.
    """

    def __init__(self, settings: Settings, runner: Runner) -> None:
        self._settings = settings
        self._syncer = RepositorySyncer(runner)
        self._restarter = ServiceRestarter(runner)
        self._lock = asyncio.Lock()

    async def handle(self, body: bytes, signature: str | None) -> WebhookResult:
        if not verify_signature(body, signature, self._settings.github_webhook_secret):
            log.error("invalid_signature", signature_present=bool(signature))
            raise SignatureMismatch()

        if self._lock.locked():
            log.info("refresh_waiting", reason="previous_run_in_progress")

        async with self._lock:
            return await self._run()

    async def _run(self) -> WebhookResult:
        result = WebhookResult()

        for repo in self._settings.repositories:
            succeeded = await self._syncer.sync(repo)
            result.repositories.append(OperationOutcome(succeeded=succeeded, name=repo.name))

        services_ok = await self._restarter.restart(self._settings.docker_services)
        result.services.append(OperationOutcome(succeeded=services_ok))

        log.info(
            "refresh_completed",
            success=result.overall_succeeded,
            repositories_failed=[o.name for o in result.repositories if not o.succeeded],
            services_ok=services_ok,
        )
        return result
