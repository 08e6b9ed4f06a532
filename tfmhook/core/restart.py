"""Container restarts."""

from __future__ import annotations

from typing import Sequence

from tfmhook.core.runner import Runner
from tfmhook.utils.logging import get_logger

log = get_logger(__name__)


class ServiceRestarter:
    def __init__(self, runner: Runner) -> None:
        self._runner = runner

    async def restart(self, services: Sequence[str]) -> bool:
        """Restart each container in order, stopping at the first failure.

        Unlike repository pulls, one failed restart fails the whole batch and
        the remaining services are left alone.
        """
        if not services:
            log.debug("no_services_configured")
            return True

        for i, service in enumerate(services):
            log.info("service_restart", service=service)
            result = await self._runner.run(["docker", "restart", service])
            if not result.success:
                log.error(
                    "service_restart_failed",
                    service=service,
                    exit_code=result.exit_code,
                    timed_out=result.timed_out,
                    stdout=result.stdout,
                    stderr=result.stderr,
                    skipped=list(services[i + 1:]),
                )
                return False
            log.info("service_restarted", service=service, output=result.stdout)

        return True
