"""Repository checkout refresh."""

from __future__ import annotations

from tfmhook.config import RepositoryTarget
from tfmhook.core.runner import Runner
from tfmhook.utils.logging import get_logger
from tfmhook.utils.platform import normalize_path

log = get_logger(__name__)


class RepositorySyncer:
    def __init__(self, runner: Runner) -> None:
        self._runner = runner

    async def sync(self, target: RepositoryTarget) -> bool:
        """Pull ``target.branch`` from origin into the checkout at ``target.path``.

        A missing directory fails immediately without running git. Failed
        pulls are not retried or rolled back.
        """
        log.info("repository_pull", repository=target.name, path=target.path)

        # An empty path would resolve to the server's own working directory
        path = normalize_path(target.path) if target.path.strip() else None
        if path is None or not path.is_dir():
            log.error("repository_path_missing", repository=target.name, path=target.path)
            return False

        result = await self._runner.run(
            ["git", "pull", "origin", target.branch], cwd=str(path)
        )
        if not result.success:
            log.error(
                "repository_pull_failed",
                repository=target.name,
                exit_code=result.exit_code,
                timed_out=result.timed_out,
                stdout=result.stdout,
                stderr=result.stderr,
            )
            return False

        log.info("repository_pulled", repository=target.name, output=result.stdout)
        return True
