"""Shared fakes for the refresh pipeline tests."""

from __future__ import annotations

from typing import Sequence

import pytest

from tfmhook.core.runner import CommandResult


class FakeRunner:
    """Records every command and fails those touching a configured name.

    A git pull fails when the basename of its working directory is in
    *fail*; a docker restart fails when the service name is in *fail*.
    """

    def __init__(self, fail: Sequence[str] = ()) -> None:
        self.fail = set(fail)
        self.calls: list[tuple[list[str], str | None]] = []

    async def run(self, args: Sequence[str], cwd: str | None = None) -> CommandResult:
        self.calls.append((list(args), cwd))
        target = cwd.rstrip("/").rsplit("/", 1)[-1] if cwd else args[-1]
        if target in self.fail:
            return CommandResult(exit_code=1, stderr=f"{target} failed")
        return CommandResult(exit_code=0, stdout=f"{target} ok")

    @property
    def restarted(self) -> list[str]:
        return [args[-1] for args, _ in self.calls if args[:2] == ["docker", "restart"]]

    @property
    def pulled(self) -> list[str]:
        return [cwd.rsplit("/", 1)[-1] for args, cwd in self.calls if args[:2] == ["git", "pull"]]


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def repo_dirs(tmp_path):
    """Three empty checkout directories named alpha, beta and gamma."""
    dirs = {}
    for name in ("alpha", "beta", "gamma"):
        d = tmp_path / name
        d.mkdir()
        dirs[name] = d
    return dirs
