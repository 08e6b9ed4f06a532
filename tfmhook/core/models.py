"""Result models for one orchestration run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class OperationOutcome:
    succeeded: bool
    # None for the service batch, which reports one outcome for all services
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name
        data["success"] = self.succeeded
        return data


@dataclass
class WebhookResult:
    repositories: list[OperationOutcome] = field(default_factory=list)
    services: list[OperationOutcome] = field(default_factory=list)

    @property
    def overall_succeeded(self) -> bool:
        return all(o.succeeded for o in (*self.repositories, *self.services))

    def to_dict(self) -> dict[str, Any]:
        return {
            "repositories": [o.to_dict() for o in self.repositories],
            "services": [o.to_dict() for o in self.services],
            "success": self.overall_succeeded,
        }
