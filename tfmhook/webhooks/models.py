"""Webhook event models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DeliveryInfo:
    event_type: str
    repository: str
    summary: str
    branch: str = ""
    pusher: str = ""
    commit_count: int = 0
