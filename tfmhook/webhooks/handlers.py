"""Delivery metadata extraction for logging."""

from __future__ import annotations

from typing import Any

from tfmhook.webhooks.models import DeliveryInfo


def describe_delivery(event_type: str, payload: Any) -> DeliveryInfo:
    """Summarize a GitHub delivery for the request log.

    The payload is never validated; anything that is not a push-shaped
    object just produces a generic summary.
    """
    if not isinstance(payload, dict):
        return DeliveryInfo(
            event_type=event_type,
            repository="unknown",
            summary=f"GitHub {event_type} event",
        )

    repository = payload.get("repository")
    repo = repository.get("full_name", "unknown") if isinstance(repository, dict) else "unknown"

    if event_type == "push":
        commits = payload.get("commits") or []
        count = len(commits) if isinstance(commits, list) else 0
        branch = str(payload.get("ref", "")).removeprefix("refs/heads/")
        pusher_info = payload.get("pusher")
        pusher = pusher_info.get("name", "unknown") if isinstance(pusher_info, dict) else "unknown"
        return DeliveryInfo(
            event_type=event_type,
            repository=repo,
            summary=f"{pusher} pushed {count} commit(s) to {repo}/{branch}",
            branch=branch,
            pusher=pusher,
            commit_count=count,
        )

    if event_type == "ping":
        summary = f"Ping for {repo}"
    else:
        summary = f"GitHub {event_type} event on {repo}"

    return DeliveryInfo(event_type=event_type, repository=repo, summary=summary)
