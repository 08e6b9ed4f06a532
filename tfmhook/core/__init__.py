"""Core refresh pipeline."""

from tfmhook.core.models import OperationOutcome, WebhookResult
from tfmhook.core.orchestrator import SignatureMismatch, WebhookOrchestrator
from tfmhook.core.restart import ServiceRestarter
from tfmhook.core.runner import CommandResult, CommandRunner, Runner
from tfmhook.core.signature import sign_payload, verify_signature
from tfmhook.core.sync import RepositorySyncer

__all__ = [
    "OperationOutcome",
    "WebhookResult",
    "SignatureMismatch",
    "WebhookOrchestrator",
    "ServiceRestarter",
    "CommandResult",
    "CommandRunner",
    "Runner",
    "sign_payload",
    "verify_signature",
    "RepositorySyncer",
]
