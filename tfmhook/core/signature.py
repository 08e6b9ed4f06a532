"""GitHub-style HMAC-SHA256 webhook signatures."""

from __future__ import annotations

import hashlib
import hmac

from tfmhook.utils.logging import get_logger

log = get_logger(__name__)

SIGNATURE_PREFIX = "sha256="


def sign_payload(body: bytes, secret: str) -> str:
    """Return the ``X-Hub-Signature-256`` header value for *body*."""
    return SIGNATURE_PREFIX + hmac.new(
        secret.encode(), body, hashlib.sha256
    ).hexdigest()


def verify_signature(body: bytes, signature: str | None, secret: str | None) -> bool:
    """Validate a GitHub webhook HMAC-SHA256 signature.

    With no secret configured every request is accepted; this is the
    documented unauthenticated mode. With a secret configured, a missing
    signature is a failure.

    The comparison is done on bytes with ``hmac.compare_digest`` so it is
    constant-time, and a length mismatch or a non-ASCII header simply
    compares unequal.
    """
    if not secret:
        log.debug("signature_check_skipped", reason="no_secret_configured")
        return True
    if not signature:
        return False
    expected = sign_payload(body, secret).encode()
    return hmac.compare_digest(expected, signature.encode("utf-8", errors="replace"))
