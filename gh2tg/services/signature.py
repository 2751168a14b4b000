"""GitHub webhook signature checks."""

from __future__ import annotations

import logging

from gh2tg.utils import gh_verify

logger = logging.getLogger(__name__)


class SignatureVerifier:
    """Checks ``X-Hub-Signature-256`` against the shared webhook secret."""

    def __init__(self, secret: str) -> None:
        self._secret = secret or ""

    def verify(self, raw_body: bytes | str, supplied_signature: str | None) -> bool:
        """
        Return True only when ``supplied_signature`` matches the HMAC of the
        exact request bytes. Never raises.
        """
        if not self._secret:
            logger.warning("GitHub webhook secret not configured")
            return False
        if not isinstance(supplied_signature, str):
            return False
        try:
            body = raw_body.encode() if isinstance(raw_body, str) else bytes(raw_body)
            return gh_verify(self._secret, body, supplied_signature)
        except (TypeError, ValueError, UnicodeError) as exc:
            logger.error("Signature comparison failed: %s", exc)
            return False
