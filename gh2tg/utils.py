"""the beautiful world start from here."""

from __future__ import annotations

import hashlib
import hmac

SIGNATURE_PREFIX = "sha256="


def gh_signature(secret: str, body: bytes) -> str:
    """Return the ``X-Hub-Signature-256`` value GitHub would send for ``body``."""
    mac = hmac.new(secret.encode(), msg=body, digestmod=hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{mac}"


def gh_verify(secret: str, body: bytes, signature_header: str | None) -> bool:
    """
    Verify GitHub webhook HMAC signature (X-Hub-Signature-256).

    The whole header, prefix included, is compared in constant time.

    Returns
    -------
    bool
        True if valid, False otherwise.
    """
    if not signature_header or not signature_header.startswith(SIGNATURE_PREFIX):
        return False
    expected = gh_signature(secret, body)
    return hmac.compare_digest(expected.encode(), signature_header.encode())


def first_line(text: str | None) -> str:
    if not text:
        return ""
    lines = text.splitlines()
    return lines[0] if lines else ""


def truncate(text: str, limit: int, ellipsis: str = "...") -> str:
    """
    Cap ``text`` at ``limit`` characters.

    With an ellipsis the result still fits in ``limit``:
    ``truncate("abcdef", 5)`` → ``"ab..."``.
    """
    if len(text) <= limit:
        return text
    if not ellipsis:
        return text[:limit]
    return text[: max(limit - len(ellipsis), 0)] + ellipsis


def repo_tag(full_name: str) -> str:
    """``'octo-org/hello-world'`` → ``'#hello-world'``."""
    return "#" + full_name.rsplit("/", 1)[-1]
