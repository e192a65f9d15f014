"""Weak, non-reversible reviewer fingerprints."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping


def fingerprint_hash(user_agent: str, language: str) -> str:
    """Return the SHA-256 hex digest of ``user_agent + language``.

    The same browser yields the same value across sessions. It identifies
    nobody and is only stored alongside reviews for later abuse analysis.
    """
    signal = f"{user_agent or ''}{language or ''}"
    return hashlib.sha256(signal.encode("utf-8")).hexdigest()


def fingerprint_from_headers(headers: Mapping[str, str]) -> str:
    """Derive a fingerprint from request headers.

    Uses ``User-Agent`` and the first ``Accept-Language`` tag, which are the
    closest server-side equivalents of the browser's user agent and locale.
    """
    user_agent = headers.get("user-agent", "")
    accept_language = headers.get("accept-language", "")
    language = accept_language.split(",", 1)[0].split(";", 1)[0].strip()
    return fingerprint_hash(user_agent, language)
