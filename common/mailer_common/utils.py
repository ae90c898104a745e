"""Small helpers shared by all mailer services."""

from __future__ import annotations

import re
import secrets
import string
import time
from datetime import UTC, datetime

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_SUFFIX_LENGTH = 9


def utc_now() -> datetime:
    return datetime.now(UTC)


def validate_email(address: str) -> bool:
    """Return True if *address* looks like ``local@domain.tld``.

    ``fullmatch`` so a trailing newline is rejected, as the ``$`` anchor
    alone would let it through.
    """
    return EMAIL_PATTERN.fullmatch(address) is not None


def generate_mail_id(now_ms: int | None = None) -> str:
    """Build a mail id of the form ``mail_<epoch-millis>_<9 x [a-z0-9]>``.

    Uniqueness is probabilistic only: two ids minted in the same
    millisecond collide with probability 36**-9 (about 1 in 10**14).
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"mail_{now_ms}_{suffix}"
