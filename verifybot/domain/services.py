# verifybot/domain/services.py
from __future__ import annotations

import hmac
import secrets

CODE_LENGTH = 6
CODE_MIN = 100_000
CODE_MAX = 999_999


def generate_verification_code() -> str:
    """6-digit numeric code in [100000, 999999], leading digit never zero."""
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


def is_well_formed_code(code: str) -> bool:
    return len(code) == CODE_LENGTH and code.isascii() and code.isdigit()


def secure_compare(a: str, b: str) -> bool:
    """
    Constant-time comparison for identifiers read back from the store.
    Accepts strings; falls back to bytes if needed.
    """
    try:
        return hmac.compare_digest(a, b)
    except TypeError:
        return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
