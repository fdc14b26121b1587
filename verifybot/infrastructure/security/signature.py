from __future__ import annotations

import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Signature-Ed25519"
TIMESTAMP_HEADER = "X-Signature-Timestamp"


def verify_request_signature(
    raw_body: bytes,
    signature: str | None,
    timestamp: str | None,
    public_key: str,
) -> bool:
    """
    Ed25519 check of ``timestamp + raw_body``; signature and key are hex.
    Any malformed input is a failed verification, never an exception.
    """
    if not signature or not timestamp or not public_key:
        return False
    try:
        key = Ed25519PublicKey.from_public_bytes(bytes.fromhex(public_key))
        key.verify(bytes.fromhex(signature), timestamp.encode("utf-8") + raw_body)
    except (InvalidSignature, ValueError) as exc:
        logger.debug("signature rejected", extra={"reason": type(exc).__name__})
        return False
    return True
