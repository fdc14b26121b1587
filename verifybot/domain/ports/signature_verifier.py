from typing import Protocol


class SignatureVerifier(Protocol):
    def __call__(
        self,
        raw_body: bytes,
        signature: str | None,
        timestamp: str | None,
        public_key: str,
    ) -> bool: ...
