class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class UnauthorizedRequest(DomainError):
    """Inbound event signature is missing or does not verify."""

    pass


class InvalidOrExpiredCode(DomainError):
    """No live pending verification exists for the submitted code."""

    pass


class CodeOwnershipMismatch(DomainError):
    """The code is live but was issued to a different account."""

    def __init__(self, code: str, account_id: str) -> None:
        super().__init__(f"code not issued to account {account_id}")
        self.code = code
        self.account_id = account_id


class GrantFailed(DomainError):
    """The platform did not attach the role. The code is left intact."""

    pass


class NotificationFailed(DomainError):
    """Direct message delivery failed. Logged only, never surfaced."""

    pass


class UnknownInteraction(DomainError):
    """Command, component or modal identifier we do not handle."""

    def __init__(self, kind: str, identifier: str | None = None) -> None:
        super().__init__(f"unknown {kind}: {identifier!r}")
        self.kind = kind
        self.identifier = identifier


class CodeStoreUnavailable(DomainError):
    """The code store could not be read or written; nothing was granted."""

    pass
