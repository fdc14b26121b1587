from dataclasses import dataclass


@dataclass(frozen=True)
class IssuedCode:
    code: str
    account_id: str
    ttl_seconds: int


@dataclass(frozen=True)
class Account:
    id: str
    username: str | None = None

    def __post_init__(self):
        if not self.id or not self.id.strip():
            raise ValueError("account id is required")


@dataclass(frozen=True)
class GrantTarget:
    """Single guild/role pair a deployment grants on successful verification."""

    guild_id: str
    role_id: str


@dataclass(frozen=True)
class KeyLayout:
    """Key naming inside the code store."""

    code_prefix: str = "code:"
    account_prefix: str = "user:"

    def code(self, code: str) -> str:
        return f"{self.code_prefix}{code}"

    def account(self, account_id: str) -> str:
        return f"{self.account_prefix}{account_id}"
