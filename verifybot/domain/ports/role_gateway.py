from typing import Protocol


class RoleGrantPort(Protocol):
    async def grant_role(self, guild_id: str, account_id: str, role_id: str) -> bool:
        """Attach role to the guild member. True only on confirmed success."""
