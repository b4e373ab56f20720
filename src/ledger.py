"""Per-client account store."""

from typing import Dict, Iterator, List, Optional, Tuple

from models import ClientAccount


class Ledger:
    """
    Client accounts keyed by client id.
    Iteration order is whatever the mapping holds; callers sort if they care.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create a zeroed, unlocked one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        return self._accounts.get(client_id)

    def items(self) -> Iterator[Tuple[int, ClientAccount]]:
        return iter(list(self._accounts.items()))

    def accounts(self) -> List[ClientAccount]:
        return list(self._accounts.values())

    def __iter__(self) -> Iterator[Tuple[int, ClientAccount]]:
        return self.items()

    def __getitem__(self, client_id: int) -> ClientAccount:
        return self._accounts[client_id]

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, client_id: int) -> bool:
        return client_id in self._accounts
