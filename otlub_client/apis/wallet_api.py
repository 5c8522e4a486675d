from __future__ import annotations

from otlub_client import endpoints
from otlub_client.http import RequestExecutor
from otlub_client.models import Filters, Outcome, Transaction, Wallet, list_of, query_params


class WalletApi:
    def __init__(self, executor: RequestExecutor):
        self._executor = executor

    async def get_wallet(self, token: str | None) -> Outcome[Wallet]:
        return await self._executor.execute(endpoints.GET_WALLET, Wallet.from_dict, token=token)

    async def get_transactions(self, token: str | None, filters: Filters = None) -> Outcome[list[Transaction]]:
        return await self._executor.execute(
            endpoints.GET_TRANSACTIONS,
            list_of(Transaction.from_dict),
            query=query_params(filters),
            token=token,
        )
