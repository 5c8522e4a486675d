from __future__ import annotations

from otlub_client import endpoints
from otlub_client.http import RequestExecutor
from otlub_client.models import Outcome, StockInfo


class StockApi:
    def __init__(self, executor: RequestExecutor):
        self._executor = executor

    async def get_stock(self, token: str | None, product_id: str) -> Outcome[StockInfo]:
        return await self._executor.execute(
            endpoints.GET_STOCK,
            StockInfo.from_dict,
            path_params={"productId": product_id},
            token=token,
        )
