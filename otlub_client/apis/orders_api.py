from __future__ import annotations

from otlub_client import endpoints
from otlub_client.http import RequestExecutor
from otlub_client.models import CreateOrderRequest, Filters, Order, Outcome, list_of, query_params


class OrdersApi:
    def __init__(self, executor: RequestExecutor):
        self._executor = executor

    async def get_orders(self, token: str | None, filters: Filters = None) -> Outcome[list[Order]]:
        return await self._executor.execute(
            endpoints.GET_ORDERS,
            list_of(Order.from_dict),
            query=query_params(filters),
            token=token,
        )

    async def create_order(self, token: str | None, request: CreateOrderRequest) -> Outcome[Order]:
        return await self._executor.execute(
            endpoints.CREATE_ORDER,
            Order.from_dict,
            body=request.to_payload(),
            token=token,
        )
