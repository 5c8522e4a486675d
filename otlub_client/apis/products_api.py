from __future__ import annotations

from otlub_client import endpoints
from otlub_client.http import RequestExecutor
from otlub_client.models import (
    CreateProductRequest,
    Filters,
    Outcome,
    Product,
    list_of,
    query_params,
)


class ProductsApi:
    def __init__(self, executor: RequestExecutor):
        self._executor = executor

    async def get_products(self, token: str | None, filters: Filters = None) -> Outcome[list[Product]]:
        return await self._executor.execute(
            endpoints.GET_PRODUCTS,
            list_of(Product.from_dict),
            query=query_params(filters),
            token=token,
        )

    async def get_product(self, token: str | None, product_id: str) -> Outcome[Product]:
        return await self._executor.execute(
            endpoints.GET_PRODUCT,
            Product.from_dict,
            path_params={"id": product_id},
            token=token,
        )

    async def create_product(self, token: str | None, request: CreateProductRequest) -> Outcome[Product]:
        return await self._executor.execute(
            endpoints.CREATE_PRODUCT,
            Product.from_dict,
            body=request.to_payload(),
            token=token,
        )
