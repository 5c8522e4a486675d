from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Coroutine, TypeVar

from otlub_client.apis import AuthApi, HealthApi, OrdersApi, ProductsApi, StockApi, UserApi, WalletApi
from otlub_client.auth import TokenStore
from otlub_client.config import SdkConfig
from otlub_client.errors import StorageError, TransportError
from otlub_client.http import RequestExecutor
from otlub_client.models import (
    CreateOrderRequest,
    CreateProductRequest,
    Failure,
    Filters,
    HealthResponse,
    LoginResponse,
    Order,
    Outcome,
    Product,
    RegisterRequest,
    StockInfo,
    Success,
    Transaction,
    UpdateUserRequest,
    User,
    Wallet,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class OtlubService:
    def __init__(self, config: SdkConfig, token_store: TokenStore, executor: RequestExecutor):
        self._config = config
        self._token_store = token_store
        self._executor = executor
        self._auth_api = AuthApi(executor)
        self._user_api = UserApi(executor)
        self._products_api = ProductsApi(executor)
        self._orders_api = OrdersApi(executor)
        self._stock_api = StockApi(executor)
        self._wallet_api = WalletApi(executor)
        self._health_api = HealthApi(executor)
        self._tasks: set[asyncio.Task] = set()
        self._destroyed = False
        self._closing: asyncio.Task | None = None

    @property
    def config(self) -> SdkConfig:
        return self._config

    @property
    def token_store(self) -> TokenStore:
        return self._token_store

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def closed(self) -> bool:
        return self._executor.client.is_closed

    def is_authenticated(self) -> bool:
        return self._current_token() is not None

    def get_stored_token(self) -> str | None:
        return self._current_token()

    def clear_token(self) -> None:
        self._token_store.clear()

    async def login(self, email: str, password: str) -> Outcome[LoginResponse]:
        return await self._run(self._login(email, password))

    async def _login(self, email: str, password: str) -> Outcome[LoginResponse]:
        outcome = await self._auth_api.login(email, password)
        if isinstance(outcome, Success):
            try:
                await asyncio.to_thread(self._token_store.save, outcome.value.token)
            except OSError as exc:
                logger.error("Login succeeded but the token could not be stored: %s", exc)
                return Failure(StorageError(f"Could not store auth token: {exc}"))
            logger.info("Signed in as %s", outcome.value.user.email)
        return outcome

    async def register(self, request: RegisterRequest) -> Outcome[User]:
        return await self._run(self._with_token(self._auth_api.register, request))

    async def logout(self) -> Outcome[None]:
        return await self._run(self._logout())

    async def _logout(self) -> Outcome[None]:
        try:
            return await self._auth_api.logout(await self._read_token())
        finally:
            try:
                await asyncio.to_thread(self._token_store.clear)
            except OSError as exc:
                logger.error("Could not clear stored auth token: %s", exc)

    async def get_current_user(self) -> Outcome[User]:
        return await self._run(self._with_token(self._user_api.get_current_user))

    async def update_user(self, request: UpdateUserRequest) -> Outcome[User]:
        return await self._run(self._with_token(self._user_api.update_user, request))

    async def get_products(self, filters: Filters = None) -> Outcome[list[Product]]:
        return await self._run(self._with_token(self._products_api.get_products, filters))

    async def get_product(self, product_id: str) -> Outcome[Product]:
        return await self._run(self._with_token(self._products_api.get_product, product_id))

    async def create_product(self, request: CreateProductRequest) -> Outcome[Product]:
        return await self._run(self._with_token(self._products_api.create_product, request))

    async def get_orders(self, filters: Filters = None) -> Outcome[list[Order]]:
        return await self._run(self._with_token(self._orders_api.get_orders, filters))

    async def create_order(self, request: CreateOrderRequest) -> Outcome[Order]:
        return await self._run(self._with_token(self._orders_api.create_order, request))

    async def get_stock(self, product_id: str) -> Outcome[StockInfo]:
        return await self._run(self._with_token(self._stock_api.get_stock, product_id))

    async def get_wallet(self) -> Outcome[Wallet]:
        return await self._run(self._with_token(self._wallet_api.get_wallet))

    async def get_transactions(self, filters: Filters = None) -> Outcome[list[Transaction]]:
        return await self._run(self._with_token(self._wallet_api.get_transactions, filters))

    async def health_check(self) -> Outcome[HealthResponse]:
        return await self._run(self._with_token(self._health_api.health_check))

    def destroy(self) -> None:
        self._destroyed = True
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            loop = task.get_loop()
            if loop.is_closed():
                continue
            loop.call_soon_threadsafe(task.cancel)
        if pending:
            logger.info("Cancelled %d in-flight request(s)", len(pending))

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        if self._closing is None and not self.closed:
            self._closing = loop.create_task(self._executor.client.aclose())

    async def aclose(self) -> None:
        self.destroy()
        if self._closing is not None:
            await self._closing
        else:
            await self._executor.client.aclose()

    async def __aenter__(self) -> "OtlubService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _run(self, call: Coroutine[Any, Any, Outcome[T]]) -> Outcome[T]:
        if self._destroyed:
            call.close()
            return Failure(TransportError("Session has been destroyed"))

        task = asyncio.ensure_future(call)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return await task

    async def _with_token(self, api_call: Callable[..., Awaitable[Outcome[T]]], *args: Any) -> Outcome[T]:
        return await api_call(await self._read_token(), *args)

    async def _read_token(self) -> str | None:
        return await asyncio.to_thread(self._current_token)

    def _current_token(self) -> str | None:
        try:
            return self._token_store.get()
        except OSError as exc:
            logger.warning("Could not read stored auth token: %s", exc)
            return None
