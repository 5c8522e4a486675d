from __future__ import annotations

from dataclasses import dataclass
import string
from types import MappingProxyType


@dataclass(frozen=True)
class Endpoint:
    name: str
    method: str
    path: str
    has_body: bool = False
    has_query: bool = False
    enveloped: bool = True
    unit: bool = False

    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(
            field_name
            for _, field_name, _, _ in string.Formatter().parse(self.path)
            if field_name
        )

    def format_path(self, path_params: dict[str, str] | None = None) -> str:
        return self.path.format(**(path_params or {}))


LOGIN = Endpoint("login", "POST", "auth/login", has_body=True, enveloped=False)
REGISTER = Endpoint("register", "POST", "auth/register", has_body=True)
LOGOUT = Endpoint("logout", "POST", "auth/logout", enveloped=False, unit=True)

GET_CURRENT_USER = Endpoint("get_current_user", "GET", "user/me")
UPDATE_USER = Endpoint("update_user", "PUT", "user/me", has_body=True)

GET_PRODUCTS = Endpoint("get_products", "GET", "products", has_query=True)
GET_PRODUCT = Endpoint("get_product", "GET", "products/{id}")
CREATE_PRODUCT = Endpoint("create_product", "POST", "products", has_body=True)

GET_ORDERS = Endpoint("get_orders", "GET", "orders", has_query=True)
CREATE_ORDER = Endpoint("create_order", "POST", "orders", has_body=True)

GET_STOCK = Endpoint("get_stock", "GET", "stock/{productId}")

GET_WALLET = Endpoint("get_wallet", "GET", "ewallet")
GET_TRANSACTIONS = Endpoint("get_transactions", "GET", "ewallet/transactions", has_query=True)

HEALTH_CHECK = Endpoint("health_check", "GET", "health", enveloped=False)

ENDPOINTS = MappingProxyType(
    {
        endpoint.name: endpoint
        for endpoint in (
            LOGIN,
            REGISTER,
            LOGOUT,
            GET_CURRENT_USER,
            UPDATE_USER,
            GET_PRODUCTS,
            GET_PRODUCT,
            CREATE_PRODUCT,
            GET_ORDERS,
            CREATE_ORDER,
            GET_STOCK,
            GET_WALLET,
            GET_TRANSACTIONS,
            HEALTH_CHECK,
        )
    }
)
